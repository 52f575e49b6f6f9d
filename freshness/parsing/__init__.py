# Request path parsing module

from .repo_path import parse_repo_path

__all__ = ["parse_repo_path"]
