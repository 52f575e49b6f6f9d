# GitHub API integration module

from .github_api import GitHubClient

__all__ = ["GitHubClient"]
