"""
Repository identifier parsing.

The router captures everything after the leading '/' as one greedy
parameter; this turns it into an owner/name pair.
"""

from freshness.exceptions import MalformedRepositoryPath
from freshness.models import RepositoryRef


def parse_repo_path(path: str) -> RepositoryRef:
    """
    Split a captured path on its first '/'.

    The first token is the owner and the remainder, including any further
    '/' segments, is the name. Surrounding slashes are ignored.

    Args:
        path: Raw path segment, e.g. "octocat/hello-world".

    Returns:
        RepositoryRef for the path.

    Raises:
        MalformedRepositoryPath: If the owner or the name is empty.
    """
    owner, _, name = (path or "").strip("/").partition("/")
    owner = owner.strip()
    name = name.strip()

    if not owner or not name:
        raise MalformedRepositoryPath(path)

    return RepositoryRef(owner=owner, name=name)
