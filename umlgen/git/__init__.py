"""Git integrations: per-file history and remote checkouts."""

from .history import DisabledGitHistory, GitHistory
from .remote import RepositoryCloner, is_remote_reference

__all__ = ["DisabledGitHistory", "GitHistory", "RepositoryCloner", "is_remote_reference"]
