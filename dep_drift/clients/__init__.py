"""Registry and Git remote clients for DepDrift."""

from .forge import ForgeClient
from .git import GitRemoteClient, parse_ls_remote

__all__ = [
    "ForgeClient",
    "GitRemoteClient",
    "parse_ls_remote",
]
