"""
Git Repository Update
=====================

Keeps a directory full of git clones up to date: every repository found below
a root gets its main branch force-checked-out and pulled from its upstream
(or origin) remote.
"""

from .errors import (
    BranchResolutionError,
    CheckoutError,
    ConfigError,
    GitRepoUpdateError,
    NoMainBranchFound,
    NoRemoteFound,
    OpenError,
    PullError,
    RemoteResolutionError,
    RepositoryUpdateError,
    SetupError,
    TraversalError,
    WorktreeError,
)
from .repository import BranchConfig, RepositoryConfig, open_repository
from .resolvers import resolve_main_branch, resolve_remote
from .scanner import scan
from .updater import UpdateOutcome, process_repository, update_repository

__all__ = [
    "BranchConfig",
    "BranchResolutionError",
    "CheckoutError",
    "ConfigError",
    "GitRepoUpdateError",
    "NoMainBranchFound",
    "NoRemoteFound",
    "OpenError",
    "PullError",
    "RemoteResolutionError",
    "RepositoryConfig",
    "RepositoryUpdateError",
    "SetupError",
    "TraversalError",
    "UpdateOutcome",
    "WorktreeError",
    "open_repository",
    "process_repository",
    "resolve_main_branch",
    "resolve_remote",
    "scan",
    "update_repository",
]
