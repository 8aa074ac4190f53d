from .errors import NoMainBranchFound, NoRemoteFound
from .repository import RepositoryConfig

REMOTE_PREFERENCE = ("upstream", "origin")
MAIN_BRANCH_PREFERENCE = ("main", "master")


def resolve_remote(config: RepositoryConfig) -> str:
    """
    Select the remote to pull from.

    A fork usually has `origin` pointing at the user's copy and `upstream` at
    the canonical project, so `upstream` wins when it is configured.

    Parameters
    ----------
    config : RepositoryConfig
        The repository configuration.

    Returns
    -------
    str
        "upstream" or "origin".

    Raises
    ------
    NoRemoteFound
        If neither remote has at least one URL entry.
    """
    for name in REMOTE_PREFERENCE:
        urls = config.remotes.get(name)
        # Length only: a single empty URL still counts.
        if urls is not None and len(urls) != 0:
            return name
    raise NoRemoteFound()


def resolve_main_branch(config: RepositoryConfig) -> str:
    """
    Select the main branch, "main" first and "master" second.

    Raises
    ------
    NoMainBranchFound
        If the config has neither branch.
    """
    for key in MAIN_BRANCH_PREFERENCE:
        branch = config.branches.get(key)
        if branch is not None:
            return branch.name
    raise NoMainBranchFound()
