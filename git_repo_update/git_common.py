"""
Common helpers shared by the scanner.

The small filesystem predicates that decide what a repository root is and
where the walk may descend.
"""

from pathlib import Path


def is_git_repository(path: Path) -> bool:
    """
    Checks if a directory is a repository root.

    Only a `.git` directory counts; a `.git` file (linked worktree, submodule)
    does not.

    Args:
        path: Path to the directory to check

    Returns:
        True if the directory directly contains a `.git` directory
    """
    git_dir = path / ".git"
    return git_dir.is_dir()


def get_subdirectories(path: Path) -> list[Path]:
    """
    Returns all subdirectories of the specified path, sorted by name.

    Symbolic links are skipped, so the walk can never loop.

    Args:
        path: Path where to search for subdirectories

    Returns:
        List of found subdirectories

    Raises:
        OSError: If the directory cannot be listed
    """
    subdirectories = []
    for item in path.iterdir():
        if item.is_symlink():
            continue
        if item.is_dir():
            subdirectories.append(item)
    return sorted(subdirectories, key=lambda item: item.name)
