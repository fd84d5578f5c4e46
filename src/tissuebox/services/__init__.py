"""External helper programs used by the session and one-shot commands."""

from tissuebox.services._run import HelperError
from tissuebox.services.publish_service import publish_tissue
from tissuebox.services.vcs_service import commit_tissue, exclude_from_git, has_git_repository

__all__ = [
    "HelperError",
    "commit_tissue",
    "exclude_from_git",
    "has_git_repository",
    "publish_tissue",
]
