"""
Recursive walk of a repository tree through the contents endpoint.
"""
from typing import List
import logging

from TokenScanner.GitHub.GitHubClient import GitHubClient
from TokenScanner.Model.FileEntry import FileEntry

logger = logging.getLogger(__name__)

MAX_DEPTH = 5
MAX_FILES = 1000
SKIP_DIRS = frozenset({"node_modules", ".git", "dist", "build", ".next", "vendor", "target", "__pycache__"})


def _is_excluded(path: str) -> bool:
    return path.rsplit("/", 1)[-1] in SKIP_DIRS


class TreeWalker:
    def __init__(self, client: GitHubClient, max_depth: int = MAX_DEPTH, max_files: int = MAX_FILES):
        self.client = client
        self.max_depth = max_depth
        self.max_files = max_files

    def walk(self, owner: str, repo: str, path: str = "", depth: int = 0, seen: int = 0) -> List[FileEntry]:
        """Return the file entries reachable from `path`.

        `seen` is the number of files already collected by the caller. The
        file cap is checked before each entry, so a walk can overshoot it by
        at most the size of one directory listing.
        """
        if depth > self.max_depth or seen > self.max_files:
            return []
        if path and _is_excluded(path):
            return []

        listing = self.client.get_contents(owner, repo, path)
        if not listing.ok:
            logger.warning("Skipping %s/%s/%s: %s", owner, repo, path, listing.error)
            return []

        files: List[FileEntry] = []
        for item in listing.value_or([]):
            if seen + len(files) > self.max_files:
                break
            entry = FileEntry.from_api(item)
            if _is_excluded(entry.path):
                continue
            if entry.is_file:
                files.append(entry)
            elif entry.is_dir:
                files.extend(self.walk(owner, repo, entry.path, depth + 1, seen + len(files)))
        return files
