"""
GitHub REST client: repository listing, contents listing and raw file download.
Listing failures raise typed `GitHubError`s; contents and downloads return a
`FetchResult` so callers can degrade a failed subtree or file explicitly.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import codecs
import logging
import time
import requests
import urllib3

from TokenScanner.Exception.GitHubError import (
    GitHubAPIError,
    GitHubNetworkError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubUnauthorizedError,
)
from TokenScanner.Model.FetchResult import FetchResult
from TokenScanner.Model.Repository import Repository

logger = logging.getLogger(__name__)

DEFAULT_API_ROOT = "https://api.github.com"
USER_AGENT = "GitHub-Repo-Analyzer"
PER_PAGE = 100
DOWNLOAD_TIMEOUT = 10
MAX_CONTENT_CHARS = 500_000
CHUNK_SIZE = 64 * 1024


class GitHubClient:
    def __init__(self, token: Optional[str] = None, session: Optional[requests.Session] = None,
                 api_root: Optional[str] = None, timeout: float = DOWNLOAD_TIMEOUT):
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        })
        if token:
            self.session.headers.update({"Authorization": f"token {token}"})
        self.base = (api_root or DEFAULT_API_ROOT).rstrip("/")
        self.timeout = timeout

    @property
    def authenticated(self) -> bool:
        return "Authorization" in self.session.headers

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise GitHubNetworkError(f"Network error while requesting {url}: {exc}") from exc

    def _handle_response(self, response: requests.Response, not_found_message: str) -> Any:
        if response.status_code == 404:
            raise GitHubNotFoundError(not_found_message)
        elif response.status_code == 401:
            raise GitHubUnauthorizedError()
        elif response.status_code == 403:
            reset = response.headers.get("X-RateLimit-Reset")
            raise GitHubRateLimitError(reset_time=int(reset) if reset and reset.isdigit() else None)
        elif response.status_code != 200:
            raise GitHubAPIError(f"Error fetching repos: {response.status_code}", response.status_code)
        return response.json()

    def list_user_repos(self, username: str) -> List[Repository]:
        """Return every repository owned by `username`, forks excluded.

        Pages of PER_PAGE are requested until an empty or short page comes back.
        """
        url = f"{self.base}/users/{username}/repos"
        repos: List[Repository] = []
        page = 1
        while True:
            params = {"page": page, "per_page": PER_PAGE, "type": "owner", "sort": "updated", "direction": "desc"}
            response = self._get(url, params=params)
            page_repos = self._handle_response(response, f"User '{username}' not found")
            if not page_repos:
                break
            repos.extend(Repository.from_api(item) for item in page_repos if not item.get("fork"))
            if len(page_repos) < PER_PAGE:
                break
            page += 1
        logger.info("Found %d non-fork repositories for %s", len(repos), username)
        return repos

    def get_contents(self, owner: str, repo: str, path: str = "") -> FetchResult[List[Dict[str, Any]]]:
        url = f"{self.base}/repos/{owner}/{repo}/contents/{quote(path)}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            return FetchResult.failure(f"request failed: {exc}")
        if response.status_code != 200:
            return FetchResult.failure(f"status {response.status_code}")
        try:
            contents = response.json()
        except ValueError:
            return FetchResult.failure("invalid JSON in contents response")
        # a file path answers with a single descriptor instead of a listing
        if isinstance(contents, dict):
            contents = [contents]
        return FetchResult.success(contents)

    def download_file(self, download_url: str) -> FetchResult[str]:
        """Download a file's text, giving up after DOWNLOAD_TIMEOUT seconds of wall-clock time.

        The body is read incrementally and reading stops once MAX_CONTENT_CHARS
        characters are decoded, so oversized files are never held whole.
        """
        deadline = time.monotonic() + DOWNLOAD_TIMEOUT
        try:
            response = self.session.get(download_url, timeout=DOWNLOAD_TIMEOUT, stream=True)
        except requests.exceptions.RequestException as exc:
            return FetchResult.failure(f"download failed: {exc}")
        try:
            if response.status_code != 200:
                return FetchResult.failure(f"status {response.status_code}")
            return self._read_text(response, deadline)
        except (requests.exceptions.RequestException, urllib3.exceptions.HTTPError) as exc:
            return FetchResult.failure(f"download failed: {exc}")
        finally:
            response.close()

    def _read_text(self, response: requests.Response, deadline: float) -> FetchResult[str]:
        try:
            decoder = codecs.getincrementaldecoder(response.encoding or "utf-8")(errors="replace")
        except LookupError:
            decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        parts: List[str] = []
        length = 0
        while length < MAX_CONTENT_CHARS:
            if time.monotonic() > deadline:
                return FetchResult.failure("timed out")
            # read1 returns whatever has arrived instead of waiting for a full chunk
            chunk = response.raw.read1(CHUNK_SIZE, decode_content=True)
            if not chunk:
                parts.append(decoder.decode(b"", final=True))
                break
            piece = decoder.decode(chunk)
            parts.append(piece)
            length += len(piece)
        return FetchResult.success("".join(parts)[:MAX_CONTENT_CHARS])

    def rate_limit(self) -> Dict[str, Any]:
        url = f"{self.base}/rate_limit"
        data = self._handle_response(self._get(url), "Rate limit endpoint not found")
        return data.get("resources", {}).get("core", data.get("rate", {}))
