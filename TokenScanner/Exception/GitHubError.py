"""GitHub API errors raised by the client, one class per failure the caller distinguishes."""
from typing import Optional


class GitHubError(Exception):

    def __init__(self, message: str, status_code: int):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

"""Raised when the user (or resource) does not exist."""
class GitHubNotFoundError(GitHubError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, 404)

"""Raised when GitHub returns 401 Unauthorized (invalid token)."""
class GitHubUnauthorizedError(GitHubError):
    def __init__(self, message: str = "Unauthorized: Invalid GitHub token"):
        super().__init__(message, 401)

"""Raised when GitHub answers 403, i.e. the request quota is exhausted.
        Attributes:
            reset_time: optional epoch seconds when the quota resets
"""
class GitHubRateLimitError(GitHubError):
    def __init__(self, reset_time: Optional[int] = None,
                 message: str = "Rate limit exceeded. Please provide a GitHub token or wait."):
        super().__init__(message, 429)
        self.reset_time = reset_time

"""Raised for any other non-success status returned by GitHub."""
class GitHubAPIError(GitHubError):
    def __init__(self, message: str, status_code: int):
        super().__init__(message, status_code)

"""Raised when GitHub could not be reached at all (DNS, connection, timeout)."""
class GitHubNetworkError(GitHubError):
    def __init__(self, message: str = "Network error while fetching from GitHub"):
        super().__init__(message, 503)
