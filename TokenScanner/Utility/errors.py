"""Map pipeline failures to report error kinds and human-readable messages."""
from TokenScanner.Exception.GitHubError import (
    GitHubError,
    GitHubNetworkError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubUnauthorizedError,
)

NO_REPOSITORIES_MESSAGE = "No repositories found or user does not exist"
GENERIC_MESSAGE = "Failed to analyze GitHub profile. Please check the username and try again."

_MESSAGES = (
    ("error fetching repos", "GitHub returned an error while listing repositories. Please try again later."),
    ("rate limit", "GitHub API rate limit exceeded. Please provide a GitHub token or wait before retrying."),
    ("not found", "GitHub user not found. Please check the username and try again."),
    ("forbidden", "Access to the GitHub API was forbidden. Check the GitHub token permissions."),
    ("unauthorized", "GitHub rejected the provided token. Check that it is valid."),
    ("fetch", "Network error while contacting GitHub. Please try again."),
    ("network", "Network error while contacting GitHub. Please try again."),
    ("connection", "Network error while contacting GitHub. Please try again."),
    ("timed out", "GitHub did not answer in time. Please try again."),
)


def describe_error(message: str) -> str:
    lowered = (message or "").lower()
    for needle, text in _MESSAGES:
        if needle in lowered:
            return text
    return GENERIC_MESSAGE


def error_kind_for(exc: Exception) -> str:
    if isinstance(exc, GitHubNotFoundError):
        return "not_found"
    if isinstance(exc, GitHubRateLimitError):
        return "rate_limited"
    if isinstance(exc, GitHubUnauthorizedError):
        return "unauthorized"
    if isinstance(exc, GitHubNetworkError):
        return "network"
    if isinstance(exc, GitHubError):
        return "upstream"
    return "internal"
