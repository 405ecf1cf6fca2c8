"""GitHub profile URL utilities."""
import re

_PROFILE_RE = re.compile(r"github\.com/([^/?#]+)")


def parse_username(value: str) -> str:
    """Reduce a profile URL such as https://github.com/octocat?tab=repos to `octocat`."""
    value = value.strip()
    if "github.com/" in value:
        match = _PROFILE_RE.search(value)
        if match:
            return match.group(1)
    return value
