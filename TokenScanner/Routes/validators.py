from typing import Any, Dict, Optional, Tuple

from TokenScanner.Business.ProfileAnalyzer import DEFAULT_MIN_TOKENS
from TokenScanner.Utility.url import parse_username

# HTTP status returned alongside a report carrying this error kind
ERROR_STATUS = {
    "no_data": 200,
    "not_found": 404,
    "unauthorized": 401,
    "rate_limited": 429,
    "upstream": 502,
    "network": 502,
    "internal": 500,
}


def validate_analyze_payload(data: Dict[str, Any]) -> Tuple[str, int, Optional[str]]:
    username = data.get("username")
    if not username or not isinstance(username, str):
        raise ValueError("Username is required")
    username = parse_username(username)
    if not username:
        raise ValueError("Username is required")
    min_tokens = data.get("minTokens", DEFAULT_MIN_TOKENS)
    if isinstance(min_tokens, bool) or not isinstance(min_tokens, int) or min_tokens < 0:
        raise ValueError("minTokens must be a non-negative integer")
    github_token = data.get("githubToken")
    if github_token is not None and not isinstance(github_token, str):
        raise ValueError("githubToken must be a string")
    return username, min_tokens, github_token


def status_for_report(report: Dict[str, Any]) -> int:
    kind = report.get("error_kind")
    if not kind:
        return 200
    return ERROR_STATUS.get(kind, 500)
