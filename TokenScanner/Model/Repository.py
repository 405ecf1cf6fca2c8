from dataclasses import dataclass
from typing import Any, Dict, Optional

"""Repository record as returned by the user repository listing endpoint."""
@dataclass(frozen=True)
class Repository:
    name: str
    description: Optional[str]
    language: Optional[str]
    stars: int
    size_kb: int
    html_url: str
    fork: bool
    owner: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Repository":
        owner = data.get("owner") or {}
        return cls(
            name=data["name"],
            description=data.get("description"),
            language=data.get("language"),
            stars=data.get("stargazers_count", 0) or 0,
            size_kb=data.get("size", 0) or 0,
            html_url=data.get("html_url", ""),
            fork=bool(data.get("fork", False)),
            owner=owner.get("login", ""),
        )
