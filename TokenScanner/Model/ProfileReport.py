"""
Report for a whole GitHub profile. Repositories are added one at a time with
`add`, which keeps `all_repo_stats` and `repos_meeting_criteria` consistent.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from TokenScanner.Model.RepoAnalysis import RepoAnalysis


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class ProfileReport:
    username: str
    min_tokens_threshold: int
    total_repos_analyzed: int = 0
    repos_meeting_criteria: List[RepoAnalysis] = field(default_factory=list)
    all_repo_stats: Dict[str, RepoAnalysis] = field(default_factory=dict)
    analysis_timestamp: str = field(default_factory=_utc_timestamp)
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def failed(cls, username: str, min_tokens: int, error: str, error_kind: str) -> "ProfileReport":
        return cls(username=username, min_tokens_threshold=min_tokens, error=error, error_kind=error_kind)

    def add(self, analysis: RepoAnalysis) -> None:
        self.all_repo_stats[analysis.name] = analysis
        self.total_repos_analyzed += 1
        if analysis.total_tokens >= self.min_tokens_threshold:
            self.repos_meeting_criteria.append(analysis)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "username": self.username,
            "total_repos_analyzed": self.total_repos_analyzed,
            "repos_meeting_criteria": [a.to_dict() for a in self.repos_meeting_criteria],
            "all_repo_stats": {name: a.to_dict() for name, a in self.all_repo_stats.items()},
            "analysis_timestamp": self.analysis_timestamp,
            "min_tokens_threshold": self.min_tokens_threshold,
        }
        if self.error:
            data["error"] = self.error
            data["error_kind"] = self.error_kind
        return data
