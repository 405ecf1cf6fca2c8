from dataclasses import dataclass, field
from typing import Any, Dict, Optional

"""Per-repository file counters and token totals grouped by extension."""
@dataclass
class FileStats:
    total_files: int = 0
    processed_files: int = 0
    failed_files: int = 0
    extensions: Dict[str, int] = field(default_factory=dict)

    def record(self, extension: str, tokens: int) -> None:
        self.processed_files += 1
        self.extensions[extension] = self.extensions.get(extension, 0) + tokens

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_files": self.total_files,
            "processed_files": self.processed_files,
            "failed_files": self.failed_files,
            "extensions": dict(self.extensions),
        }


"""Raw outcome of analysing one repository's files."""
@dataclass(frozen=True)
class RepoTokenTotals:
    total_tokens: int
    file_stats: FileStats


"""Finished analysis of one repository, as reported to the caller."""
@dataclass(frozen=True)
class RepoAnalysis:
    name: str
    description: Optional[str]
    language: Optional[str]
    stars: int
    size_kb: int
    total_tokens: int
    file_stats: FileStats
    url: str
    meets_criteria: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "language": self.language,
            "stars": self.stars,
            "size_kb": self.size_kb,
            "total_tokens": self.total_tokens,
            "file_stats": self.file_stats.to_dict(),
            "url": self.url,
            "meets_criteria": self.meets_criteria,
        }
