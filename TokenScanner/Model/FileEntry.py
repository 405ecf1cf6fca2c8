from dataclasses import dataclass
from typing import Any, Dict, Optional

"""A single entry of a repository tree (file or directory)."""
@dataclass(frozen=True)
class FileEntry:
    path: str
    type: str
    size: int = 0
    download_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "FileEntry":
        return cls(
            path=data.get("path", ""),
            type=data.get("type", ""),
            size=data.get("size", 0) or 0,
            download_url=data.get("download_url"),
        )

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    @property
    def extension(self) -> str:
        # text after the last "." of the whole path
        if "." not in self.path:
            return ""
        return "." + self.path.rsplit(".", 1)[-1].lower()
