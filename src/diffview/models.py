from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LineType(str, Enum):
    ADDITION = "addition"
    DELETION = "deletion"
    CONTEXT = "context"
    HEADER = "header"


@dataclass(frozen=True, slots=True)
class DiffLine:
    type: LineType
    content: str
    old_line_number: int | None = None
    new_line_number: int | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type.value,
            "content": self.content,
            "old_line_number": self.old_line_number,
            "new_line_number": self.new_line_number,
        }


def _field(data: Mapping[str, Any], name: str, camel: str, default: Any = None) -> Any:
    if name in data:
        return data[name]
    return data.get(camel, default)


def _int_field(data: Mapping[str, Any], name: str, camel: str) -> int:
    value = _field(data, name, camel, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected integer for {name!r}, got {value!r}")
    return value


@dataclass(slots=True)
class DiffHunk:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    content: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DiffHunk:
        content = data.get("content", "")
        if not isinstance(content, str):
            raise ValueError("Hunk content must be a string")
        return cls(
            old_start=_int_field(data, "old_start", "oldStart"),
            old_lines=_int_field(data, "old_lines", "oldLines"),
            new_start=_int_field(data, "new_start", "newStart"),
            new_lines=_int_field(data, "new_lines", "newLines"),
            content=content,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "old_start": self.old_start,
            "old_lines": self.old_lines,
            "new_start": self.new_start,
            "new_lines": self.new_lines,
            "content": self.content,
        }


@dataclass(slots=True)
class FileDiff:
    path: str
    old_path: str | None = None
    additions: int = 0
    deletions: int = 0
    is_new: bool = False
    is_deleted: bool = False
    is_renamed: bool = False
    is_binary: bool = False
    hunks: list[DiffHunk] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FileDiff:
        path = data.get("path")
        if not isinstance(path, str) or not path:
            raise ValueError("File diff is missing a path")
        old_path = _field(data, "old_path", "oldPath")
        hunks = data.get("hunks", [])
        if not isinstance(hunks, list) or not all(
            isinstance(hunk, Mapping) for hunk in hunks
        ):
            raise ValueError(f"Hunks of {path} must be a list of objects")
        return cls(
            path=path,
            old_path=old_path if isinstance(old_path, str) and old_path else None,
            additions=_int_field(data, "additions", "additions"),
            deletions=_int_field(data, "deletions", "deletions"),
            is_new=bool(_field(data, "is_new", "isNew", False)),
            is_deleted=bool(_field(data, "is_deleted", "isDeleted", False)),
            is_renamed=bool(_field(data, "is_renamed", "isRenamed", False)),
            is_binary=bool(_field(data, "is_binary", "isBinary", False)),
            hunks=[DiffHunk.from_dict(hunk) for hunk in hunks],
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "old_path": self.old_path,
            "additions": self.additions,
            "deletions": self.deletions,
            "is_new": self.is_new,
            "is_deleted": self.is_deleted,
            "is_renamed": self.is_renamed,
            "is_binary": self.is_binary,
            "hunks": [hunk.to_dict() for hunk in self.hunks],
        }
