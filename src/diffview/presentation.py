from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass, field

from diffview.hunk_parser import parse_file_hunks
from diffview.labels import (
    DEFAULT_BINARY_MESSAGE,
    DEFAULT_NO_CHANGES_MESSAGE,
    build_file_accessible_label,
    build_stats_announcement,
    toggle_announcement,
)
from diffview.models import DiffLine, FileDiff
from diffview.status import FileStatus, classify_file_status, status_badges
from diffview.util import element_id


@dataclass(frozen=True, slots=True)
class FileView:
    file: FileDiff
    status: FileStatus
    lines: list[DiffLine]
    is_expanded: bool
    label: str
    toggle_announcement: str
    badges: list[tuple[str, str]] = field(default_factory=list)
    placeholder: str | None = None
    header_id: str = ""
    content_id: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.file.path,
            "old_path": self.file.old_path,
            "additions": self.file.additions,
            "deletions": self.file.deletions,
            "status": self.status.to_dict(),
            "badges": [{"text": text, "label": label} for text, label in self.badges],
            "is_expanded": self.is_expanded,
            "label": self.label,
            "toggle_announcement": self.toggle_announcement,
            "placeholder": self.placeholder,
            "header_id": self.header_id,
            "content_id": self.content_id,
            "lines": [line.to_dict() for line in self.lines],
        }


@dataclass(frozen=True, slots=True)
class DiffPresentation:
    files: list[FileView]
    file_count: int
    additions: int
    deletions: int
    announcement: str

    @property
    def is_empty(self) -> bool:
        return not self.files

    def to_dict(self) -> dict[str, object]:
        return {
            "file_count": self.file_count,
            "additions": self.additions,
            "deletions": self.deletions,
            "announcement": self.announcement,
            "files": [file_view.to_dict() for file_view in self.files],
        }


def _placeholder(file: FileDiff, lines: list[DiffLine]) -> str | None:
    if file.is_binary:
        return DEFAULT_BINARY_MESSAGE
    if not lines:
        return DEFAULT_NO_CHANGES_MESSAGE
    return None


def build_file_view(file: FileDiff, *, index: int, is_expanded: bool) -> FileView:
    lines = parse_file_hunks(file.hunks)
    # Index keeps ids unique when a patch touches the same path twice.
    id_seed = f"{index}:{file.path}"
    return FileView(
        file=file,
        status=classify_file_status(file),
        lines=lines,
        is_expanded=is_expanded,
        label=build_file_accessible_label(file, is_expanded),
        toggle_announcement=toggle_announcement(is_expanded),
        badges=status_badges(file),
        placeholder=_placeholder(file, lines),
        header_id=element_id("diff-header", id_seed),
        content_id=element_id("diff-content", id_seed),
    )


def build_presentation(
    files: Iterable[FileDiff],
    expanded_paths: Collection[str] | None = None,
) -> DiffPresentation:
    """Build the renderer-facing view of a list of file diffs.

    Totals come from each file's declared ``additions``/``deletions`` rather
    than from the parsed lines. Nothing is cached between calls.
    """
    expanded = set(expanded_paths or ())
    file_list = list(files)
    views = [
        build_file_view(file, index=index, is_expanded=file.path in expanded)
        for index, file in enumerate(file_list, start=1)
    ]
    additions = sum(file.additions for file in file_list)
    deletions = sum(file.deletions for file in file_list)
    return DiffPresentation(
        files=views,
        file_count=len(file_list),
        additions=additions,
        deletions=deletions,
        announcement=build_stats_announcement(len(file_list), additions, deletions),
    )
