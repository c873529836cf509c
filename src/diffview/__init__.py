from __future__ import annotations

from diffview.hunk_parser import parse_diff_hunk
from diffview.labels import (
    build_file_accessible_label,
    build_stats_announcement,
    get_line_type_announcement,
)
from diffview.models import DiffHunk, DiffLine, FileDiff, LineType
from diffview.presentation import DiffPresentation, FileView, build_presentation
from diffview.status import FileStatus, classify_file_status

__all__ = [
    "DiffHunk",
    "DiffLine",
    "DiffPresentation",
    "FileDiff",
    "FileStatus",
    "FileView",
    "LineType",
    "build_file_accessible_label",
    "build_presentation",
    "build_stats_announcement",
    "classify_file_status",
    "get_line_type_announcement",
    "parse_diff_hunk",
]
