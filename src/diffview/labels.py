from __future__ import annotations

from diffview.models import DiffLine, FileDiff, LineType
from diffview.status import get_file_status_label

SR_FILE_EXPANDED = "File diff expanded"
SR_FILE_COLLAPSED = "File diff collapsed"
SR_ADDITIONS = "additions"
SR_DELETIONS = "deletions"
SR_ADDITION_PREFIX = "addition"
SR_DELETION_PREFIX = "deletion"
SR_CONTEXT_PREFIX = "unchanged"
SR_LOADING = "Loading file changes"

DEFAULT_REGION_LABEL = "File changes"
DEFAULT_EMPTY_TITLE = "No changes to display"
DEFAULT_EMPTY_DESCRIPTION = "There are no file changes to show."
DEFAULT_ERROR_TITLE = "Failed to load changes"
DEFAULT_EXPAND_LABEL = "Expand file"
DEFAULT_COLLAPSE_LABEL = "Collapse file"
DEFAULT_BINARY_MESSAGE = "Binary file - diff not available"
DEFAULT_NO_CHANGES_MESSAGE = "No changes"

_LINE_TYPE_ANNOUNCEMENTS = {
    LineType.ADDITION: SR_ADDITION_PREFIX,
    LineType.DELETION: SR_DELETION_PREFIX,
    LineType.CONTEXT: SR_CONTEXT_PREFIX,
    LineType.HEADER: "",
}


def _count_phrase(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def get_line_type_announcement(line_type: LineType) -> str:
    return _LINE_TYPE_ANNOUNCEMENTS[LineType(line_type)]


def build_file_accessible_label(file: FileDiff, is_expanded: bool) -> str:
    """Describe the file header control for screen readers.

    Per-file counts always use the plural nouns ("1 additions"); only the
    aggregate announcement pluralises by count.
    """
    action = "Collapse" if is_expanded else "Expand"
    parts = [f"{file.additions} {SR_ADDITIONS}, {file.deletions} {SR_DELETIONS}"]
    if file.is_renamed and file.old_path:
        parts.append(f"renamed from {file.old_path}")
    status = get_file_status_label(file)
    if status:
        parts.append(status)
    return f"{action} {file.path}. " + ", ".join(parts)


def build_stats_announcement(
    file_count: int, addition_count: int, deletion_count: int
) -> str:
    files = _count_phrase(file_count, "file", "files")
    additions = _count_phrase(addition_count, "addition", "additions")
    deletions = _count_phrase(deletion_count, "deletion", "deletions")
    return f"{files} changed, {additions}, {deletions}"


def build_line_accessible_label(line: DiffLine) -> str:
    if line.type is LineType.HEADER:
        return f"hunk {line.content}"
    parts = [get_line_type_announcement(line.type)]
    if line.old_line_number is not None:
        parts.append(f"old line {line.old_line_number}")
    if line.new_line_number is not None:
        parts.append(f"new line {line.new_line_number}")
    return f"{', '.join(parts)}: {line.content}"


def toggle_announcement(is_expanded: bool) -> str:
    return SR_FILE_EXPANDED if is_expanded else SR_FILE_COLLAPSED
