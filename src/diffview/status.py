from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from diffview.models import FileDiff

StatusKind = Literal["new-file", "deleted-file", "renamed-file", "binary-file"]
IconKey = Literal["file-plus", "file-minus", "file-edit"]
ColorKey = Literal["success", "destructive", "warning"]

SR_NEW_FILE = "new file"
SR_DELETED_FILE = "deleted file"
SR_RENAMED_FILE = "file renamed"
SR_BINARY_FILE = "binary file"

STATUS_LABELS = {
    "new": "new",
    "deleted": "deleted",
    "renamed": "renamed",
    "binary": "binary",
}


@dataclass(frozen=True, slots=True)
class FileStatus:
    kind: StatusKind | None
    label: str | None
    icon: IconKey
    color: ColorKey

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "label": self.label,
            "icon": self.icon,
            "color": self.color,
        }


def _status_kind(file: FileDiff) -> StatusKind | None:
    if file.is_new:
        return "new-file"
    if file.is_deleted:
        return "deleted-file"
    if file.is_renamed:
        return "renamed-file"
    if file.is_binary:
        return "binary-file"
    return None


def get_file_status_label(file: FileDiff) -> str | None:
    if file.is_new:
        return SR_NEW_FILE
    if file.is_deleted:
        return SR_DELETED_FILE
    if file.is_renamed:
        return SR_RENAMED_FILE
    if file.is_binary:
        return SR_BINARY_FILE
    return None


def get_file_icon(file: FileDiff) -> IconKey:
    if file.is_new:
        return "file-plus"
    if file.is_deleted:
        return "file-minus"
    return "file-edit"


def get_file_icon_color(file: FileDiff) -> ColorKey:
    if file.is_new:
        return "success"
    if file.is_deleted:
        return "destructive"
    return "warning"


def classify_file_status(file: FileDiff) -> FileStatus:
    """Resolve the flags of ``file`` to a single status.

    The first set flag wins in the order new, deleted, renamed, binary.
    Renamed and binary files share the modified icon and colour.
    """
    return FileStatus(
        kind=_status_kind(file),
        label=get_file_status_label(file),
        icon=get_file_icon(file),
        color=get_file_icon_color(file),
    )


def status_badges(file: FileDiff) -> list[tuple[str, str]]:
    badges: list[tuple[str, str]] = []
    if file.is_new:
        badges.append((STATUS_LABELS["new"], SR_NEW_FILE))
    if file.is_deleted:
        badges.append((STATUS_LABELS["deleted"], SR_DELETED_FILE))
    if file.is_renamed:
        badges.append((STATUS_LABELS["renamed"], SR_RENAMED_FILE))
    if file.is_binary:
        badges.append((STATUS_LABELS["binary"], SR_BINARY_FILE))
    return badges
