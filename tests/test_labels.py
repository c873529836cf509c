from __future__ import annotations

import pytest

from diffview.labels import (
    build_file_accessible_label,
    build_line_accessible_label,
    build_stats_announcement,
    get_line_type_announcement,
    toggle_announcement,
)
from diffview.models import DiffLine, FileDiff, LineType
from diffview.status import (
    FileStatus,
    classify_file_status,
    get_file_icon,
    get_file_icon_color,
    get_file_status_label,
    status_badges,
)


def _file(**overrides: object) -> FileDiff:
    values: dict[str, object] = {"path": "src/test.ts", "additions": 10, "deletions": 5}
    values.update(overrides)
    return FileDiff(**values)


@pytest.mark.parametrize(
    ("flags", "kind", "label"),
    [
        ({"is_new": True}, "new-file", "new file"),
        ({"is_deleted": True}, "deleted-file", "deleted file"),
        ({"is_renamed": True}, "renamed-file", "file renamed"),
        ({"is_binary": True}, "binary-file", "binary file"),
        ({}, None, None),
    ],
)
def test_classify_single_flag(flags: dict[str, bool], kind: str | None, label: str | None) -> None:
    status = classify_file_status(_file(**flags))
    assert status.kind == kind
    assert status.label == label


def test_new_takes_precedence_over_deleted() -> None:
    status = classify_file_status(_file(is_new=True, is_deleted=True))
    assert status == FileStatus(kind="new-file", label="new file", icon="file-plus", color="success")


def test_precedence_is_fixed_across_flag_combinations() -> None:
    assert classify_file_status(_file(is_deleted=True, is_renamed=True)).kind == "deleted-file"
    assert classify_file_status(_file(is_renamed=True, is_binary=True)).kind == "renamed-file"
    everything = _file(is_new=True, is_deleted=True, is_renamed=True, is_binary=True)
    assert classify_file_status(everything).kind == "new-file"


def test_icon_and_color_distinguish_three_ways() -> None:
    assert (get_file_icon(_file(is_new=True)), get_file_icon_color(_file(is_new=True))) == (
        "file-plus",
        "success",
    )
    assert (
        get_file_icon(_file(is_deleted=True)),
        get_file_icon_color(_file(is_deleted=True)),
    ) == ("file-minus", "destructive")
    for flags in ({"is_renamed": True}, {"is_binary": True}, {}):
        assert get_file_icon(_file(**flags)) == "file-edit"
        assert get_file_icon_color(_file(**flags)) == "warning"


def test_status_label_matches_classification() -> None:
    file = _file(is_renamed=True, is_binary=True)
    assert get_file_status_label(file) == classify_file_status(file).label == "file renamed"


def test_status_badges_list_every_flag_in_order() -> None:
    file = _file(is_binary=True, is_renamed=True, is_new=True)
    assert status_badges(file) == [
        ("new", "new file"),
        ("renamed", "file renamed"),
        ("binary", "binary file"),
    ]
    assert status_badges(_file()) == []


def test_file_label_verb_follows_expanded_state() -> None:
    assert build_file_accessible_label(_file(), False) == "Expand src/test.ts. 10 additions, 5 deletions"
    assert build_file_accessible_label(_file(), True) == "Collapse src/test.ts. 10 additions, 5 deletions"


def test_file_label_counts_stay_plural() -> None:
    label = build_file_accessible_label(_file(additions=1, deletions=1), False)
    assert "1 additions" in label
    assert "1 deletions" in label


def test_file_label_includes_rename_then_status() -> None:
    label = build_file_accessible_label(_file(is_renamed=True, old_path="src/old.ts"), False)
    assert label == (
        "Expand src/test.ts. 10 additions, 5 deletions, renamed from src/old.ts, file renamed"
    )


def test_file_label_without_old_path_skips_rename_clause() -> None:
    label = build_file_accessible_label(_file(is_renamed=True), True)
    assert "renamed from" not in label
    assert label.endswith("file renamed")


def test_file_label_includes_new_file_status() -> None:
    label = build_file_accessible_label(_file(is_new=True), False)
    assert label.endswith(", new file")


@pytest.mark.parametrize(
    ("counts", "expected"),
    [
        ((1, 1, 5), "1 file changed, 1 addition, 5 deletions"),
        ((5, 10, 5), "5 files changed, 10 additions, 5 deletions"),
        ((1, 1, 1), "1 file changed, 1 addition, 1 deletion"),
        ((3, 25, 10), "3 files changed, 25 additions, 10 deletions"),
        ((0, 0, 0), "0 files changed, 0 additions, 0 deletions"),
    ],
)
def test_stats_announcement_pluralizes_each_count(
    counts: tuple[int, int, int], expected: str
) -> None:
    assert build_stats_announcement(*counts) == expected


def test_line_type_announcements() -> None:
    assert get_line_type_announcement(LineType.ADDITION) == "addition"
    assert get_line_type_announcement(LineType.DELETION) == "deletion"
    assert get_line_type_announcement(LineType.CONTEXT) == "unchanged"
    assert get_line_type_announcement(LineType.HEADER) == ""
    assert get_line_type_announcement("context") == "unchanged"


def test_every_line_type_has_an_announcement() -> None:
    for line_type in LineType:
        assert isinstance(get_line_type_announcement(line_type), str)


def test_line_accessible_label() -> None:
    context = DiffLine(LineType.CONTEXT, "x", old_line_number=1, new_line_number=1)
    addition = DiffLine(LineType.ADDITION, "y", new_line_number=2)
    header = DiffLine(LineType.HEADER, "@@ -1 +1 @@")

    assert build_line_accessible_label(context) == "unchanged, old line 1, new line 1: x"
    assert build_line_accessible_label(addition) == "addition, new line 2: y"
    assert build_line_accessible_label(header) == "hunk @@ -1 +1 @@"


def test_toggle_announcement() -> None:
    assert toggle_announcement(True) == "File diff expanded"
    assert toggle_announcement(False) == "File diff collapsed"
