from __future__ import annotations

import pytest

from diffview.models import DiffHunk, FileDiff, LineType
from diffview.presentation import build_presentation


def _modified_file() -> FileDiff:
    return FileDiff(
        path="src/app.py",
        additions=2,
        deletions=1,
        hunks=[
            DiffHunk(1, 2, 1, 2, "@@ -1,2 +1,2 @@\n import os\n-x = 1\n+x = 2"),
            DiffHunk(20, 1, 20, 2, "@@ -20,1 +20,2 @@\n run()\n+stop()"),
        ],
    )


def test_empty_file_list_is_valid() -> None:
    presentation = build_presentation([])

    assert presentation.is_empty
    assert presentation.files == []
    assert presentation.announcement == "0 files changed, 0 additions, 0 deletions"


def test_file_lines_flatten_hunks_in_order() -> None:
    presentation = build_presentation([_modified_file()])
    lines = presentation.files[0].lines

    assert [line.type for line in lines] == [
        LineType.HEADER,
        LineType.CONTEXT,
        LineType.DELETION,
        LineType.ADDITION,
        LineType.HEADER,
        LineType.CONTEXT,
        LineType.ADDITION,
    ]
    assert lines[5].old_line_number == 20
    assert lines[6].new_line_number == 21


def test_totals_use_declared_counts() -> None:
    declared = FileDiff(path="notes.txt", additions=7, deletions=0, hunks=[])
    presentation = build_presentation([_modified_file(), declared])

    assert presentation.file_count == 2
    assert presentation.additions == 9
    assert presentation.deletions == 1
    assert presentation.announcement == "2 files changed, 9 additions, 1 deletion"


def test_expanded_paths_drive_labels() -> None:
    other = FileDiff(path="README.md", additions=1, hunks=[DiffHunk(1, 0, 1, 1, "+hi")])
    presentation = build_presentation([_modified_file(), other], expanded_paths={"README.md"})
    collapsed, expanded = presentation.files

    assert collapsed.is_expanded is False
    assert collapsed.label.startswith("Expand src/app.py.")
    assert collapsed.toggle_announcement == "File diff collapsed"
    assert expanded.is_expanded is True
    assert expanded.label == "Collapse README.md. 1 additions, 0 deletions"
    assert expanded.toggle_announcement == "File diff expanded"


def test_status_and_badges_per_file() -> None:
    renamed = FileDiff(
        path="docs/new.md",
        old_path="docs/old.md",
        is_renamed=True,
        is_binary=True,
    )
    view = build_presentation([renamed]).files[0]

    assert view.status.kind == "renamed-file"
    assert view.status.icon == "file-edit"
    assert view.badges == [("renamed", "file renamed"), ("binary", "binary file")]
    assert view.label.endswith("renamed from docs/old.md, file renamed")


def test_placeholders_for_binary_and_empty_files() -> None:
    binary = FileDiff(path="logo.png", is_new=True, is_binary=True)
    mode_only = FileDiff(path="run.sh")
    presentation = build_presentation([binary, mode_only, _modified_file()])

    assert presentation.files[0].placeholder == "Binary file - diff not available"
    assert presentation.files[1].placeholder == "No changes"
    assert presentation.files[2].placeholder is None


def test_element_ids_are_stable_and_unique() -> None:
    files = [_modified_file(), _modified_file()]
    first = build_presentation(files)
    second = build_presentation(files)

    assert [view.header_id for view in first.files] == [view.header_id for view in second.files]
    ids = [view.header_id for view in first.files] + [view.content_id for view in first.files]
    assert len(set(ids)) == 4
    assert all(view.header_id.startswith("diff-header-") for view in first.files)


def test_calls_do_not_share_state() -> None:
    file = _modified_file()
    expanded = build_presentation([file], expanded_paths=["src/app.py"])
    collapsed = build_presentation([file])

    assert expanded.files[0].is_expanded is True
    assert collapsed.files[0].is_expanded is False
    assert expanded.files[0].lines == collapsed.files[0].lines


def test_to_dict_is_json_ready() -> None:
    payload = build_presentation([_modified_file()], expanded_paths={"src/app.py"}).to_dict()

    assert payload["file_count"] == 1
    assert payload["announcement"] == "1 file changed, 2 additions, 1 deletion"
    file_payload = payload["files"][0]
    assert file_payload["status"] == {
        "kind": None,
        "label": None,
        "icon": "file-edit",
        "color": "warning",
    }
    assert file_payload["lines"][0] == {
        "type": "header",
        "content": "@@ -1,2 +1,2 @@",
        "old_line_number": None,
        "new_line_number": None,
    }
    assert file_payload["is_expanded"] is True


def test_file_diff_from_dict_accepts_camel_case() -> None:
    file = FileDiff.from_dict(
        {
            "path": "a.txt",
            "oldPath": None,
            "additions": 1,
            "deletions": 0,
            "isNew": True,
            "hunks": [
                {
                    "oldStart": 0,
                    "oldLines": 0,
                    "newStart": 1,
                    "newLines": 1,
                    "content": "@@ -0,0 +1 @@\n+hello",
                }
            ],
        }
    )

    assert file.is_new is True
    assert file.old_path is None
    assert file.hunks[0] == DiffHunk(0, 0, 1, 1, "@@ -0,0 +1 @@\n+hello")
    assert FileDiff.from_dict(file.to_dict()) == file


def test_file_diff_from_dict_rejects_bad_records() -> None:
    with pytest.raises(ValueError, match="missing a path"):
        FileDiff.from_dict({"additions": 1})
    with pytest.raises(ValueError, match="Expected integer"):
        FileDiff.from_dict({"path": "a", "additions": True})
    with pytest.raises(ValueError, match="list of objects"):
        FileDiff.from_dict({"path": "a", "hunks": ["@@"]})
