from __future__ import annotations

from diffview.models import DiffHunk, DiffLine, LineType

_MARKER_BY_TYPE = {
    LineType.ADDITION: "+",
    LineType.DELETION: "-",
    LineType.CONTEXT: " ",
}


def classify_marker(raw_line: str) -> LineType:
    marker = raw_line[:1]
    if marker == "@":
        return LineType.HEADER
    if marker == "+":
        return LineType.ADDITION
    if marker == "-":
        return LineType.DELETION
    # Unknown markers and empty lines render as context.
    return LineType.CONTEXT


def line_marker(line_type: LineType) -> str:
    return _MARKER_BY_TYPE.get(line_type, "")


def parse_diff_hunk(hunk: DiffHunk) -> list[DiffLine]:
    """Split a hunk body into classified, line-numbered records.

    Additions advance only the new-image counter, deletions only the old one,
    context lines advance both and header echo lines neither. Output has one
    record per ``\\n``-delimited raw line, in input order.
    """
    if not hunk.content:
        return []

    old_line = hunk.old_start
    new_line = hunk.new_start
    parsed: list[DiffLine] = []

    for raw_line in hunk.content.split("\n"):
        line_type = classify_marker(raw_line)
        if line_type is LineType.HEADER:
            parsed.append(DiffLine(type=line_type, content=raw_line))
        elif line_type is LineType.ADDITION:
            parsed.append(
                DiffLine(type=line_type, content=raw_line[1:], new_line_number=new_line)
            )
            new_line += 1
        elif line_type is LineType.DELETION:
            parsed.append(
                DiffLine(type=line_type, content=raw_line[1:], old_line_number=old_line)
            )
            old_line += 1
        else:
            parsed.append(
                DiffLine(
                    type=line_type,
                    content=raw_line[1:],
                    old_line_number=old_line,
                    new_line_number=new_line,
                )
            )
            old_line += 1
            new_line += 1

    return parsed


def parse_file_hunks(hunks: list[DiffHunk]) -> list[DiffLine]:
    return [line for hunk in hunks for line in parse_diff_hunk(hunk)]
