from __future__ import annotations

import re
import subprocess
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from diffview.models import DiffHunk, FileDiff

_DIFF_GIT_RE = re.compile(r"^diff --git a/(.+) b/(.+)$")
_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$")
_MAX_PATCH_BYTES = 24 * 1024 * 1024


@dataclass(slots=True)
class _FileBuilder:
    old_path: str | None = None
    new_path: str | None = None
    is_new: bool = False
    is_deleted: bool = False
    is_renamed: bool = False
    is_binary: bool = False
    git_headers: bool = False
    additions: int = 0
    deletions: int = 0
    hunks: list[DiffHunk] = field(default_factory=list)

    def build(self) -> FileDiff:
        path = self.new_path or self.old_path or "unknown"
        if self.new_path is None and self.old_path is not None:
            self.is_deleted = True
        if self.old_path is None and self.new_path is not None:
            self.is_new = True
        # Differing header paths mean a rename only in git output.
        renamed = self.is_renamed or (
            self.git_headers
            and self.old_path is not None
            and self.new_path is not None
            and self.old_path != self.new_path
        )
        return FileDiff(
            path=path,
            old_path=self.old_path if renamed else None,
            additions=self.additions,
            deletions=self.deletions,
            is_new=self.is_new,
            is_deleted=self.is_deleted,
            is_renamed=renamed,
            is_binary=self.is_binary,
            hunks=self.hunks,
        )


def _unquote(value: str) -> str:
    path = value.strip()
    if path.startswith('"') and path.endswith('"') and len(path) >= 2:
        path = path[1:-1]
    return path


def _normalize_path(value: str) -> str:
    path = _unquote(value)
    if path.startswith("a/") or path.startswith("b/"):
        path = path[2:]
    return path


def _strip_first_component(value: str) -> str:
    path = _unquote(value)
    _, sep, rest = path.partition("/")
    return rest if sep and rest else path


def _normalize_header_path(value: str, *, git_headers: bool) -> str | None:
    path = value.strip().split("\t", 1)[0]
    if path == "/dev/null":
        return None
    if git_headers:
        return _normalize_path(path)
    return _strip_first_component(path)


def _read_hunk(lines: list[str], start: int, builder: _FileBuilder) -> int:
    header_line = lines[start]
    match = _HUNK_RE.match(header_line)
    if not match:
        raise ValueError(f"Invalid hunk header: {header_line}")

    old_start = int(match.group(1))
    old_count = int(match.group(2) or "1")
    new_start = int(match.group(3))
    new_count = int(match.group(4) or "1")

    body: list[str] = [header_line]
    old_remaining = old_count
    new_remaining = new_count

    idx = start + 1
    while idx < len(lines):
        line = lines[idx]
        if line.startswith("\\"):
            # "\ No newline at end of file"
            idx += 1
            continue
        if old_remaining <= 0 and new_remaining <= 0:
            break
        if line.startswith("diff --git ") or _HUNK_RE.match(line):
            break

        if line.startswith("+"):
            builder.additions += 1
            new_remaining -= 1
        elif line.startswith("-"):
            builder.deletions += 1
            old_remaining -= 1
        else:
            old_remaining -= 1
            new_remaining -= 1
        # git drops the leading space of blank context lines in some modes.
        body.append(line if line else " ")
        idx += 1

    builder.hunks.append(
        DiffHunk(
            old_start=old_start,
            old_lines=old_count,
            new_start=new_start,
            new_lines=new_count,
            content="\n".join(body),
        )
    )
    return idx


def parse_unified_diff(raw_patch: str) -> list[FileDiff]:
    """Split unified diff text into per-file records.

    Each hunk keeps its ``@@`` line as the first line of ``content`` so that
    the parsed line sequence starts with a header row.
    """
    if not raw_patch.strip():
        return []

    lines = raw_patch.splitlines()
    files: list[FileDiff] = []
    current: _FileBuilder | None = None

    idx = 0
    while idx < len(lines):
        line = lines[idx]

        if line.startswith("diff --git "):
            if current is not None:
                files.append(current.build())
            current = _FileBuilder(git_headers=True)
            match = _DIFF_GIT_RE.match(line)
            if match:
                current.old_path = _normalize_path(match.group(1))
                current.new_path = _normalize_path(match.group(2))
            idx += 1
            continue

        if line.startswith("--- ") and (current is None or current.hunks):
            # Plain "diff -u" output has no "diff --git" line between files.
            if current is not None:
                files.append(current.build())
            current = _FileBuilder()

        if current is None:
            idx += 1
            continue

        if line.startswith("new file mode "):
            current.is_new = True
        elif line.startswith("deleted file mode "):
            current.is_deleted = True
        elif line.startswith("rename from "):
            current.is_renamed = True
            current.git_headers = True
            current.old_path = _normalize_path(line.removeprefix("rename from "))
        elif line.startswith("rename to "):
            current.is_renamed = True
            current.git_headers = True
            current.new_path = _normalize_path(line.removeprefix("rename to "))
        elif line.startswith("Binary files ") or line.startswith("GIT binary patch"):
            current.is_binary = True
        elif line.startswith("--- "):
            current.old_path = _normalize_header_path(
                line.removeprefix("--- "), git_headers=current.git_headers
            )
        elif line.startswith("+++ "):
            current.new_path = _normalize_header_path(
                line.removeprefix("+++ "), git_headers=current.git_headers
            )
        elif line.startswith("@@ "):
            idx = _read_hunk(lines, idx, current)
            continue

        idx += 1

    if current is not None:
        files.append(current.build())

    return files


def _run_git_command(args: list[str], *, max_output_bytes: int = _MAX_PATCH_BYTES) -> str:
    # Only stdout is read incrementally; stderr is spooled to a file.
    with tempfile.TemporaryFile() as err_file:
        with subprocess.Popen(
            ["git", *args],
            stdout=subprocess.PIPE,
            stderr=err_file,
        ) as proc:
            if proc.stdout is None:
                raise RuntimeError("git command did not provide stdout stream")

            chunks: list[bytes] = []
            total_bytes = 0
            while True:
                chunk = proc.stdout.read(64 * 1024)
                if not chunk:
                    break
                total_bytes += len(chunk)
                if total_bytes > max_output_bytes:
                    proc.kill()
                    raise RuntimeError(
                        "Diff output exceeded safe size budget "
                        f"({max_output_bytes} bytes). Narrow scope with --include."
                    )
                chunks.append(chunk)
            returncode = proc.wait()

        err_file.seek(0)
        stderr = err_file.read().decode("utf-8", errors="replace")

    if returncode not in {0, 1}:
        raise RuntimeError(stderr.strip() or f"git command failed: {' '.join(args)}")
    return b"".join(chunks).decode("utf-8", errors="replace")


def _read_patch_file(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    if not path.is_file():
        raise RuntimeError(f"Patch file not found: {path}")
    return path.read_text(encoding="utf-8")


def collect_patch_text(
    *,
    patch_file: Path | None = None,
    git_range: str | None = None,
    include_paths: list[str] | None = None,
) -> str:
    if patch_file is not None:
        return _read_patch_file(patch_file)

    args = ["diff", "--no-color", git_range or "HEAD"]
    pathspecs = [
        f":(glob){pattern.strip().removeprefix('./')}"
        for pattern in include_paths or []
        if pattern.strip()
    ]
    if pathspecs:
        args.extend(["--", *pathspecs])
    return _run_git_command(args)
