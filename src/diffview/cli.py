from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from diffview.diff_source import collect_patch_text, parse_unified_diff
from diffview.labels import DEFAULT_ERROR_TITLE, SR_LOADING
from diffview.models import FileDiff
from diffview.presentation import build_presentation
from diffview.renderer import render_html
from diffview.util import load_json, write_json, write_text

_DEFAULT_TITLE = "Diff Review"
_DEFAULT_SIZE = "md"
_DEFAULT_HTML_OUTPUT = Path("diffview.html")
_DEFAULT_JSON_OUTPUT = Path("diffview.json")
_SIZE_CHOICES = ("sm", "md", "lg")


def _load_json_diffs(path: Path) -> list[FileDiff]:
    try:
        payload = load_json(path)
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"{DEFAULT_ERROR_TITLE}: cannot read {path}: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("files", [])
    if not isinstance(payload, list):
        raise SystemExit(f"{DEFAULT_ERROR_TITLE}: {path} must hold a list of file diffs.")

    files: list[FileDiff] = []
    for index, entry in enumerate(payload, start=1):
        if not isinstance(entry, dict):
            raise SystemExit(f"{DEFAULT_ERROR_TITLE}: entry {index} in {path} is not an object.")
        try:
            files.append(FileDiff.from_dict(entry))
        except ValueError as exc:
            raise SystemExit(f"{DEFAULT_ERROR_TITLE}: entry {index} in {path}: {exc}") from exc
    return files


def _collect_files(args: argparse.Namespace) -> list[FileDiff]:
    if args.json_input is not None:
        return _load_json_diffs(args.json_input)

    if args.patch_file is None:
        print(SR_LOADING)
    try:
        raw_patch = collect_patch_text(
            patch_file=args.patch_file,
            git_range=args.git_range,
            include_paths=list(args.include),
        )
        return parse_unified_diff(raw_patch)
    except (RuntimeError, ValueError, OSError) as exc:
        raise SystemExit(f"{DEFAULT_ERROR_TITLE}: {exc}") from exc


def _run_cmd(args: argparse.Namespace) -> int:
    files = _collect_files(args)

    if args.expand_all:
        expanded_paths = {file.path for file in files}
    else:
        expanded_paths = set(args.expand)
        unknown = sorted(expanded_paths - {file.path for file in files})
        if unknown:
            print(f"Ignoring --expand for paths not in the diff: {', '.join(unknown)}")

    presentation = build_presentation(files, expanded_paths)

    if args.format == "json":
        output_path = args.output or _DEFAULT_JSON_OUTPUT
        write_json(output_path, presentation.to_dict())
    else:
        output_path = args.output or _DEFAULT_HTML_OUTPUT
        html = render_html(
            presentation,
            title=args.title,
            size=args.size,
            show_line_numbers=not args.no_line_numbers,
        )
        write_text(output_path, html)

    print(presentation.announcement)
    print(f"Wrote {args.format} diff view: {output_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffview",
        description="Render unified diffs as accessible, screen-reader friendly file views.",
    )
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--patch-file", type=Path, help="Read unified diff from file ('-' for stdin)."
    )
    source_group.add_argument(
        "--git-range", help="Read diff from git (single ref or range, default HEAD)."
    )
    source_group.add_argument(
        "--json-input",
        type=Path,
        help="Read a JSON list of file diff objects instead of diff text.",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        help="Limit the git diff to paths matching this glob (repeatable).",
    )
    expand_group = parser.add_mutually_exclusive_group()
    expand_group.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="PATH",
        help="Render this file expanded (repeatable).",
    )
    expand_group.add_argument(
        "--expand-all", action="store_true", help="Render every file expanded."
    )
    parser.add_argument(
        "--size",
        choices=list(_SIZE_CHOICES),
        default=_DEFAULT_SIZE,
        help="Text and spacing size of the rendered view.",
    )
    parser.add_argument(
        "--no-line-numbers",
        action="store_true",
        help="Hide the old/new line number columns.",
    )
    parser.add_argument(
        "--format",
        choices=["html", "json"],
        default="html",
        help="Output an HTML page or the JSON presentation model.",
    )
    parser.add_argument("--title", default=_DEFAULT_TITLE, help="HTML page title.")
    parser.add_argument(
        "--output",
        type=Path,
        help="Output path (default diffview.html or diffview.json).",
    )
    parser.set_defaults(func=_run_cmd)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
