from __future__ import annotations

from importlib import resources
from typing import Any

from jinja2 import Environment

from diffview.hunk_parser import line_marker
from diffview.labels import (
    DEFAULT_COLLAPSE_LABEL,
    DEFAULT_EMPTY_DESCRIPTION,
    DEFAULT_EMPTY_TITLE,
    DEFAULT_EXPAND_LABEL,
    DEFAULT_REGION_LABEL,
    SR_FILE_COLLAPSED,
    SR_FILE_EXPANDED,
    build_file_accessible_label,
    build_line_accessible_label,
    get_line_type_announcement,
)
from diffview.models import DiffLine, LineType
from diffview.presentation import DiffPresentation, FileView
from diffview.sizes import (
    BREAKPOINT_ORDER,
    HEADER_PADDING_CLASSES,
    LINE_HEIGHT_CLASSES,
    LINE_NUMBER_WIDTH_CLASSES,
    PADDING_CLASSES,
    SIZE_CLASSES,
    ResponsiveSize,
    get_base_size,
    get_responsive_size_classes,
)

_BREAKPOINT_MIN_WIDTH = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}

_UTILITY_RULES = {
    "text-xs": "font-size: 0.75rem;",
    "text-sm": "font-size: 0.875rem;",
    "text-base": "font-size: 1rem;",
    "px-3": "padding-left: 0.75rem; padding-right: 0.75rem;",
    "px-4": "padding-left: 1rem; padding-right: 1rem;",
    "px-5": "padding-left: 1.25rem; padding-right: 1.25rem;",
    "py-1.5": "padding-top: 0.375rem; padding-bottom: 0.375rem;",
    "py-2": "padding-top: 0.5rem; padding-bottom: 0.5rem;",
    "py-2.5": "padding-top: 0.625rem; padding-bottom: 0.625rem;",
    "py-3": "padding-top: 0.75rem; padding-bottom: 0.75rem;",
    "leading-5": "line-height: 1.25rem;",
    "leading-6": "line-height: 1.5rem;",
    "leading-7": "line-height: 1.75rem;",
    "w-10": "width: 2.5rem;",
    "w-12": "width: 3rem;",
    "w-14": "width: 3.5rem;",
}

_LINE_CLASS_BY_TYPE = {
    LineType.ADDITION: "line-addition",
    LineType.DELETION: "line-deletion",
    LineType.CONTEXT: "line-context",
    LineType.HEADER: "line-header",
}


def _css_selector(class_name: str) -> str:
    escaped = class_name.replace(":", "\\:").replace(".", "\\.")
    return f".{escaped}"


def _utility_css(class_names: list[str]) -> str:
    base_rules: list[str] = []
    media_rules: dict[str, list[str]] = {}
    for class_name in dict.fromkeys(class_names):
        breakpoint, _, utility = class_name.rpartition(":")
        declaration = _UTILITY_RULES.get(utility)
        if declaration is None:
            continue
        rule = f"{_css_selector(class_name)} {{ {declaration} }}"
        if breakpoint:
            media_rules.setdefault(breakpoint, []).append(rule)
        else:
            base_rules.append(rule)

    blocks = list(base_rules)
    for breakpoint in BREAKPOINT_ORDER:
        rules = media_rules.get(breakpoint)
        if not rules:
            continue
        min_width = _BREAKPOINT_MIN_WIDTH[breakpoint]
        blocks.append(f"@media (min-width: {min_width}) {{ {' '.join(rules)} }}")
    return "\n".join(blocks)


def _line_number(value: int | None) -> str:
    return "" if value is None else str(value)


def _line_row(line: DiffLine) -> dict[str, Any]:
    return {
        "is_header": line.type is LineType.HEADER,
        "class_name": _LINE_CLASS_BY_TYPE[line.type],
        "announcement": get_line_type_announcement(line.type),
        "label": build_line_accessible_label(line),
        "prefix": line_marker(line.type),
        "old_no": "" if line.type is LineType.ADDITION else _line_number(line.old_line_number),
        "new_no": "" if line.type is LineType.DELETION else _line_number(line.new_line_number),
        "content": line.content or " ",
    }


def _file_render(file_view: FileView) -> dict[str, Any]:
    file = file_view.file
    path_parts = [part for part in file.path.split("/") if part]
    return {
        "path": file.path,
        "old_path": file.old_path if file.is_renamed else None,
        "file_name": path_parts[-1] if path_parts else file.path,
        "additions": file.additions,
        "deletions": file.deletions,
        "status_kind": file_view.status.kind or "modified",
        "icon": file_view.status.icon,
        "color": file_view.status.color,
        "badges": file_view.badges,
        "is_expanded": file_view.is_expanded,
        "label": file_view.label,
        "label_expanded": build_file_accessible_label(file, True),
        "label_collapsed": build_file_accessible_label(file, False),
        "toggle_title": DEFAULT_COLLAPSE_LABEL if file_view.is_expanded else DEFAULT_EXPAND_LABEL,
        "header_id": file_view.header_id,
        "content_id": file_view.content_id,
        "placeholder": file_view.placeholder,
        "rows": [_line_row(line) for line in file_view.lines],
    }


_TEMPLATE_ENV = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)


_TEMPLATE_TEXT = resources.files("diffview").joinpath("templates/diff.html.j2").read_text(encoding="utf-8")
_TEMPLATE = _TEMPLATE_ENV.from_string(_TEMPLATE_TEXT)


def render_html(
    presentation: DiffPresentation,
    *,
    title: str,
    size: ResponsiveSize = "md",
    show_line_numbers: bool = True,
    region_label: str = DEFAULT_REGION_LABEL,
) -> str:
    size_classes = get_responsive_size_classes(size, SIZE_CLASSES)
    padding_classes = get_responsive_size_classes(size, PADDING_CLASSES)
    header_padding_classes = get_responsive_size_classes(size, HEADER_PADDING_CLASSES)
    line_height_classes = get_responsive_size_classes(size, LINE_HEIGHT_CLASSES)
    line_number_classes = get_responsive_size_classes(size, LINE_NUMBER_WIDTH_CLASSES)

    utility_css = _utility_css(
        [
            *size_classes,
            *padding_classes,
            *header_padding_classes,
            *line_height_classes,
            *line_number_classes,
        ]
    )

    return _TEMPLATE.render(
        title=title,
        region_label=region_label,
        base_size=get_base_size(size),
        size_class=" ".join(size_classes),
        padding_class=" ".join(padding_classes),
        header_padding_class=" ".join(header_padding_classes),
        line_height_class=" ".join(line_height_classes),
        line_number_class=" ".join(line_number_classes),
        utility_css=utility_css,
        show_line_numbers=show_line_numbers,
        announcement=presentation.announcement,
        file_count=presentation.file_count,
        additions=presentation.additions,
        deletions=presentation.deletions,
        is_empty=presentation.is_empty,
        empty_title=DEFAULT_EMPTY_TITLE,
        empty_description=DEFAULT_EMPTY_DESCRIPTION,
        sr_expanded=SR_FILE_EXPANDED,
        sr_collapsed=SR_FILE_COLLAPSED,
        expand_label=DEFAULT_EXPAND_LABEL,
        collapse_label=DEFAULT_COLLAPSE_LABEL,
        files_render=[_file_render(file_view) for file_view in presentation.files],
    )
