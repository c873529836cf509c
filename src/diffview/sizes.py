from __future__ import annotations

from collections.abc import Mapping
from typing import Literal, Union

Size = Literal["sm", "md", "lg"]
Breakpoint = Literal["base", "sm", "md", "lg", "xl", "2xl"]
ResponsiveSize = Union[Size, Mapping[str, Size]]

BREAKPOINT_ORDER: tuple[Breakpoint, ...] = ("base", "sm", "md", "lg", "xl", "2xl")
_DEFAULT_SIZE: Size = "md"

SIZE_CLASSES: dict[str, str] = {
    "sm": "text-xs",
    "md": "text-sm",
    "lg": "text-base",
}

PADDING_CLASSES: dict[str, str] = {
    "sm": "px-3 py-2",
    "md": "px-4 py-2.5",
    "lg": "px-5 py-3",
}

HEADER_PADDING_CLASSES: dict[str, str] = {
    "sm": "px-3 py-1.5",
    "md": "px-4 py-2",
    "lg": "px-5 py-2.5",
}

LINE_HEIGHT_CLASSES: dict[str, str] = {
    "sm": "leading-5",
    "md": "leading-6",
    "lg": "leading-7",
}

LINE_NUMBER_WIDTH_CLASSES: dict[str, str] = {
    "sm": "w-10",
    "md": "w-12",
    "lg": "w-14",
}


def get_base_size(size: ResponsiveSize | None) -> Size:
    if isinstance(size, str):
        return size
    if isinstance(size, Mapping):
        return size.get("base", _DEFAULT_SIZE)
    return _DEFAULT_SIZE


def _mapped_classes(value: str, class_map: Mapping[str, str]) -> list[str]:
    if value not in class_map:
        raise ValueError(f"Unsupported size: {value!r}")
    return class_map[value].split()


def get_responsive_size_classes(
    size: ResponsiveSize, class_map: Mapping[str, str]
) -> list[str]:
    """Resolve a size, or a breakpoint-to-size mapping, to utility classes.

    Breakpoints are emitted in ``BREAKPOINT_ORDER``; every breakpoint other
    than ``base`` prefixes its classes with ``"{breakpoint}:"``.
    """
    if isinstance(size, str):
        return _mapped_classes(size, class_map)

    classes: list[str] = []
    for breakpoint in BREAKPOINT_ORDER:
        value = size.get(breakpoint)
        if value is None:
            continue
        for class_name in _mapped_classes(value, class_map):
            classes.append(class_name if breakpoint == "base" else f"{breakpoint}:{class_name}")
    return classes
