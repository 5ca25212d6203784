# core/formatters.py

# pure display helpers for grades and headings
# must never import from models!

from typing import Any

ABSENT_MARK = "-"


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_grade(value: float | None) -> str:
    return ABSENT_MARK if value is None else f"{value:.2f}"


def format_weight(weight: float | None) -> str:
    return ABSENT_MARK if weight is None else f"{weight:g} %"


def format_coverage(covered: float | None, declared: float) -> str:
    if covered is None:
        return "[NOT EVALUATED]"

    if declared and covered < declared:
        return f"[PROVISIONAL: {covered:g} of {declared:g}]"

    return ""


def format_table_row(label: str, values: list[Any], label_width: int = 24) -> str:
    cells = " ".join(f"{str(v):>8}" for v in values)
    return f"{label:<{label_width}} {cells}"
