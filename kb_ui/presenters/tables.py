"""Table model and its rich rendering."""

from __future__ import annotations

from dataclasses import dataclass

from rich import box
from rich.table import Table


@dataclass
class TableModel:
    title: str
    columns: list[str]
    rows: list[list[str]]
    label_columns: int = 1


def build_rich_table(
    model: TableModel,
    *,
    show_lines: bool = False,
    border_style: str = "blue",
    header_style: str = "bold blue",
    title_style: str = "bold blue",
    box_style: box.Box = box.ROUNDED,
) -> Table:
    """Build a rich Table from a TableModel; columns after the labels are right-aligned."""
    rich_table = Table(
        title=model.title,
        show_lines=show_lines,
        box=box_style,
        border_style=border_style,
        header_style=header_style,
        title_style=title_style,
    )
    for idx, column in enumerate(model.columns):
        justify = "left" if idx < model.label_columns else "right"
        rich_table.add_column(column, justify=justify, no_wrap=True)
    for row in model.rows:
        rich_table.add_row(*row)
    return rich_table

