# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio.model.trash import TrashEntry, TrashKind
from folio.time import datetime_to_display_local_datetime_str
from folio.view.header import header
from folio.view.util import short_id


def trash_report(entries: list[TrashEntry]) -> None:
    header(f"trash ({len(entries)})")

    table = Table(box=box.SIMPLE)
    table.add_column("id")
    table.add_column("kind")
    table.add_column("name")
    table.add_column("deleted")

    for entry in entries:
        if entry["kind"] == TrashKind.CONTAINER:
            name = entry["name"]
        else:
            name = entry["title"]
        table.add_row(
            short_id(entry["id"]),
            entry["kind"],
            escape(name),
            datetime_to_display_local_datetime_str(entry["deleted_at"]),
        )

    Console().print(table)
