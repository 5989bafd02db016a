# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from folio.model.item import Item
from folio.repository.store import EntityStore, blob_key
from folio.service.search import strip_html
from folio.time import datetime_to_display_local_datetime_str
from folio.view.header import header
from folio.view.util import format_tags, short_id


def items_report(store: EntityStore, report_name: str, items: list[Item]) -> None:
    header(report_name)

    table = Table(box=box.SIMPLE)
    table.add_column("id")
    table.add_column("title")
    table.add_column("container")
    table.add_column("tags")
    table.add_column("updated")

    for item in items:
        container = store.get_container(item["container_id"])
        table.add_row(
            short_id(item["id"]),
            escape(item["title"]),
            escape(container["name"]) if container is not None else "",
            format_tags(item["tags"]),
            datetime_to_display_local_datetime_str(item["updated_at"]),
        )

    Console().print(table)


def single_item_report(store: EntityStore, item: Item) -> None:
    path = " / ".join(c["name"] for c in store.get_container_path(item["container_id"]))

    if blob_key(item["content"]) is not None:
        body = f"[grey50]attachment {item['content']}[/grey50]"
    else:
        body = escape(strip_html(item["content"]).strip())

    subtitle = format_tags(item["tags"])
    Console().print(
        Panel(
            body or "[grey50]empty[/grey50]",
            title=f"{escape(item['title'])} [grey50]{short_id(item['id'])}[/grey50]",
            subtitle=subtitle or None,
            title_align="left",
        )
    )
    Console().print(f"  [grey50]{escape(path)}[/grey50]")
