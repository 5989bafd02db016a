# SPDX-License-Identifier: MIT

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from folio.repository.store import EntityStore
from folio.view.header import header
from folio.view.util import short_id


def tabs_report(store: EntityStore) -> None:
    header("tabs")
    session = store.get_session()

    if not session["open_ids"]:
        Console().print("  [grey50]no open tabs[/grey50]")
        return

    line = Text("  ")
    for id in session["open_ids"]:
        item = store.get_item(id)
        title = item["title"] if item is not None else "(deleted)"
        label = f" {escape(title)} {short_id(id)} "
        if id == session["active_id"]:
            line.append_text(Text.from_markup(f"[reverse]{label}[/reverse]"))
        else:
            line.append_text(Text.from_markup(label))
        line.append("|")
    Console().print(line)
