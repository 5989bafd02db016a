# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print
from rich.markup import escape

from folio.controller import StoreController
from folio.service import duplicate, reorder, search, session
from folio.terminal.custom_typer import AliasedTyperGroup
from folio.terminal.parse import (
    open_editor_for_text,
    resolve_container_id,
    resolve_item_id,
    resolve_optional_container_id,
)
from folio.view.header import header
from folio.view.item import items_report, single_item_report
from folio.view.util import short_id

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a")
def add(
    ctx: typer.Context,
    title: str,
    container: Annotated[
        Optional[str],
        typer.Option("--container", "-c", help="defaults to the inbox"),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="accepts multiple tag options"),
    ] = None,
    edit: Annotated[
        bool, typer.Option("--edit", "-e", help="open an editor for the content")
    ] = False,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    container_id = (
        resolve_container_id(store, container)
        if container is not None
        else store.default_item_container_id
    )
    content = (open_editor_for_text() or "") if edit else ""

    item = store.create_item(title, container_id, content, tags)
    print(f"created item {escape(item['title'])} {short_id(item['id'])}")


@app.command("modify, m")
def modify(
    ctx: typer.Context,
    id: str,
    title: Annotated[Optional[str], typer.Option("--title")] = None,
    add_tags: Annotated[
        Optional[list[str]], typer.Option("--add-tag", "-at")
    ] = None,
    remove_tags: Annotated[
        Optional[list[str]], typer.Option("--remove-tag", "-rmt")
    ] = None,
    edit: Annotated[
        bool, typer.Option("--edit", "-e", help="open an editor for the content")
    ] = False,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store
    item_id = resolve_item_id(store, id)
    item = store.find_item(item_id)

    fields: dict[str, object] = {}
    if title is not None:
        fields["title"] = title
    if add_tags is not None or remove_tags is not None:
        tags = set(item["tags"]) | set(add_tags or [])
        fields["tags"] = tags - set(remove_tags or [])
    if edit:
        fields["content"] = open_editor_for_text(item["content"]) or ""

    if not fields:
        print("nothing to modify")
        return
    store.update_item(item_id, fields)


@app.command("attach")
def attach(ctx: typer.Context, id: str, file: Path) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    reference = store.attach_blob(resolve_item_id(store, id), file.read_bytes())
    print(f"attached {escape(str(file))} as {reference}")


@app.command("show, s")
def show(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    item_id = resolve_item_id(store, id)
    session.select_item(store, item_id)
    single_item_report(store, store.find_item(item_id))


@app.command("list, ls")
def list_items(
    ctx: typer.Context,
    container: Annotated[Optional[str], typer.Option("--container", "-c")] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", "-t")] = None,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    if tag is not None:
        items = search.filter_by_tag(store, tag)
    else:
        items = store.get_items()
    container_id = resolve_optional_container_id(store, container)
    if container_id is not None:
        items = [item for item in items if item["container_id"] == container_id]
    items_report(store, "items", items)


@app.command("move, mv")
def move(ctx: typer.Context, id: str, container: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    reorder.move_item(
        store, resolve_item_id(store, id), resolve_container_id(store, container)
    )


@app.command("reorder, ro")
def reorder_item(
    ctx: typer.Context,
    id: str,
    target: str,
    before: Annotated[
        bool,
        typer.Option("--before/--after", help="place before or after the target"),
    ] = True,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    reorder.reorder_items(
        store, resolve_item_id(store, id), resolve_item_id(store, target), before
    )


@app.command("delete, del")
def delete(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj

    if controller.delete_item(resolve_item_id(controller.store, id)) is None:
        print("cancelled")
        return
    print("moved to trash")


@app.command("duplicate, dup")
def duplicate_item(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    new_id = duplicate.duplicate_item(store, resolve_item_id(store, id))
    print(f"duplicated as {short_id(new_id)}")


@app.command("search, se")
def search_items(
    ctx: typer.Context,
    query: str,
    container: Annotated[Optional[str], typer.Option("--container", "-c")] = None,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    items = search.search_items(
        store, query, resolve_optional_container_id(store, container)
    )
    items_report(store, f"search: {query}", items)


@app.command("tags")
def tags(ctx: typer.Context) -> None:
    controller: StoreController = ctx.obj

    header("tags")
    for tag, count in search.tag_counts(controller.store):
        print(f"  #{escape(tag)} [grey50]{count}[/grey50]")
