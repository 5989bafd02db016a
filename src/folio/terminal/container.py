# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich import print
from rich.markup import escape

from folio.controller import StoreController
from folio.service import duplicate, reorder
from folio.terminal.custom_typer import AliasedTyperGroup
from folio.terminal.parse import (
    resolve_container_id,
    resolve_optional_container_id,
)
from folio.view.tree import container_tree_report
from folio.view.util import short_id

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a")
def add(
    ctx: typer.Context,
    name: str,
    parent: Annotated[
        Optional[str],
        typer.Option("--parent", "-p", help="id or id prefix of the parent container"),
    ] = None,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    container = store.create_container(
        name, resolve_optional_container_id(store, parent)
    )
    print(f"created container {escape(container['name'])} {short_id(container['id'])}")


@app.command("rename, rn")
def rename(ctx: typer.Context, id: str, name: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    store.rename_container(resolve_container_id(store, id), name)


@app.command("move, mv")
def move(
    ctx: typer.Context,
    id: str,
    parent: Annotated[
        Optional[str],
        typer.Option("--parent", "-p", help="new parent; omit to move to the top level"),
    ] = None,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    reorder.reparent_container(
        store,
        resolve_container_id(store, id),
        resolve_optional_container_id(store, parent),
    )


@app.command("reorder, ro")
def reorder_container(
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

    reorder.reorder_siblings(
        store,
        resolve_container_id(store, id),
        resolve_container_id(store, target),
        before,
    )


@app.command("delete, del")
def delete(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj

    trash_ids = controller.delete_container(resolve_container_id(controller.store, id))
    if trash_ids is None:
        print("cancelled")
        return
    print(f"moved {len(trash_ids)} entr{'y' if len(trash_ids) == 1 else 'ies'} to trash")


@app.command("duplicate, dup")
def duplicate_container(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    new_id = duplicate.duplicate_container(store, resolve_container_id(store, id))
    print(f"duplicated as {short_id(new_id)}")


@app.command("tree, t")
def tree(
    ctx: typer.Context,
    id: Annotated[Optional[str], typer.Argument()] = None,
    items: Annotated[
        bool, typer.Option("--items", "-i", help="list items under each container")
    ] = False,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    container_tree_report(store, resolve_optional_container_id(store, id), items)


@app.command("path")
def path(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    containers = store.get_container_path(resolve_container_id(store, id))
    print(" / ".join(escape(c["name"]) for c in containers))
