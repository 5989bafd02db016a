# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich import print
from rich.markup import escape

from folio.controller import StoreController
from folio.service import favorite
from folio.terminal.custom_typer import AliasedTyperGroup
from folio.terminal.parse import resolve_container_id, resolve_id
from folio.view.header import header
from folio.view.util import short_id

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a")
def add(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    if favorite.add_favorite(store, resolve_container_id(store, id)):
        print("added to favorites")
    else:
        print("already in favorites")


@app.command("remove, rm")
def remove(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    favorite.remove_favorite(store, resolve_id(id, store.favorites, "favorite"))


@app.command("reorder, ro")
def reorder_favorite(
    ctx: typer.Context,
    id: str,
    target: str,
    before: Annotated[bool, typer.Option("--before/--after")] = True,
) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    favorite.reorder_favorite(
        store,
        resolve_id(id, store.favorites, "favorite"),
        resolve_id(target, store.favorites, "favorite"),
        before,
    )


@app.command("list, ls")
def list_favorites(ctx: typer.Context) -> None:
    controller: StoreController = ctx.obj

    header("favorites")
    for container in favorite.get_favorite_containers(controller.store):
        print(f"  {escape(container['name'])} [grey50]{short_id(container['id'])}[/grey50]")
