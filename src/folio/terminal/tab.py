# SPDX-License-Identifier: MIT

import typer

from folio.controller import StoreController
from folio.service import session
from folio.terminal.custom_typer import AliasedTyperGroup
from folio.terminal.parse import resolve_id, resolve_item_id
from folio.view.session import tabs_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("open, o")
def open_tab(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    controller.open_item(resolve_item_id(controller.store, id))
    tabs_report(controller.store)


@app.command("close, c")
def close_tab(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    session.close_tab(store, resolve_id(id, store.session["open_ids"], "open tab"))
    tabs_report(store)


@app.command("switch, s")
def switch_tab(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    session.switch_tab(store, resolve_id(id, store.session["open_ids"], "open tab"))
    tabs_report(store)


@app.command("list, ls")
def list_tabs(ctx: typer.Context) -> None:
    controller: StoreController = ctx.obj
    tabs_report(controller.store)
