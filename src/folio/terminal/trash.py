# SPDX-License-Identifier: MIT

import typer
from rich import print

from folio.controller import StoreController
from folio.service import trash
from folio.terminal.custom_typer import AliasedTyperGroup
from folio.terminal.parse import resolve_trash_id
from folio.view.trash import trash_report
from folio.view.util import short_id

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("list, ls")
def list_trash(ctx: typer.Context) -> None:
    controller: StoreController = ctx.obj
    trash_report(controller.store.get_trash())


@app.command("restore, r")
def restore(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj
    store = controller.store

    restored_id = trash.restore(store, resolve_trash_id(store, id))
    print(f"restored {short_id(restored_id)}")


@app.command("purge, p")
def purge(ctx: typer.Context, id: str) -> None:
    controller: StoreController = ctx.obj

    if not controller.purge(resolve_trash_id(controller.store, id)):
        print("cancelled")


@app.command("empty")
def empty(ctx: typer.Context) -> None:
    controller: StoreController = ctx.obj

    count = controller.purge_all()
    print(f"purged {count} entr{'y' if count == 1 else 'ies'}")
