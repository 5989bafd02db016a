# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from folio.cleanup import register_cleanup
from folio.controller import StoreController, always_confirm, resolve_drop_zone
from folio.exception import FolioError, PersistenceFailed
from folio.initialize import initialize, open_default_store
from folio.terminal import (
    configuration,
    container,
    favorite,
    item,
    tab,
    trash,
)
from folio.terminal.custom_typer import OrderedAliasedTyperGroup
from folio.terminal.parse import resolve_entity_id
from folio.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Folio - folders, notes and a trash can in the CLI",
    no_args_is_help=True,
)
app.add_typer(container.app, name="container, c")
app.add_typer(item.app, name="item, i")
app.add_typer(tab.app, name="tab, tb")
app.add_typer(trash.app, name="trash, tr")
app.add_typer(favorite.app, name="favorite, f")
app.add_typer(configuration.app, name="config, cfg")

error_console = Console(stderr=True)


@app.callback()
def main_callback(
    ctx: typer.Context,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", "-nh", help="Suppress header output in reports"),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Answer yes to every confirmation"),
    ] = False,
) -> None:
    """
    Folio - folders, notes and a trash can in the CLI

    Global options that apply to all commands.
    """
    config = initialize()

    logging.basicConfig(
        level=config["log_level"],
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )

    if no_header:
        view_state.set_show_header(False)

    store = open_default_store(config)
    register_cleanup(store)
    ctx.obj = StoreController(store, always_confirm if yes else typer.confirm)


@app.command("drop")
def drop(
    ctx: typer.Context,
    dragged: str,
    target: str,
    offset: Annotated[
        float, typer.Option("--offset", help="pointer offset from the target's top")
    ],
    height: Annotated[float, typer.Option("--height", help="target height")] = 100.0,
) -> None:
    """Apply a drag-and-drop the way a graphical tree would."""
    controller: StoreController = ctx.obj
    store = controller.store

    controller.drop(
        resolve_entity_id(store, dragged),
        resolve_entity_id(store, target),
        resolve_drop_zone(offset, height),
    )


def run() -> None:
    try:
        app()
    except PersistenceFailed as error:
        error_console.print(
            f"[yellow]warning:[/yellow] the change is applied but was not saved: {error.reason}"
        )
        raise SystemExit(1)
    except FolioError as error:
        error_console.print(f"[red]error:[/red] {error}")
        raise SystemExit(1)
