# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from folio import configuration
from folio.repository.configuration import CONFIGURATION_REPO
from folio.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row(
        "backup_on_save",
        "✓ Enabled" if config["backup_on_save"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "implicit_root_ids",
        ", ".join(config["implicit_root_ids"]) or "None",
    )

    Console().print(table)


@app.command("set, s")
def set_config(
    data_path: Annotated[Optional[str], typer.Option("--data-path")] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
    backup_on_save: Annotated[
        Optional[bool], typer.Option("--backup-on-save/--no-backup-on-save")
    ] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level")] = None,
    show_header: Annotated[
        Optional[bool], typer.Option("--show-header/--hide-header")
    ] = None,
) -> None:
    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        backup_on_save=backup_on_save,
        log_level=log_level,
        show_header=show_header,
    )
    CONFIGURATION_REPO.flush()
