from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from aquabill.cli.prompts import ask_int
from aquabill.services.connection_service import ConnectionService

console = Console()


def _list_connections(connection_service: ConnectionService) -> None:
    connections = connection_service.list_connections()
    if not connections:
        console.print("[yellow]No connections registered.[/yellow]")
        return

    table = Table(title="Connections")
    table.add_column("#", style="dim")
    table.add_column("User", justify="right")
    table.add_column("Address")
    table.add_column("Status")
    for c in connections:
        table.add_row(str(c.id), str(c.user_id or "-"), c.address or "-", c.status)

    console.print()
    console.print(table)


def _create_connection(connection_service: ConnectionService) -> None:
    user_id = ask_int("User ID:")
    if user_id is None:
        return
    address = questionary.text("Address (optional):").ask() or ""
    connection = connection_service.create_connection(user_id, address)
    console.print(f"[green]Connection #{connection.id} created.[/green]")


def connection_menu(connection_service: ConnectionService) -> None:
    while True:
        action = questionary.select(
            "Connections:",
            choices=["List Connections", "New Connection", "Back"],
        ).ask()

        if action is None or action == "Back":
            break
        elif action == "List Connections":
            _list_connections(connection_service)
        elif action == "New Connection":
            _create_connection(connection_service)
