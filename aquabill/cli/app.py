import questionary
from rich.console import Console

from aquabill.cli.bill_menu import list_bills_menu, preview_bill_menu, record_reading_menu
from aquabill.cli.connection_menu import connection_menu
from aquabill.cli.report_menu import billing_report_menu, consumption_report_menu
from aquabill.repositories.factory import (
    get_bill_repository,
    get_connection_repository,
    get_reading_repository,
)
from aquabill.services.bill_service import BillService
from aquabill.services.connection_service import ConnectionService
from aquabill.services.consumption_service import ConsumptionService

console = Console()


def _build_services() -> tuple[ConnectionService, ConsumptionService, BillService]:
    connection_repo = get_connection_repository()
    reading_repo = get_reading_repository()
    bill_repo = get_bill_repository()
    return (
        ConnectionService(connection_repo),
        ConsumptionService(reading_repo, connection_repo),
        BillService(bill_repo, connection_repo),
    )


def main_menu() -> None:
    connection_service, consumption_service, bill_service = _build_services()

    console.print()
    console.print("[bold]AquaBill - Water Billing[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Record Reading",
                "Preview Bill",
                "List Bills",
                "Consumption Report",
                "Billing Report",
                "Manage Connections",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Record Reading":
            record_reading_menu(connection_service, consumption_service, bill_service)
        elif choice == "Preview Bill":
            preview_bill_menu(bill_service)
        elif choice == "List Bills":
            list_bills_menu(bill_service)
        elif choice == "Consumption Report":
            consumption_report_menu(consumption_service)
        elif choice == "Billing Report":
            billing_report_menu(bill_service)
        elif choice == "Manage Connections":
            connection_menu(connection_service)
