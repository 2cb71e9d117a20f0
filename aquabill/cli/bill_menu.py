from __future__ import annotations

from datetime import datetime

import questionary
from rich.console import Console
from rich.table import Table

from aquabill.cli.prompts import ask_amount, ask_date, ask_int
from aquabill.constants import STATUS_STYLES, TZ
from aquabill.models import format_currency
from aquabill.models.bill import Bill, BillBreakdown
from aquabill.models.reading import MeterReading
from aquabill.services.bill_service import BillService
from aquabill.services.connection_service import ConnectionService
from aquabill.services.consumption_service import ConsumptionService

console = Console()


def _show_breakdown(breakdown: BillBreakdown) -> None:
    table = Table(show_header=False)
    table.add_column("Item")
    table.add_column("Value", justify="right")
    table.add_row("Units consumed", f"{breakdown.units_consumed:g}")
    table.add_row("Rate per unit", format_currency(breakdown.rate_per_unit))
    table.add_row("Base amount", format_currency(breakdown.base_amount))
    table.add_row(f"Tax ({breakdown.tax_rate:.0%})", format_currency(breakdown.tax_amount))
    table.add_row("Service charge", format_currency(breakdown.service_charge))
    console.print(table)
    console.print(f"  [bold]Total: {format_currency(breakdown.total_amount)}[/bold]")


def _status_label(bill: Bill, bill_service: BillService) -> str:
    status = bill_service.display_status(bill)
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status}[/{style}]"


def _show_bill_detail(bill: Bill, bill_service: BillService) -> None:
    console.print(f"  Bill number: {bill.bill_number}")
    console.print(f"  Connection: {bill.connection_id or '-'}  User: {bill.user_id or '-'}")
    console.print(f"  Bill date: {bill.bill_date.isoformat()}  Due: {bill.due_date.isoformat()}")
    _show_breakdown(
        BillBreakdown(
            units_consumed=bill.units_consumed,
            rate_per_unit=bill.rate_per_unit,
            base_amount=bill.base_amount,
            service_charge=bill.service_charge,
            tax_rate=bill.tax_rate,
            tax_amount=bill.tax_amount,
            total_amount=bill.amount,
        )
    )
    console.print(f"  Status: {_status_label(bill, bill_service)}")


def preview_bill_menu(bill_service: BillService) -> None:
    console.print()
    console.print("[bold]Bill Preview[/bold]", style="cyan")

    units = ask_amount("Units consumed (e.g. 120):")
    if units is None:
        return
    _show_breakdown(bill_service.calculator.preview_bill(units))


def record_reading_menu(
    connection_service: ConnectionService,
    consumption_service: ConsumptionService,
    bill_service: BillService,
) -> None:
    console.print()
    console.print("[bold]Record Meter Reading[/bold]", style="cyan")

    connection_id = ask_int("Connection ID:")
    if connection_id is None:
        return
    if connection_service.get_connection(connection_id) is None:
        console.print(f"[red]Connection #{connection_id} not found.[/red]")
        return

    reading_date = ask_date("Reading date (YYYY-MM-DD):", default=datetime.now(TZ).date())
    if reading_date is None:
        return
    units = ask_amount("Units consumed:")
    if units is None:
        return

    reading, alert = consumption_service.record_reading(
        MeterReading(connection_id=connection_id, reading_date=reading_date, units_consumed=units)
    )
    if alert.should_alert:
        color = "red" if alert.severity == "high" else "yellow"
        console.print(f"[{color}]{alert.message}[/{color}]")

    bill = bill_service.generate_for_reading(reading)

    console.print()
    console.print("[green bold]Bill generated![/green bold]")
    _show_bill_detail(bill, bill_service)


def list_bills_menu(bill_service: BillService) -> None:
    connection_id = ask_int("Connection ID (blank for all):", optional=True)
    bills = bill_service.list_bills(connection_id)

    if not bills:
        console.print("[yellow]No bills found.[/yellow]")
        return

    table = Table(title="Bills")
    table.add_column("Number", style="dim")
    table.add_column("Connection", justify="right")
    table.add_column("Bill date")
    table.add_column("Due date")
    table.add_column("Amount", justify="right")
    table.add_column("Status")

    for b in bills:
        table.add_row(
            b.bill_number,
            str(b.connection_id or "-"),
            b.bill_date.isoformat(),
            b.due_date.isoformat(),
            format_currency(b.amount),
            _status_label(b, bill_service),
        )

    console.print()
    console.print(table)

    bill_choices = {f"{b.bill_number} - {format_currency(b.amount)}": b for b in bills}
    choices = list(bill_choices.keys()) + ["Back"]
    choice = questionary.select("Select a bill:", choices=choices).ask()

    if choice is None or choice == "Back":
        return

    _bill_detail_menu(bill_choices[choice], bill_service)


def _bill_detail_menu(bill: Bill, bill_service: BillService) -> None:
    while True:
        console.print()
        console.print(f"[bold cyan]Bill {bill.bill_number}[/bold cyan]")
        _show_bill_detail(bill, bill_service)
        console.print()

        paid_label = "Mark as Unpaid" if bill.is_paid else "Mark as Paid"
        action = questionary.select("Actions:", choices=[paid_label, "Back"]).ask()

        if action is None or action == "Back":
            break
        elif action == paid_label:
            bill = bill_service.toggle_paid(bill)
            if bill.is_paid:
                console.print("[green]Bill marked as paid![/green]")
            else:
                console.print("[yellow]Payment cleared.[/yellow]")
