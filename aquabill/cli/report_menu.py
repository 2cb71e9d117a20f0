from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from aquabill.cli.prompts import ask_int
from aquabill.constants import format_month
from aquabill.models import format_currency
from aquabill.services import statistics
from aquabill.services.bill_service import BillService
from aquabill.services.consumption_service import ConsumptionService

console = Console()


def _show_consumption(consumption_service: ConsumptionService, connection_id: int | None) -> None:
    summary = consumption_service.consumption_summary(connection_id)
    stats = summary.stats
    if stats.count == 0:
        console.print("[yellow]No readings recorded.[/yellow]")
        return

    title = "All connections" if connection_id is None else f"Connection #{connection_id}"
    table = Table(title=f"Consumption - {title}", show_header=False)
    table.add_column("Metric")
    table.add_column("Units", justify="right")
    table.add_row("Readings", str(stats.count))
    table.add_row("Total", f"{stats.total:g}")
    table.add_row("Mean", f"{stats.mean:g}")
    table.add_row("Median", f"{stats.median:g}")
    table.add_row("Min / Max", f"{stats.min:g} / {stats.max:g}")
    table.add_row("Std. deviation", f"{stats.std_dev:g}")
    table.add_row("Q25 / Q75", f"{stats.q25:g} / {stats.q75:g}")
    table.add_row("Trend", f"{summary.trend.trend} (slope {summary.trend.slope:g})")

    console.print()
    console.print(table)

    if connection_id is not None:
        average = consumption_service.average_consumption(connection_id)
        change = consumption_service.consumption_trend(connection_id)
        console.print(f"  6-month average: {average:g} units")
        console.print(f"  Change over period: {change.change:g}% ({change.trend})")


def _show_monthly(consumption_service: ConsumptionService, user_id: int) -> None:
    months = consumption_service.monthly_consumption(user_id)
    if not months:
        console.print("[yellow]No readings in the last 6 months.[/yellow]")
        return

    table = Table(title=f"Monthly consumption - user #{user_id}")
    table.add_column("Month")
    table.add_column("Readings", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Average", justify="right")
    for m in months:
        table.add_row(
            format_month(m.month),
            str(m.reading_count),
            f"{m.total_consumption:g}",
            f"{m.average_consumption:g}",
        )

    console.print()
    console.print(table)
    moving = statistics.moving_average([m.total_consumption for m in months])
    if moving:
        console.print(f"  3-month moving average: {', '.join(f'{v:g}' for v in moving)}")


def consumption_report_menu(consumption_service: ConsumptionService) -> None:
    choice = questionary.select(
        "Consumption report:",
        choices=["By Connection", "Monthly by User", "Back"],
    ).ask()

    if choice is None or choice == "Back":
        return
    if choice == "By Connection":
        connection_id = ask_int("Connection ID (blank for all):", optional=True)
        _show_consumption(consumption_service, connection_id)
    elif choice == "Monthly by User":
        user_id = ask_int("User ID:")
        if user_id is not None:
            _show_monthly(consumption_service, user_id)


def billing_report_menu(bill_service: BillService) -> None:
    connection_id = ask_int("Connection ID (blank for all):", optional=True)
    stats = bill_service.billing_summary(connection_id)

    table = Table(title="Billing summary", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Bills", str(stats.total_bills))
    table.add_row("Total billed", format_currency(stats.total_amount))
    table.add_row("Average bill", format_currency(stats.average_amount))
    table.add_row("Paid", format_currency(stats.paid_amount))
    table.add_row("Unpaid", format_currency(stats.unpaid_amount))
    table.add_row("Overdue", format_currency(stats.overdue_amount))
    table.add_row("Payment rate", f"{stats.payment_rate}%")

    console.print()
    console.print(table)

    user_id = ask_int("User ID for outstanding balance (blank to skip):", optional=True)
    if user_id is not None:
        outstanding = bill_service.outstanding_for_user(user_id)
        console.print(f"  Outstanding with late fees: [bold]{format_currency(outstanding)}[/bold]")
