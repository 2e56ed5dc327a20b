#!/usr/bin/env python3
"""
Close the current billing period.

Fetches everyone's live cumulative usage from the upstream admin API and
stores it as a new snapshot. The snapshot ends the current period and
starts the next one.

Usage:
    uv run python begin_period.py
    uv run python begin_period.py --timezone Europe/Berlin

Configuration:
    BASE_URL, ADMIN_USERNAME, ADMIN_PASSWORD   upstream admin API
    SNAPSHOT_BACKEND=supabase                  persist snapshots
    SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY    Supabase project
"""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.table import Table

from api.dependencies import get_container
from shared.config import get_settings
from shared.exceptions import CostshareError
from modules.snapshots.models import SnapshotCapture

console = Console()


def print_capture(capture: SnapshotCapture) -> None:
    """Print a summary of the new snapshot."""
    table = Table(title="New Billing Period Started", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Snapshot ID", str(capture.snapshot_id))
    table.add_row("Timestamp", capture.created_at.isoformat())
    table.add_row("Timezone", capture.timezone)
    table.add_row("Users", str(capture.user_count))
    table.add_row("Total Cost at Snapshot", f"${capture.total_cost:.2f}")
    console.print(table)


async def begin_period(timezone_name: str | None) -> SnapshotCapture:
    service = get_container().snapshots
    return await service.close_period(timezone_name)


def main():
    parser = argparse.ArgumentParser(description="Close the current billing period")
    parser.add_argument("--timezone", type=str, help="Timezone label stored with the snapshot")
    args = parser.parse_args()

    settings = get_settings()
    if settings.snapshot_backend == "memory":
        console.print(
            "[yellow]Warning:[/yellow] SNAPSHOT_BACKEND is 'memory'; "
            "the snapshot will be lost when this command exits."
        )

    console.print("Starting new billing period...")
    try:
        capture = asyncio.run(begin_period(args.timezone))
    except (CostshareError, RuntimeError) as e:
        console.print(f"[red]Failed to create new billing period:[/red] {e}")
        sys.exit(1)

    print_capture(capture)
    console.print("[green]New billing period created successfully![/green]")


if __name__ == "__main__":
    main()
