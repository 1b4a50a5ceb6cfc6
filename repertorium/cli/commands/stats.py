"""Stats command - show register totals for a year."""

import sys

import cyclopts
import httpx

from repertorium.cli.client import get_server_url, with_retry
from repertorium.cli.console import get_console

app = cyclopts.App(name="stats", help="Show register statistics")


@app.default
def stats(*, year: int, office: str | None = None) -> None:
    """Show entries per month and the last issued yearly number.

    Args:
        year: Register year.
        office: Restrict to one notarial office.
    """
    console = get_console()
    server_url = get_server_url()
    url = f"{server_url}/api/v1/repertorium/stats/{year}"
    params = {"office_id": office} if office else None

    try:
        response = with_retry(
            lambda: httpx.get(url, params=params),
            exceptions=(httpx.ReadError, httpx.ConnectError),
        )
        response.raise_for_status()
        data = response.json()
    except httpx.ConnectError:
        console.error(
            f"Could not connect to server at {server_url}",
            hint="Is the server running? Start it with: repertorium serve",
        )
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        console.error(f"Server error: {e.response.status_code} - {e.response.text}")
        sys.exit(1)
    except httpx.ReadError:
        console.error("Connection lost while reading response")
        sys.exit(1)

    console.print(f"[bold]Register {data['year']}[/bold]")
    console.print(f"Entries: {data['total_for_year']:,}")
    console.print(f"Last number: {data['last_yearly_seq']}")
    months = data.get("per_month_counts", [])
    if months:
        console.table(months, [("month", "Month"), ("count", "Entries")])
    else:
        console.print("[dim]No entries registered[/dim]")
