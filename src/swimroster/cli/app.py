"""Swim Roster CLI application.

Usage:
    swimroster events seed-baseline
    swimroster meets add "Dual A" --date 2025-12-05 --no-jv
    swimroster presets ensure
    swimroster lineup reseed "Dual A"
    swimroster lineup check "Dual A"
    swimroster results prs --swimmer "Alex Kim"
    swimroster import meets meets.csv
    swimroster serve --reload
"""

import csv
import datetime
from contextlib import contextmanager
from pathlib import Path

import typer
from dotenv import load_dotenv

# Load .env file for Supabase credentials, limits, etc.
load_dotenv()
from rich.console import Console
from rich.table import Table

from swimroster.config import get_settings
from swimroster.dao.base import SupabaseClient, TableDAO
from swimroster.dao.event_dao import EventDAO
from swimroster.dao.lineup_dao import LineupDAO
from swimroster.dao.meet_dao import MeetDAO, MeetEventPresetDAO
from swimroster.dao.result_dao import ResultDAO
from swimroster.dao.swimmer_dao import SwimmerDAO
from swimroster.errors import SwimRosterError
from swimroster.logging import bind_context, clear_context, configure_logging
from swimroster.models import EventType, LineupReport, PRRecord, format_delta, format_serial
from swimroster.services import (
    EntryService,
    EventCatalogService,
    ImportKind,
    ImportResult,
    ImportService,
    LineupService,
    PresetResolver,
    PRService,
)
from swimroster.services.import_schemas import parse_date

console = Console()
app = typer.Typer(
    name="swimroster",
    help="Swim meet roster, lineup, and PR tools",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Log level (default: LOG_LEVEL or INFO)"),
):
    """Swim meet roster, lineup, and PR tools."""
    configure_logging(level=log_level)


# =============================================================================
# WIRING
# =============================================================================


def build_daos() -> dict[str, TableDAO]:
    """Supabase-backed stores for every table, keyed by table name."""
    client = SupabaseClient.get_client()
    return {
        "swimmers": SwimmerDAO(client),
        "events": EventDAO(client),
        "meets": MeetDAO(client),
        "meet_event_presets": MeetEventPresetDAO(client),
        "lineup_assignments": LineupDAO(client),
        "results": ResultDAO(client),
    }


class Services:
    """Every service, wired to one set of table stores."""

    def __init__(self, daos: dict[str, TableDAO]):
        self.catalog = EventCatalogService(daos["events"])
        self.presets = PresetResolver(
            daos["meets"], daos["events"], daos["meet_event_presets"], daos["lineup_assignments"]
        )
        self.lineup = LineupService(
            daos["swimmers"], daos["lineup_assignments"], daos["meets"], get_settings()
        )
        self.prs = PRService(daos["results"])
        self.entries = EntryService(
            daos["swimmers"], daos["events"], daos["meets"], daos["results"], self.presets
        )
        self.importer = ImportService(daos["swimmers"], daos["meets"], daos["results"], self.presets)
        self.meets = daos["meets"]


@contextmanager
def _services(**context: str):
    """Yield wired services; domain and configuration errors exit with status 1.

    Keyword arguments (e.g. meet="Dual A") are bound to every log entry
    emitted while the block runs.
    """
    bind_context(**context)
    try:
        yield Services(build_daos())
    except (SwimRosterError, RuntimeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    finally:
        clear_context()


def _date_option(value: str | None) -> datetime.date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


def _time(serial: float | None) -> str:
    return format_serial(serial) if serial is not None else "-"


def _yes_no(value: bool) -> str:
    return "[green]Yes[/green]" if value else "[dim]No[/dim]"


# =============================================================================
# EVENTS COMMANDS
# =============================================================================

events_app = typer.Typer(help="Event catalog commands", no_args_is_help=True)
app.add_typer(events_app, name="events")


@events_app.command("list")
def events_list():
    """List the event catalog in order."""
    with _services() as svc:
        events = svc.catalog.list_events()

    if not events:
        console.print("[yellow]No events found[/yellow]")
        console.print("Run: swimroster events seed-baseline")
        return

    table = Table(title=f"Events ({len(events)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Distance", justify="right")
    table.add_column("Stroke")
    table.add_column("Default Active")

    for event in events:
        table.add_row(
            event.name,
            event.type.value,
            str(event.distance or "-"),
            event.stroke or "-",
            _yes_no(event.default_active),
        )

    console.print(table)


@events_app.command("seed-baseline")
def events_seed_baseline():
    """Add the standard dual-meet events missing from the catalog."""
    with _services() as svc:
        created = svc.catalog.seed_baseline_events()
        presets = svc.presets.ensure_preset_catalog()

    console.print(f"[green]Added {len(created)} events[/green]")
    if presets:
        console.print(f"Added {len(presets)} meet presets")


@events_app.command("add")
def events_add(
    name: str = typer.Argument(..., help="Event name, e.g. '100 Backstroke'"),
    event_type: EventType = typer.Option(EventType.INDIVIDUAL, "--type", "-t", help="Individual or Relay"),
    distance: int = typer.Option(None, "--distance", "-d", help="Distance"),
    stroke: str = typer.Option("", "--stroke", "-s", help="Stroke"),
    default_active: bool = typer.Option(
        True, "--default-active/--default-inactive", help="Swum at meets unless overridden"
    ),
    add_jv: bool = typer.Option(False, "--jv", help="Also add the '(JV)' variant"),
):
    """Add an event to the catalog."""
    with _services() as svc:
        created = svc.entries.add_event(
            name=name,
            type=event_type,
            distance=distance,
            stroke=stroke,
            default_active=default_active,
            add_jv=add_jv,
        )

    for event in created:
        console.print(f"[green]Event added:[/green] {event.name}")


@events_app.command("enable-jv")
def events_enable_jv():
    """Add a '(JV)' variant for every varsity event lacking one."""
    with _services() as svc:
        created = svc.catalog.create_missing_jv_variants()
        svc.presets.ensure_preset_catalog()

    if not created:
        console.print("[yellow]Every event already has a JV variant[/yellow]")
        return
    console.print(f"[green]Added {len(created)} JV events[/green]")
    for event in created:
        console.print(f"  {event.name}")


# =============================================================================
# MEETS COMMANDS
# =============================================================================

meets_app = typer.Typer(help="Meet and preset commands", no_args_is_help=True)
app.add_typer(meets_app, name="meets")


@meets_app.command("list")
def meets_list():
    """List meets."""
    with _services() as svc:
        meets = svc.meets.get_all()

    if not meets:
        console.print("[yellow]No meets found[/yellow]")
        return

    table = Table(title=f"Meets ({len(meets)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Location")
    table.add_column("Course")
    table.add_column("Has JV")

    for meet in meets:
        table.add_row(
            meet.name,
            str(meet.date or "-"),
            meet.location or "-",
            meet.course.value if meet.course else "-",
            _yes_no(meet.has_jv),
        )

    console.print(table)


@meets_app.command("add")
def meets_add(
    name: str = typer.Argument(..., help="Meet name"),
    date: str = typer.Option(None, "--date", help="Meet date (YYYY-MM-DD or M/D/YYYY)"),
    location: str = typer.Option("", "--location", "-l", help="Venue"),
    course: str = typer.Option(None, "--course", "-c", help="Course (SCY/SCM/LCM)"),
    notes: str = typer.Option("", "--notes", help="Notes"),
    has_jv: bool = typer.Option(True, "--jv/--no-jv", help="Meet runs a JV division"),
):
    """Add a meet and seed its event presets."""
    meet_date = _date_option(date)
    with _services() as svc:
        meet = svc.entries.add_meet(
            name=name, date=meet_date, location=location, course=course, notes=notes, has_jv=has_jv
        )

    console.print("[green]Meet added![/green]")
    console.print(f"Name: {meet.name}")
    console.print(f"Has JV: {'Yes' if meet.has_jv else 'No'}")


@meets_app.command("presets")
def meets_presets(
    meet_name: str = typer.Argument(..., help="Meet name"),
):
    """Show each event's stored and effective state at a meet."""
    with _services(meet=meet_name) as svc:
        presets = svc.presets.list_presets(meet_name)
        active_map = svc.presets.resolve_active_map(meet_name)

    table = Table(title=f"Presets: {meet_name}")
    table.add_column("Event", style="cyan", no_wrap=True)
    table.add_column("Stored")
    table.add_column("Effective")
    table.add_column("Notes", style="dim")

    stored = {preset.event: preset for preset in presets}
    for event_name, active in active_map.items():
        preset = stored.get(event_name)
        table.add_row(
            event_name,
            _yes_no(preset.active) if preset else "[dim]-[/dim]",
            _yes_no(active),
            preset.notes if preset else "",
        )

    console.print(table)


@meets_app.command("disable-jv")
def meets_disable_jv(
    meet_name: str = typer.Argument(..., help="Meet name"),
):
    """Turn off JV presets for a meet without a JV division."""
    with _services(meet=meet_name) as svc:
        changed = svc.presets.force_disable_jv_for_meet(meet_name)

    console.print(f"[green]Disabled {len(changed)} JV presets[/green]")


@meets_app.command("restore-jv")
def meets_restore_jv(
    meet_name: str = typer.Argument(..., help="Meet name"),
):
    """Reset a JV meet's JV presets to the catalog defaults."""
    with _services(meet=meet_name) as svc:
        changed = svc.presets.restore_jv_defaults(meet_name)

    console.print(f"[green]Restored {len(changed)} JV presets[/green]")


# =============================================================================
# PRESETS COMMANDS
# =============================================================================

presets_app = typer.Typer(help="Preset catalog commands", no_args_is_help=True)
app.add_typer(presets_app, name="presets")


@presets_app.command("ensure")
def presets_ensure():
    """Add a preset row for every meet and event that lacks one."""
    with _services() as svc:
        created = svc.presets.ensure_preset_catalog()

    console.print(f"[green]Added {len(created)} presets[/green]")


# =============================================================================
# LINEUP COMMANDS
# =============================================================================

lineup_app = typer.Typer(help="Meet lineup commands", no_args_is_help=True)
app.add_typer(lineup_app, name="lineup")


@lineup_app.command("reseed")
def lineup_reseed(
    meet_name: str = typer.Argument(..., help="Meet name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Rebuild a meet's lineup from the catalog, discarding its entries."""
    if not yes:
        typer.confirm(f"Replace the lineup for '{meet_name}'?", abort=True)

    with _services(meet=meet_name) as svc:
        rows = svc.presets.reseed_assignments(meet_name)

    active = sum(1 for row in rows if row.active)
    console.print(f"[green]Lineup reseeded:[/green] {len(rows)} events, {active} active")


@lineup_app.command("apply")
def lineup_apply(
    meet_name: str = typer.Argument(..., help="Meet name"),
):
    """Set each lineup row's active flag from the meet's presets."""
    with _services(meet=meet_name) as svc:
        rows = svc.presets.apply_presets(meet_name)

    active = sum(1 for row in rows if row.active)
    console.print(f"[green]Presets applied:[/green] {active} of {len(rows)} events active")


def _print_report(meet_name: str, report: LineupReport) -> None:
    table = Table(title=f"Utilization: {meet_name}")
    table.add_column("Swimmer", style="cyan", no_wrap=True)
    table.add_column("Individual", justify="right")
    table.add_column("Relay", justify="right")
    table.add_column("Limit (Ind)", justify="right")
    table.add_column("Limit (Rel)", justify="right")
    table.add_column("Status")

    for row in report.utilization:
        status_color = "red" if row.status == "OVER" else "green"
        table.add_row(
            row.name,
            str(row.individual_count),
            str(row.relay_count),
            str(row.max_individual),
            str(row.max_relay),
            f"[{status_color}]{row.status.value}[/{status_color}]",
        )
    console.print(table)

    if not report.has_violations:
        console.print("[green]No violations[/green]")
        return

    for violation in report.over_limit:
        console.print(
            f"[red]Over limit:[/red] {violation.swimmer} has {violation.count} "
            f"{violation.dimension.value.lower()} events"
        )
    for violation in report.duplicate_leg:
        names = ", ".join(violation.duplicate_names)
        console.print(f"[red]Duplicate leg:[/red] row {violation.row} {violation.event_name}: {names}")
    for violation in report.level_mismatch:
        console.print(
            f"[yellow]Level mismatch:[/yellow] row {violation.row} {violation.event_name}: "
            f"{violation.swimmer} is Varsity"
        )


@lineup_app.command("check")
def lineup_check(
    meet_name: str = typer.Argument(..., help="Meet name"),
):
    """Check a meet's lineup for limit, relay, and level violations."""
    with _services(meet=meet_name) as svc:
        report = svc.lineup.check_meet(meet_name)

    _print_report(meet_name, report)


@lineup_app.command("packet")
def lineup_packet(
    meet_name: str = typer.Argument(..., help="Meet name"),
):
    """Print the coach packet for a meet."""
    with _services(meet=meet_name) as svc:
        rows = svc.lineup.coach_packet(meet_name)

    table = Table(title=f"Coach Packet: {meet_name}")
    table.add_column("Event", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Heat")
    table.add_column("Lane")
    table.add_column("Swimmers")

    for row in rows:
        table.add_row(row.event, row.type, row.heat, row.lane, row.participants)

    console.print(table)


# =============================================================================
# RESULTS COMMANDS
# =============================================================================

results_app = typer.Typer(help="Result log and PR commands", no_args_is_help=True)
app.add_typer(results_app, name="results")


@results_app.command("add")
def results_add(
    meet: str = typer.Option(..., "--meet", "-m", help="Meet name"),
    event: str = typer.Option(..., "--event", "-e", help="Event name"),
    swimmer: str = typer.Option(..., "--swimmer", "-s", help="Swimmer name"),
    final_time: str = typer.Option(..., "--time", "-t", help="Final time (e.g., 1:05.32)"),
    seed_time: str = typer.Option(None, "--seed", help="Seed time"),
    place: int = typer.Option(None, "--place", help="Finishing place"),
    notes: str = typer.Option("", "--notes", help="Notes"),
    date: str = typer.Option(None, "--date", help="Swim date (default: today)"),
):
    """Log one race result."""
    swim_date = _date_option(date)
    with _services() as svc:
        result = svc.entries.add_result(
            meet=meet,
            event=event,
            swimmer=swimmer,
            final_time=final_time,
            seed_time=seed_time,
            place=place,
            notes=notes,
            date=swim_date,
        )
        best = svc.prs.current_pr(swimmer, event)

    console.print(
        f"[green]Result added:[/green] {result.swimmer} {result.event} {result.final_time_formatted}"
    )
    if best is not None and best == result.final_time:
        console.print("[bold green]New PR![/bold green]")


def _pr_table(title: str, records: list[PRRecord], show_swimmer: bool = True) -> Table:
    table = Table(title=title)
    if show_swimmer:
        table.add_column("Swimmer", style="cyan", no_wrap=True)
    table.add_column("Event", no_wrap=True)
    table.add_column("PR Time", justify="right", style="green")
    table.add_column("PR Meet")
    table.add_column("PR Date")
    table.add_column("Races", justify="right")
    table.add_column("Last Swim", justify="right")
    table.add_column("Δ vs PR", justify="right")

    for record in records:
        cells = [
            record.event,
            record.best_time_formatted,
            record.best_meet or "-",
            str(record.best_date or "-"),
            str(record.race_count),
            _time(record.latest_time),
            format_delta(record.delta) if record.delta is not None else "-",
        ]
        if show_swimmer:
            cells.insert(0, record.swimmer)
        table.add_row(*cells)
    return table


@results_app.command("prs")
def results_prs(
    swimmer: str = typer.Option(None, "--swimmer", "-s", help="Only this swimmer"),
):
    """Show best and latest times for every swimmer and event."""
    with _services() as svc:
        records = svc.prs.dashboard(swimmer) if swimmer else svc.prs.all_prs()

    if not records:
        console.print("[yellow]No results found[/yellow]")
        return

    console.print(_pr_table(f"PRs ({len(records)})", records))


@results_app.command("dashboard")
def results_dashboard(
    swimmer: str = typer.Argument(..., help="Swimmer name"),
):
    """Show one swimmer's PR dashboard."""
    with _services() as svc:
        records = svc.prs.dashboard(swimmer)

    if not records:
        console.print(f"[yellow]No results for {swimmer}[/yellow]")
        return

    console.print(_pr_table(f"Dashboard: {swimmer}", records, show_swimmer=False))


# =============================================================================
# IMPORT COMMANDS
# =============================================================================

import_app = typer.Typer(help="Import rows from CSV files", no_args_is_help=True)
app.add_typer(import_app, name="import")


def _read_csv(csv_path: Path) -> list[list[str]]:
    if not csv_path.exists():
        console.print(f"[red]File not found: {csv_path}[/red]")
        raise typer.Exit(1)
    with open(csv_path, newline="", encoding="utf-8-sig") as f:
        return list(csv.reader(f))


def _display_import_result(result: ImportResult) -> None:
    console.print(f"[green]Inserted:[/green] {result.inserted}")
    if result.updated:
        console.print(f"[cyan]Updated:[/cyan] {result.updated}")
    if result.skipped:
        console.print(f"[yellow]Skipped ({result.skipped_count}):[/yellow]")
        for row in result.skipped[:10]:
            console.print(f"  Row {row.row_number}: {row.reason}")
        if result.skipped_count > 10:
            console.print(f"  [dim]... and {result.skipped_count - 10} more[/dim]")


def _run_import(
    kind: ImportKind, csv_path: Path, has_header: bool, default_date: datetime.date | None = None
) -> None:
    rows = _read_csv(csv_path)
    console.print(f"[cyan]Importing {kind.value}:[/cyan] {csv_path}")
    with _services() as svc:
        result = svc.importer.import_rows(kind, rows, has_header=has_header, default_date=default_date)
    _display_import_result(result)


@import_app.command("swimmers")
def import_swimmers(
    csv_path: Path = typer.Argument(..., help="CSV: Name, Grad Year, Gender, Level, Notes"),
    has_header: bool = typer.Option(True, "--header/--no-header", help="First row is a header"),
):
    """Add or update swimmers by name."""
    _run_import(ImportKind.SWIMMERS, csv_path, has_header)


@import_app.command("meets")
def import_meets(
    csv_path: Path = typer.Argument(..., help="CSV: Meet, Date, Location, Course, Notes, Has JV?"),
    has_header: bool = typer.Option(True, "--header/--no-header", help="First row is a header"),
):
    """Add new meets; existing meet names are skipped."""
    _run_import(ImportKind.MEETS, csv_path, has_header)


@import_app.command("prs")
def import_prs(
    csv_path: Path = typer.Argument(..., help="CSV: Swimmer, Event, Time, Date (optional)"),
    has_header: bool = typer.Option(True, "--header/--no-header", help="First row is a header"),
    date: str = typer.Option(None, "--date", help="Date for rows without one (default: today)"),
):
    """Log baseline PR times."""
    _run_import(ImportKind.PRS, csv_path, has_header, _date_option(date))


# =============================================================================
# SERVER
# =============================================================================


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the HTTP API."""
    import uvicorn

    console.print(f"[cyan]Serving API on http://{host}:{port}[/cyan]")
    uvicorn.run("swimroster.api.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
