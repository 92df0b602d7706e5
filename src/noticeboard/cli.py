"""Noticeboard CLI - notice tracking dashboard."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.notice_api import ApiError, AuthenticationError
from .config import load_config
from .core.buckets import Bucket
from .core.dashboard import BUCKET_LABELS, TRACK_LABELS, format_dashboard_sections, format_notice_line
from .core.files import DataItem
from .core.notices import Client, Notice, NoticeStatus, Track
from .workflows import (
    add_client,
    create_folder,
    download_backup,
    get_adapter,
    load_clients,
    load_dashboard,
    load_day,
    load_folder,
    load_month,
    login as do_login,
    logout as do_logout,
    set_notice_status,
)

TRACKS = {"due": Track.DUE, "hearing": Track.HEARING}
BUCKETS = {"week": Bucket.THIS_WEEK, "month": Bucket.THIS_MONTH, "overdue": Bucket.OVERDUE}


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _notice_json(n: Notice) -> dict:
    return {
        "_id": n.id,
        "heading": n.heading,
        "dueDate": n.due_date.isoformat() if n.due_date else None,
        "hearingDate": n.hearing_date.isoformat() if n.hearing_date else None,
        "status": n.status.value,
        "client": {"_id": n.client.id, "name": n.client.name} if n.client else None,
    }


def _client_json(c: Client) -> dict:
    return {"_id": c.id, "name": c.name, "type": c.client_type}


def _parse_date(value: str, fmt_hint: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"expected {fmt_hint}, got {value!r}")


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Noticeboard - track notices, hearings and client files."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Log in to the notice server."""
    config = load_config()
    try:
        session = do_login(get_adapter(config), email, password)
    except (AuthenticationError, ApiError) as e:
        _fail(e)
    name = session.user.name if session.user and session.user.name else email
    click.echo(f"Logged in as {name}")


@main.command()
def logout():
    """Log out and forget the saved session."""
    do_logout(get_adapter(load_config()))
    click.echo("Logged out.")


@main.command()
@click.option("--all-statuses", is_flag=True, help="Include completed notices in every bucket")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def dashboard(all_statuses: bool, as_json: bool):
    """Show counts and this week / this month / overdue notices."""
    config = load_config()
    try:
        stats = load_dashboard(get_adapter(config), config)
    except (AuthenticationError, ApiError) as e:
        _fail(e)

    if as_json:
        view = stats.categorized if all_statuses else stats.actionable
        click.echo(
            json.dumps(
                {
                    "totalClients": stats.counts.total_clients,
                    "totalNotices": stats.counts.total_notices,
                    "pendingNotices": stats.counts.pending,
                    "completedNotices": stats.counts.completed,
                    "noticesByCategory": {
                        track: {bucket: [_notice_json(n) for n in notices] for bucket, notices in buckets.items()}
                        for track, buckets in view.to_dict().items()
                    },
                    "latestCompletedNotices": [_notice_json(n) for n in stats.latest_completed],
                },
                indent=2,
            )
        )
        return

    sections = format_dashboard_sections(stats, show_all=all_statuses)
    click.echo(f"Dashboard for {stats.date.strftime('%A, %b %d')}\n")
    click.echo(sections["summary"])
    click.echo("\n## Due Dates\n")
    click.echo(sections["due"])
    click.echo("\n## Hearings\n")
    click.echo(sections["hearing"])
    click.echo("\n## Recently Completed\n")
    click.echo(sections["completed"])


@main.command()
@click.argument("bucket", type=click.Choice(list(BUCKETS)))
@click.option("--track", type=click.Choice(list(TRACKS)), default="due", show_default=True)
@click.option("--all-statuses", is_flag=True, help="Include completed notices")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def notices(bucket: str, track: str, all_statuses: bool, as_json: bool):
    """List notices in one bucket."""
    config = load_config()
    try:
        stats = load_dashboard(get_adapter(config), config)
    except (AuthenticationError, ApiError) as e:
        _fail(e)

    view = stats.categorized if all_statuses else stats.actionable
    selected = view.track(TRACKS[track]).get(BUCKETS[bucket])

    if as_json:
        click.echo(json.dumps([_notice_json(n) for n in selected], indent=2))
        return

    title = f"{TRACK_LABELS[TRACKS[track]]} {BUCKET_LABELS[BUCKETS[bucket]]}"
    if not selected:
        click.echo(f"No notices: {title}.")
        return
    click.echo(f"{title} ({len(selected)})")
    for n in selected:
        click.echo(format_notice_line(n, TRACKS[track], stats.date))


@main.command()
@click.argument("notice_id")
def complete(notice_id: str):
    """Mark a notice as completed."""
    _set_status(notice_id, NoticeStatus.COMPLETED)


@main.command()
@click.argument("notice_id")
def reopen(notice_id: str):
    """Mark a completed notice as pending again."""
    _set_status(notice_id, NoticeStatus.PENDING)


def _set_status(notice_id: str, status: NoticeStatus) -> None:
    config = load_config()
    try:
        set_notice_status(get_adapter(config), notice_id, status)
    except (AuthenticationError, ApiError) as e:
        _fail(e)
    click.echo(f"Notice {notice_id} marked {status.value}.")


@main.command()
@click.option("--month", "month_str", default=None, help="Month to show (YYYY-MM), defaults to this month")
@click.option("--track", type=click.Choice(list(TRACKS)), default="due", show_default=True)
def calendar(month_str: str | None, track: str):
    """Month grid with markers on days that have notices."""
    from .core.calendar import month_grid

    month = _parse_date(f"{month_str}-01", "YYYY-MM") if month_str else date.today()
    config = load_config()
    try:
        view = load_month(get_adapter(config), month, TRACKS[track])
    except (AuthenticationError, ApiError) as e:
        _fail(e)

    click.echo(view.month.strftime("%B %Y").center(28))
    click.echo("".join(f"{d:>4}" for d in ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]))
    for week in month_grid(view.month):
        cells = []
        for d in week:
            if d.month != view.month.month:
                cells.append("    ")
                continue
            marker = "*" if d.isoformat() in view.marked else " "
            cells.append(f"{d.day:>3}{marker}")
        click.echo("".join(cells))
    click.echo(f"\n* = {TRACK_LABELS[TRACKS[track]].lower()} date ({len(view.marked)} days)")


@main.command()
@click.argument("day_str", metavar="DATE")
@click.option("--track", type=click.Choice(list(TRACKS)), default=None, help="Default: either date")
def day(day_str: str, track: str | None):
    """Notices due or heard on DATE (YYYY-MM-DD)."""
    target = _parse_date(day_str, "YYYY-MM-DD")
    config = load_config()
    try:
        found = load_day(get_adapter(config), target, TRACKS[track] if track else None)
    except (AuthenticationError, ApiError) as e:
        _fail(e)

    if not found:
        click.echo(f"No notices for {target.strftime('%b %d, %Y')}.")
        return
    click.echo(f"Notices: {target.strftime('%b %d, %Y')}\n")
    for n in found:
        click.echo(format_notice_line(n, TRACKS[track] if track else Track.DUE, target))


@main.command()
@click.argument("folder_id", required=False)
@click.option("--search", default="", help="Filter items by name")
def files(folder_id: str | None, search: str):
    """Browse stored files and folders."""
    config = load_config()
    try:
        view = load_folder(get_adapter(config), folder_id, search)
    except (AuthenticationError, ApiError, ValueError) as e:
        _fail(e)

    click.echo(" / ".join(c.name for c in view.breadcrumbs))
    if not view.folders and not view.files:
        click.echo("\nThis folder is empty.")
        return

    def line(item: DataItem) -> str:
        created = f"  {item.created_at.date().isoformat()}" if item.created_at else ""
        return f"  {item.id}  {item.name}{created}"

    if view.folders:
        click.echo("\nFolders:")
        for item in view.folders:
            click.echo(line(item))
    if view.files:
        click.echo("\nFiles:")
        for item in view.files:
            click.echo(line(item))


@main.command()
@click.argument("name")
@click.option("--parent", "parent_id", default=None, help="Folder to create it in (default: root)")
def mkdir(name: str, parent_id: str | None):
    """Create a folder."""
    config = load_config()
    try:
        item = create_folder(get_adapter(config), name, parent_id)
    except (AuthenticationError, ApiError, ValueError) as e:
        _fail(e)
    click.echo(f"Created folder {item.name} ({item.id})")


@main.command()
@click.argument("item_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def rm(item_id: str, yes: bool):
    """Delete a file, or a folder with everything in it."""
    if not yes and not click.confirm(f"Delete {item_id} and everything under it?"):
        return
    config = load_config()
    try:
        get_adapter(config).delete_item(item_id)
    except (AuthenticationError, ApiError) as e:
        _fail(e)
    click.echo(f"Deleted {item_id}.")


@main.group(invoke_without_command=True)
@click.pass_context
def clients(ctx):
    """List and manage clients."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(clients_list)


@clients.command("list")
@click.option("--search", default="", help="Filter clients by name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def clients_list(search: str = "", as_json: bool = False):
    """List registered clients."""
    config = load_config()
    try:
        found = load_clients(get_adapter(config), search)
    except (AuthenticationError, ApiError) as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([_client_json(c) for c in found], indent=2))
        return
    if not found:
        click.echo("No clients.")
        return
    for c in found:
        kind = f"  [{c.client_type}]" if c.client_type else ""
        click.echo(f"  {c.id}  {c.name}{kind}")


@clients.command("add")
@click.argument("name")
@click.option("--type", "client_type", default="", help="Client type, e.g. Individual or Company")
def clients_add(name: str, client_type: str):
    """Register a new client."""
    config = load_config()
    try:
        client = add_client(get_adapter(config), name, client_type)
    except (AuthenticationError, ApiError, ValueError) as e:
        _fail(e)
    click.echo(f"Added client {client.name} ({client.id})")


@clients.command("delete")
@click.argument("client_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def clients_delete(client_id: str, yes: bool):
    """Delete a client."""
    if not yes and not click.confirm(f"Delete client {client_id}?"):
        return
    config = load_config()
    try:
        get_adapter(config).delete_client(client_id)
    except (AuthenticationError, ApiError) as e:
        _fail(e)
    click.echo(f"Deleted client {client_id}.")


@main.command()
@click.option("--output", "-o", default=None, help="Directory to save the backup in")
def backup(output: str | None):
    """Download a complete backup of notices, clients and files."""
    config = load_config()
    try:
        path = download_backup(get_adapter(config), config, output)
    except (AuthenticationError, ApiError) as e:
        _fail(e)
    click.echo(f"Backup saved to {path}")


if __name__ == "__main__":
    main()
