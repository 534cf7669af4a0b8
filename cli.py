import typer
from rich.console import Console
from rich.table import Table
from typing import Optional
from contextlib import contextmanager

from plan2read.client import create_client, PlannerClient
from plan2read.community import default_copy_name
from plan2read.discussion import DEFAULT_CATEGORIES
from plan2read.errors import PlannerError, PublishIncompleteError
from plan2read.logging_handler import setup_logger
from plan2read.timeutil import Weekday

app = typer.Typer(help="Plan2Read CLI - weekly study schedules, community sharing and discussions")
console = Console()


@app.callback()
def main(ctx: typer.Context):
    """Plan2Read command line client"""
    if ctx.obj is None:
        setup_logger(console=False)
        ctx.obj = create_client()


@contextmanager
def report_errors(action: str):
    """Print core errors in red and exit with status 1"""
    try:
        yield
    except PublishIncompleteError as e:
        console.print(f"[yellow]![/yellow] {action} partly failed: {e}")
        console.print(f"  Published schedule {e.schedule_id} has no sessions.")
        raise typer.Exit(code=1)
    except PlannerError as e:
        console.print(f"[red]✗[/red] {action} failed: {e}")
        raise typer.Exit(code=1)


def _print_schedule(client: PlannerClient):
    current = client.repository.current_schedule
    if current is None:
        console.print("[yellow]No schedules yet. Create one with 'new-schedule'.[/yellow]")
        return

    console.print(f"\n[bold]{current.name}[/bold] ({current.id})")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Day", style="cyan", width=10)
    table.add_column("Time", width=13)
    table.add_column("Subject")
    table.add_column("Session ID", style="dim")

    for day in Weekday:
        for session in client.repository.sessions_for_day(day):
            table.add_row(day.value, f"{session.start_time}-{session.end_time}", session.subject, session.id)
    console.print(table)

    counts = client.repository.session_counts()
    console.print("  " + "  ".join(f"{day.value[:3]}: {n}" for day, n in counts.items()))


@app.command()
def whoami(ctx: typer.Context):
    """Show this installation's user ID"""
    console.print(ctx.obj.user_id)


@app.command()
def schedules(ctx: typer.Context):
    """List your schedules"""
    client: PlannerClient = ctx.obj
    with report_errors("Loading schedules"):
        client.repository.load_schedules()

    current_id = client.prefs.current_schedule_id
    if not client.repository.schedules:
        console.print("[yellow]No schedules yet.[/yellow]")
        return
    for s in client.repository.schedules:
        marker = "[green]✓[/green]" if s.id == current_id else " "
        visibility = "public" if s.is_public else "private"
        console.print(f"{marker} {s.id}  {s.name}  [dim]{visibility}[/dim]")


@app.command()
def new_schedule(ctx: typer.Context, name: str = typer.Argument(..., help="Schedule name")):
    """Create a new empty schedule and make it current"""
    client: PlannerClient = ctx.obj
    with report_errors("Creating schedule"):
        schedule_id = client.repository.create_schedule(name)
        client.repository.load_schedule(schedule_id)
    console.print(f"[green]✓[/green] Schedule created! ID: {schedule_id}")


@app.command()
def show(ctx: typer.Context, schedule_id: Optional[str] = typer.Argument(None, help="Schedule ID (default: current)")):
    """Show the sessions of a schedule by day"""
    client: PlannerClient = ctx.obj
    with report_errors("Loading schedule"):
        client.repository.open_planner()
        if schedule_id and client.repository.load_schedule(schedule_id) is None:
            console.print(f"[red]✗[/red] Schedule {schedule_id} not found")
            raise typer.Exit(code=1)
    _print_schedule(client)


@app.command()
def add_session(
    ctx: typer.Context,
    day: str = typer.Argument(..., help="Day of week, e.g. Monday"),
    subject: str = typer.Argument(..., help="Subject"),
    start: str = typer.Argument(..., help="Start time HH:MM"),
    end: str = typer.Argument(..., help="End time HH:MM"),
    schedule_id: Optional[str] = typer.Option(None, "--schedule", help="Schedule ID (default: current)")
):
    """Add a study session to the current schedule"""
    client: PlannerClient = ctx.obj
    with report_errors("Adding session"):
        client.repository.open_planner()
        if schedule_id:
            client.repository.load_schedule(schedule_id)
        session = client.repository.add_session(subject, start, end, day=day)
    console.print(f"[green]✓[/green] Added {session.subject} on {session.day_of_week.value} "
                  f"{session.start_time}-{session.end_time}")


@app.command()
def delete_session(ctx: typer.Context, session_id: str = typer.Argument(..., help="Session ID")):
    """Delete a study session"""
    client: PlannerClient = ctx.obj
    with report_errors("Deleting session"):
        client.repository.open_planner()
        client.repository.delete_session(session_id)
    console.print("[green]✓[/green] Session deleted")


@app.command()
def delete_schedule(ctx: typer.Context):
    """Delete the current schedule (not yet supported)"""
    client: PlannerClient = ctx.obj
    with report_errors("Deleting schedule"):
        client.repository.delete_schedule()


@app.command()
def share(ctx: typer.Context):
    """Publish a public copy of the current schedule"""
    client: PlannerClient = ctx.obj
    with report_errors("Sharing"):
        if client.repository.open_planner() is None:
            console.print("[red]✗[/red] No schedule to share")
            raise typer.Exit(code=1)
        shared_id = client.community.share_schedule()
    console.print(f"[green]✓[/green] Shared as {shared_id}")


@app.command()
def community(ctx: typer.Context):
    """List public schedules"""
    client: PlannerClient = ctx.obj
    with report_errors("Loading community"):
        rows = client.community.list_community()

    if not rows:
        console.print("[yellow]No shared schedules yet.[/yellow]")
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("By")
    for s in rows:
        table.add_row(s.id, s.name, f"{s.owner_id[:4]}...")
    console.print(table)


@app.command()
def copy(
    ctx: typer.Context,
    shared_id: str = typer.Argument(..., help="ID of a public schedule"),
    name: Optional[str] = typer.Option(None, help="Name for your copy (default: 'Copy of <name>')")
):
    """Copy a public schedule into your own schedules"""
    client: PlannerClient = ctx.obj
    with report_errors("Copying"):
        if not name:
            source = next((s for s in client.community.list_community() if s.id == shared_id), None)
            name = default_copy_name(source.name if source else shared_id)
        copy_id = client.community.copy_schedule(shared_id, name)
    console.print(f"[green]✓[/green] Copied as '{name}' (ID: {copy_id})")


@app.command()
def posts(ctx: typer.Context):
    """Show the discussion feed, newest first"""
    client: PlannerClient = ctx.obj
    with report_errors("Loading discussions"):
        feed = client.discussion.load_posts()

    if not feed:
        console.print("[yellow]No posts yet.[/yellow]")
        return
    for p in feed:
        when = p.created_at.strftime("%Y-%m-%d %H:%M") if p.created_at else ""
        console.print(f"[cyan][{p.category}][/cyan] [bold]{p.title}[/bold]  [dim]{when}  {p.id}[/dim]")
        console.print(f"  {p.content}")


@app.command()
def post(
    ctx: typer.Context,
    title: str = typer.Option(..., prompt="Title"),
    content: str = typer.Option(..., prompt="Content"),
    category: str = typer.Option(DEFAULT_CATEGORIES[0], help=f"One of: {', '.join(DEFAULT_CATEGORIES)}")
):
    """Create a discussion post"""
    client: PlannerClient = ctx.obj
    with report_errors("Posting"):
        post_id = client.discussion.create_post(title, content, category)
    console.print(f"[green]✓[/green] Posted! ID: {post_id}")


@app.command()
def comments(ctx: typer.Context, post_id: str = typer.Argument(..., help="Post ID")):
    """Show a post and its comments"""
    client: PlannerClient = ctx.obj
    with report_errors("Loading comments"):
        client.discussion.load_posts()
        p = client.discussion.open_post(post_id)
    if p is None:
        console.print(f"[red]✗[/red] Post {post_id} not found")
        raise typer.Exit(code=1)

    console.print(f"\n[bold]{p.title}[/bold]  [dim]by {p.user_id}[/dim]")
    console.print(p.content)
    console.print(f"\n[bold]Comments ({len(client.discussion.comments)})[/bold]")
    for c in client.discussion.comments:
        console.print(f"  [bold]{c.user_id}[/bold]: {c.content}")


@app.command()
def comment(
    ctx: typer.Context,
    post_id: str = typer.Argument(..., help="Post ID"),
    content: str = typer.Argument(..., help="Comment text")
):
    """Comment on a post"""
    client: PlannerClient = ctx.obj
    with report_errors("Commenting"):
        client.discussion.load_posts()
        if client.discussion.open_post(post_id) is None:
            console.print(f"[red]✗[/red] Post {post_id} not found")
            raise typer.Exit(code=1)
        client.discussion.submit_comment(content)
    console.print(f"[green]✓[/green] Comment added ({len(client.discussion.comments)} total)")


@app.command()
def theme(
    ctx: typer.Context,
    value: Optional[str] = typer.Argument(None, help="light or dark"),
    toggle: bool = typer.Option(False, "--toggle", help="Switch between light and dark")
):
    """Show or change the UI theme"""
    prefs = ctx.obj.prefs
    if toggle:
        prefs.toggle_theme()
    elif value:
        try:
            prefs.theme = value
        except ValueError as e:
            console.print(f"[red]✗[/red] {e}")
            raise typer.Exit(code=1)
    console.print(prefs.theme)


if __name__ == "__main__":
    app()
