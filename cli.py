"""
Sports bar backend CLI.

Command-line interface for common operator tasks: schema creation, seeding,
admin accounts, session cleanup and running the server.
"""

import sys
import time

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="sportsbar",
    help="Sports bar website backend CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create all database tables."""
    from sqlalchemy.exc import SQLAlchemyError

    from rest_api.models import Base
    from shared.infrastructure.db import engine

    console.print("[blue]Creating tables...[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ {len(Base.metadata.tables)} tables ready[/green]")


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed the admin user, menu categories, sample events and default settings."""
    from sqlalchemy.exc import SQLAlchemyError

    from rest_api.seed import seed as run_seed
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    try:
        with get_db_context() as db:
            run_seed(db)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Seeding failed: {e}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Seed complete[/green]")


# =============================================================================
# User Commands
# =============================================================================

@app.command()
def create_admin(
    username: str = typer.Option(..., "--username", "-u", help="Admin username"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Admin password"
    ),
    email: str = typer.Option(None, "--email", "-e", help="Optional email address"),
):
    """Create an admin account."""
    from rest_api.services.domain import UserService
    from shared.config.constants import Limits
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import AppException

    if len(password) < Limits.MIN_PASSWORD_LENGTH:
        console.print(f"[red]Password must be at least {Limits.MIN_PASSWORD_LENGTH} characters[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        try:
            user = UserService(db).ensure_admin(username, password, email)
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    if user is None:
        console.print(f"[yellow]User '{username}' already exists[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]✓ Admin '{username}' created ({user.id})[/green]")


@app.command()
def list_users():
    """List back-office users."""
    from rest_api.services.domain import UserService
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        users = UserService(db).list_all()

    table = Table(title="Users")
    table.add_column("Username", style="cyan")
    table.add_column("Role", style="green")
    table.add_column("Email")
    table.add_column("Active")
    for user in users:
        table.add_row(user.username, user.role, user.email or "-", "✓" if user.is_active else "✗")
    console.print(table)


# =============================================================================
# Session Commands
# =============================================================================

@app.command()
def purge_sessions():
    """Delete expired rows from the sessions table."""
    from rest_api.services.session_store import DatabaseSessionStore
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        removed = DatabaseSessionStore(db).purge_expired()
    console.print(f"[green]✓ Removed {removed} expired sessions[/green]")


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def run(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(None, help="Port (defaults to REST_API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn

    from shared.config.settings import settings

    uvicorn.run("rest_api.main:app", host=host, port=port or settings.rest_api_port, reload=reload)


@app.command()
def health(
    url: str = typer.Option(None, help="Base URL of a running API"),
):
    """Check a running API's health endpoint."""
    import httpx

    from shared.config.settings import settings

    base_url = url or f"http://localhost:{settings.rest_api_port}"

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    start = time.time()
    try:
        response = httpx.get(f"{base_url}/api/health", timeout=5.0)
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-")
        console.print(table)
        raise typer.Exit(1)

    elapsed = (time.time() - start) * 1000
    if response.status_code == 200:
        table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
    else:
        table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Sports Bar Backend Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "1.0.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
