#!/usr/bin/env python3
"""
Apply the Sweet Shop SQL migrations to the Supabase Postgres database.

Migrations are the ``migrations/*.sql`` files, applied in name order and
recorded in a ``_migrations`` table together with a checksum of their text.

Usage:
    python run_migrations.py              # Apply pending migrations
    python run_migrations.py --status     # Show applied and pending migrations
    python run_migrations.py --dry-run    # List what would be applied

Configuration:
    SUPABASE_DB_URL=postgresql://postgres.[project-ref]:[password]@[host]:6543/postgres
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


@dataclass(frozen=True)
class Migration:
    name: str
    path: Path
    checksum: str


def checksum(content: str) -> str:
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """All migration files in the directory, sorted by name."""
    if not directory.exists():
        return []
    return [
        Migration(name=path.name, path=path, checksum=checksum(path.read_text()))
        for path in sorted(directory.glob("*.sql"))
    ]


def pending_migrations(
    migrations: list[Migration],
    applied: dict[str, str],
) -> tuple[list[Migration], list[Migration]]:
    """
    Split migrations into those still to run and those edited after running.

    Args:
        migrations: Discovered migration files
        applied: Applied migration name -> recorded checksum

    Returns:
        (pending, changed)
    """
    pending = [m for m in migrations if m.name not in applied]
    changed = [m for m in migrations if m.name in applied and applied[m.name] != m.checksum]
    return pending, changed


def connect(db_url: str):
    if not db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        console.print("Find it in Supabase Dashboard → Settings → Database → Connection string → URI")
        sys.exit(1)
    try:
        return psycopg2.connect(db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_migrations_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("""
                CREATE TABLE IF NOT EXISTS {} (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR(255) NOT NULL UNIQUE,
                    checksum VARCHAR(64) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
            """).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def applied_migrations(conn) -> dict[str, str]:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {name: recorded for name, recorded in cur.fetchall()}


def apply_migration(conn, migration: Migration) -> None:
    """Run one migration and record it, in a single transaction."""
    console.print(f"[blue]Applying:[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name} failed: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name} applied")


def show_status(migrations: list[Migration], applied: dict[str, str]) -> None:
    if not migrations and not applied:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Checksum")

    pending, changed = pending_migrations(migrations, applied)
    for migration in migrations:
        if migration in pending:
            status = "[yellow]Pending[/yellow]"
        elif migration in changed:
            status = "[red]Changed since applied[/red]"
        else:
            status = "[green]Applied[/green]"
        table.add_row(migration.name, status, migration.checksum)
    console.print(table)


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply Sweet Shop database migrations")
    parser.add_argument("--status", action="store_true", help="Show migration status and exit")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations without running them")
    args = parser.parse_args()

    console.print("[bold]Sweet Shop Database Migrations[/bold]")

    conn = connect(get_settings().supabase_db_url)
    try:
        ensure_migrations_table(conn)
        migrations = discover_migrations()
        applied = applied_migrations(conn)

        if args.status:
            show_status(migrations, applied)
            return

        pending, changed = pending_migrations(migrations, applied)
        for migration in changed:
            console.print(f"[yellow]Warning:[/yellow] {migration.name} has changed since it was applied")

        if not pending:
            console.print("[green]All migrations are up to date.[/green]")
            return

        for migration in pending:
            if args.dry_run:
                console.print(f"[cyan]Would apply:[/cyan] {migration.name}")
            else:
                apply_migration(conn, migration)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
