#!/usr/bin/env python3
"""
Create an admin account in the configured credential store.

Usage:
    python create_admin.py --email admin@sweetshop.com
    python create_admin.py --name "Shop Owner" --email owner@example.com --password s3cret!

The password is prompted for when not given. Run once against the Supabase
backend (STORAGE_BACKEND=supabase) to create the first administrator.
"""

import argparse
import asyncio
import sys
from typing import Optional

from rich.console import Console

from api.dependencies import ServiceContainer
from shared.config import Settings, get_settings
from shared.exceptions import SweetShopError

console = Console()


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Sweet Shop admin user")
    parser.add_argument("--name", default=None, help="Display name (default: ADMIN_NAME setting)")
    parser.add_argument("--email", required=True, help="Admin email address")
    parser.add_argument("--password", default=None, help="Admin password (prompted if omitted)")
    return parser.parse_args(argv)


async def create_admin(settings: Settings, name: str, email: str, password: str) -> int:
    container = ServiceContainer(settings)
    try:
        admin = await container.auth.create_admin(name, email, password)
    except SweetShopError as e:
        console.print(f"[red]✗ Could not create admin:[/red] {e.message}")
        return 1
    finally:
        container.close()

    console.print("[green]✓ Admin user created[/green]")
    console.print(f"  Email: {admin.email}")
    console.print(f"  Role:  {admin.role.value}")
    return 0


def main(argv: Optional[list[str]] = None, settings: Optional[Settings] = None) -> int:
    args = parse_args(argv)
    settings = settings or get_settings()

    if settings.storage_backend == "memory":
        console.print("[yellow]Warning:[/yellow] STORAGE_BACKEND is 'memory'; the admin will not persist.")

    password = args.password or console.input("Password: ", password=True)
    return asyncio.run(create_admin(settings, args.name or settings.admin_name, args.email, password))


if __name__ == "__main__":
    sys.exit(main())
