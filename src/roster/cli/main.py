"""Roster CLI — database setup, demo data, dev server.

Usage:
    roster init-db                                # Create tables (dev/test only)
    roster seed --email demo@example.com          # Demo user + sample employees
    roster serve --reload                         # Run the API with uvicorn

Production schemas are managed with Alembic (`alembic upgrade head`).
"""

from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal

import click

from roster import __version__
from roster.auth.password import hash_password_async
from roster.config import settings
from roster.db.engine import Database
from roster.repositories.employees import EmployeeRepository
from roster.repositories.users import UserRepository
from roster.schemas.employee import EmployeeCreate

SAMPLE_EMPLOYEES = [
    {
        "name": "Alice Silva",
        "address": "Rua A, 123",
        "neighborhood": "Centro",
        "zip_code": "01001-000",
        "phone": "11999990000",
        "role": "Desenvolvedor",
        "salary": Decimal("5000.00"),
        "contract_date": date(2025, 1, 15),
    },
    {
        "name": "Maria da Silva",
        "address": "Av. Paulista, 1000",
        "neighborhood": "Bela Vista",
        "zip_code": "01310-100",
        "role": "Designer",
        "salary": Decimal("7800.00"),
        "contract_date": date(2021, 6, 22),
    },
    {
        "name": "Roberto Firmino",
        "address": "Rua das Flores, 45",
        "role": "Gerente",
        "salary": Decimal("11000.00"),
        "contract_date": date(2020, 3, 10),
    },
]


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="roster")
def main():
    """Roster — multi-tenant employee directory."""


database_url_option = click.option(
    "--database-url",
    default=lambda: settings.database_url,
    show_default="ROSTER_DATABASE_URL",
    help="SQLAlchemy async URL",
)


@main.command("init-db")
@database_url_option
def init_db(database_url: str):
    """Create all tables directly from the ORM models."""
    asyncio.run(_init_db(database_url))
    click.secho("Tables created.", fg="green")


async def _init_db(database_url: str) -> None:
    database = Database(database_url)
    try:
        await database.create_all()
    finally:
        await database.dispose()


@main.command()
@database_url_option
@click.option("--email", required=True, help="Owner account email")
@click.option("--password", required=True, prompt=True, hide_input=True)
@click.option("--name", default="Demo User", show_default=True)
def seed(database_url: str, email: str, password: str, name: str):
    """Create (or reuse) a user and give it sample employees."""
    created = asyncio.run(_seed(database_url, email, password, name))
    if created:
        click.secho(f"Seeded {created} employees for {email}.", fg="green")
    else:
        click.echo(f"{email} already has employees; nothing to do.")


async def _seed(database_url: str, email: str, password: str, name: str) -> int:
    database = Database(database_url)
    try:
        await database.create_all()
        async with database.session_factory() as session:
            users = UserRepository(session)
            user = await users.get_by_email(email)
            if user is None:
                user = await users.create(
                    name=name,
                    email=email,
                    password_hash=await hash_password_async(password),
                )

            employees = EmployeeRepository(session)
            if await employees.list_all(user.id):
                return 0
            for data in SAMPLE_EMPLOYEES:
                await employees.create(EmployeeCreate(**data), owner_id=user.id)
            return len(SAMPLE_EMPLOYEES)
    finally:
        await database.dispose()


@main.command()
@click.option("--host", default=lambda: settings.host, show_default="ROSTER_HOST")
@click.option("--port", default=lambda: settings.port, type=int, show_default="ROSTER_PORT")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run("roster.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
