"""Management commands for the barbershop scheduling backend."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import click

from barbershop.db.seed import seed_default_catalog
from barbershop.db.session import SessionLocal, create_tables
from barbershop.repositories import (
    AppointmentRepository,
    CatalogRepository,
    ShopSettingsRepository,
)
from barbershop.services.appointment_service import AppointmentService

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("init_db")
@click.option("--seed/--no-seed", default=True, help="Insert the default catalog.")
def init_db(seed: bool) -> None:
    """Create all tables and optionally seed the default catalog."""
    create_tables()
    logging.info("Database tables created.")
    if not seed:
        return

    session = SessionLocal()
    try:
        if seed_default_catalog(session):
            logging.info("Default catalog inserted.")
        else:
            logging.info("Catalog already populated; no changes made.")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@cli.command("slots")
@click.option("--professional", "professional_id", type=int, required=True)
@click.option("--date", "day", required=True, help="Date as YYYY-MM-DD.")
@click.option(
    "--service", "service_ids", type=int, multiple=True, required=True,
    help="Service id; repeat for several services.",
)
@click.option("--exclude", "exclude_id", type=int, default=None)
def slots(
    professional_id: int, day: str, service_ids: tuple, exclude_id: Optional[int]
) -> None:
    """Print the free start times for a professional on a date."""
    try:
        target = date.fromisoformat(day)
    except ValueError:
        raise click.BadParameter(f"Invalid date '{day}'", param_hint="--date")

    session = SessionLocal()
    try:
        service = AppointmentService(
            AppointmentRepository(session),
            CatalogRepository(session),
            ShopSettingsRepository(session),
        )
        if not service.is_shop_open(target):
            click.echo(f"Shop is closed on {target.isoformat()}.")
            return
        available = service.get_available_slots(
            professional_id, target, list(service_ids), exclude_appointment_id=exclude_id
        )
        click.echo(" ".join(available) if available else "No free slots.")
    finally:
        session.close()


if __name__ == "__main__":
    cli()
