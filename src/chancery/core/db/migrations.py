"""Reusable migration runner for both production and tests."""

from alembic.config import Config

from alembic import command


def run_migrations_sync() -> None:
    """Run Alembic migrations synchronously (call via asyncio.to_thread from async code)."""
    alembic_cfg = Config("alembic.ini")
    command.upgrade(alembic_cfg, "head")
