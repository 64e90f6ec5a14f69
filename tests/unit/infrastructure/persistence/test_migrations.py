"""Tests for the Alembic migrations."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[4]


def _alembic_config(connection) -> Config:
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.attributes["connection"] = connection
    return config


@pytest.mark.asyncio
async def test_upgrade_and_downgrade():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    def upgrade(connection):
        command.upgrade(_alembic_config(connection), "head")
        return set(inspect(connection).get_table_names())

    def downgrade(connection):
        command.downgrade(_alembic_config(connection), "base")
        return set(inspect(connection).get_table_names())

    async with engine.begin() as conn:
        tables = await conn.run_sync(upgrade)
    assert {"users", "roles", "user_roles", "permissions"} <= tables

    async with engine.begin() as conn:
        tables = await conn.run_sync(downgrade)
    assert tables <= {"alembic_version"}

    await engine.dispose()
