"""Tests for the Alembic migration."""

import importlib.util
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

from tododash.models import Base

MIGRATION = Path(__file__).parent.parent / "alembic" / "versions" / "001_initial.py"


def load_migration():
    spec = importlib.util.spec_from_file_location("migration_001_initial", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def run(engine, step):
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            step()


class TestInitialMigration:
    def test_upgrade_matches_models(self, tmp_path):
        """The migrated schema has every table and column the models declare."""
        engine = create_engine(f"sqlite:///{tmp_path / 'migrated.db'}")
        run(engine, load_migration().upgrade)

        inspector = inspect(engine)
        assert set(inspector.get_table_names()) == set(Base.metadata.tables)
        for name, table in Base.metadata.tables.items():
            migrated = {column["name"] for column in inspector.get_columns(name)}
            assert migrated == set(table.columns.keys()), name

        foreign_keys = {
            fk["referred_table"]: fk["options"].get("ondelete")
            for fk in inspector.get_foreign_keys("todo_tags")
        }
        assert foreign_keys == {"todos": "CASCADE", "tags": "CASCADE"}
        engine.dispose()

    def test_downgrade_drops_everything(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'migrated.db'}")
        migration = load_migration()
        run(engine, migration.upgrade)
        run(engine, migration.downgrade)

        assert inspect(engine).get_table_names() == []
        engine.dispose()
