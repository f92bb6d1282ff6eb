"""Tests for engine setup and initialization."""

from sqlalchemy import event, inspect

from erp_counter.database import create_counter_engine, init_db
from erp_counter.models import CounterDefinition
from sqlalchemy.orm import Session


def test_sqlite_engine_begins_immediate(tmp_path):
    """SQLite transactions take the write lock when they begin."""
    engine = create_counter_engine(f"sqlite:///{tmp_path / 'lock.db'}", lock_wait_ms=50)
    statements = []

    @event.listens_for(engine, "before_cursor_execute")
    def capture(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    with engine.begin() as conn:
        conn.exec_driver_sql("SELECT 1")

    assert statements.index("BEGIN IMMEDIATE") < statements.index("SELECT 1")
    engine.dispose()


def test_init_db_without_alembic(tmp_path, monkeypatch):
    """Without alembic.ini the schema is created directly and seeded."""
    monkeypatch.setattr("erp_counter.database._ALEMBIC_INI", str(tmp_path / "missing.ini"))
    engine = create_counter_engine(f"sqlite:///{tmp_path / 'init.db'}")

    init_db(bind=engine)

    tables = set(inspect(engine).get_table_names())
    assert {"counter_definitions", "counter_definition_components", "sequence_counters"} <= tables
    with Session(engine) as session:
        assert session.query(CounterDefinition).count() > 0
    engine.dispose()


def test_init_db_without_seed(tmp_path, monkeypatch):
    monkeypatch.setattr("erp_counter.database._ALEMBIC_INI", str(tmp_path / "missing.ini"))
    engine = create_counter_engine(f"sqlite:///{tmp_path / 'bare.db'}")

    init_db(bind=engine, seed=False)

    with Session(engine) as session:
        assert session.query(CounterDefinition).count() == 0
    engine.dispose()
