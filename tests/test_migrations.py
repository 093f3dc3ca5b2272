from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

ROOT = Path(__file__).resolve().parents[1]


def _alembic_config() -> Config:
    # No ini file: skips fileConfig() so test logging is left alone.
    cfg = Config()
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    return cfg


def test_upgrade_creates_customer_table(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path/'mig.db'}"
    monkeypatch.setenv("DATABASE_URL", url)

    command.upgrade(_alembic_config(), "head")

    engine = create_engine(url, future=True)
    try:
        insp = inspect(engine)
        assert "Customer" in insp.get_table_names()
        cols = {c["name"] for c in insp.get_columns("Customer")}
        assert cols == {"id", "name", "created_at"}
        assert "idx_customer_created_at" in {ix["name"] for ix in insp.get_indexes("Customer")}
    finally:
        engine.dispose()


def test_downgrade_keeps_existing_customer_rows(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path/'existing.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    engine = create_engine(url, future=True)
    with engine.begin() as conn:
        conn.execute(
            text('CREATE TABLE "Customer" (id VARCHAR(64) PRIMARY KEY, name VARCHAR(255) NOT NULL, created_at DATETIME NOT NULL)')
        )
        conn.execute(text("""INSERT INTO "Customer" (id, name, created_at) VALUES ('C1', 'Acme Corporation', '2023-05-01 00:00:00')"""))
    engine.dispose()

    command.upgrade(_alembic_config(), "head")
    command.downgrade(_alembic_config(), "base")

    engine = create_engine(url, future=True)
    try:
        insp = inspect(engine)
        assert "Customer" in insp.get_table_names()
        assert "idx_customer_created_at" not in {ix["name"] for ix in insp.get_indexes("Customer")}
        with engine.connect() as conn:
            rows = conn.execute(text('SELECT id, name FROM "Customer"')).all()
        assert [tuple(r) for r in rows] == [("C1", "Acme Corporation")]
    finally:
        engine.dispose()


def test_downgrade_without_table_is_a_noop(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path/'empty.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    command.upgrade(_alembic_config(), "head")
    engine = create_engine(url, future=True)
    with engine.begin() as conn:
        conn.execute(text('DROP TABLE "Customer"'))
    engine.dispose()

    command.downgrade(_alembic_config(), "base")
