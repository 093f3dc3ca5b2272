import json

import pytest
from sqlalchemy import create_engine, inspect

from app.custlookup.config import ConfigError
from app.custlookup.modules.customers.service import CustomerLookup
from scripts import init_db, lookup_customer, release


@pytest.fixture()
def db_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path/'cli.db'}"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("ENV", "test")
    monkeypatch.delenv("DB_CONNECTION", raising=False)
    assert init_db.main(["--seed"]) == 0
    return url


def test_seed_is_idempotent(db_url):
    assert init_db.seed_customers(db_url) == 0


def test_cli_found(db_url, capsys):
    assert lookup_customer.main(["C1"]) == lookup_customer.EXIT_FOUND
    out = json.loads(capsys.readouterr().out)
    assert out["id"] == "C1"
    assert out["name"] == "Acme Corporation"


def test_cli_range(db_url, capsys):
    code = lookup_customer.main(["C1", "--start-date", "2023-01-01", "--end-date", "2023-12-31"])
    assert code == lookup_customer.EXIT_FOUND
    code = lookup_customer.main(["C1", "--start-date", "2024-01-01", "--end-date", "2024-12-31"])
    assert code == lookup_customer.EXIT_NOT_FOUND
    assert "date range" in capsys.readouterr().err


def test_cli_not_found(db_url):
    assert lookup_customer.main(["C404"]) == lookup_customer.EXIT_NOT_FOUND


def test_cli_invalid(db_url, capsys):
    assert lookup_customer.main(["   "]) == lookup_customer.EXIT_INVALID
    assert lookup_customer.main(["C1", "--start-date", "soon", "--end-date", "2023-01-01"]) == lookup_customer.EXIT_INVALID
    assert "invalid input" in capsys.readouterr().err


def test_run_with_injected_lookup(db_url, capsys):
    from app.custlookup.config import load_settings

    lookup = CustomerLookup.from_settings(load_settings())
    assert lookup_customer.run(lookup, "C2", None, None) == lookup_customer.EXIT_FOUND
    assert json.loads(capsys.readouterr().out)["name"] == "Globex Ltd"


class TestRelease:
    @pytest.fixture(autouse=True)
    def clean_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for k in ("DATABASE_URL", "DB_CONNECTION", "ENV"):
            monkeypatch.delenv(k, raising=False)

    def test_legacy_db_connection_only(self, tmp_path, monkeypatch):
        url = f"sqlite:///{tmp_path/'release.db'}"
        monkeypatch.setenv("DB_CONNECTION", url)

        release.run_release()

        engine = create_engine(url, future=True)
        try:
            tables = inspect(engine).get_table_names()
        finally:
            engine.dispose()
        assert "Customer" in tables
        assert "alembic_version" in tables

    def test_missing_database_url(self):
        with pytest.raises(ConfigError):
            release.run_release()

    def test_sqlite_refused_in_production(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'prod.db'}")
        monkeypatch.setenv("ENV", "production")
        with pytest.raises(ConfigError):
            release.run_release()
