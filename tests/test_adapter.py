"""Tests for the MySQL adapter.

The SQLAlchemy engine is mocked; no server is needed.

Verifies that:
- Connection strings in URL and driver DSN form normalize to one URL
- One connection serves every query and is closed on exit
- Driver errors surface as ConnectionFailedError and QueryError
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError

from dumpster.adapters.base import QueryResult
from dumpster.adapters.mysql import MySQLAdapter, create_engine_pooled, normalize_url
from dumpster.errors import ConnectionFailedError, QueryError


def _make_engine(columns=None, rows=None) -> MagicMock:
    engine = MagicMock()
    result = MagicMock()
    result.keys.return_value = columns or []
    result.fetchall.return_value = rows or []
    engine.connect.return_value.execute.return_value = result
    return engine


class TestNormalizeUrl:
    """normalize_url() accepts the common connection string forms."""

    def test_plain_mysql_scheme(self) -> None:
        assert normalize_url("mysql://u:p@db:3306/shop") == "mysql+mysqlconnector://u:p@db:3306/shop"

    def test_explicit_driver_kept(self) -> None:
        assert normalize_url("mysql+pymysql://u:p@db/shop") == "mysql+pymysql://u:p@db/shop"

    def test_driver_dsn(self) -> None:
        assert normalize_url("u:p@tcp(db:3306)/shop") == "mysql+mysqlconnector://u:p@db:3306/shop"

    def test_driver_dsn_with_params(self) -> None:
        result = normalize_url("u:p@tcp(db:3306)/shop?charset=utf8mb4")
        assert result == "mysql+mysqlconnector://u:p@db:3306/shop?charset=utf8mb4"

    def test_whitespace_stripped(self) -> None:
        assert normalize_url("  mysql://u@db/shop\n") == "mysql+mysqlconnector://u@db/shop"


class TestCreateEnginePooled:
    """Engine defaults."""

    def test_defaults(self) -> None:
        with patch("dumpster.adapters.mysql.create_engine") as mock_create:
            create_engine_pooled("mysql://u@db/shop")

        args, kwargs = mock_create.call_args
        assert args == ("mysql+mysqlconnector://u@db/shop",)
        assert kwargs["pool_size"] == 1
        assert kwargs["pool_pre_ping"] is True
        assert kwargs["connect_args"] == {"connection_timeout": 10}

    def test_overrides(self) -> None:
        with patch("dumpster.adapters.mysql.create_engine") as mock_create:
            create_engine_pooled("mysql://u@db/shop", pool_size=5)

        assert mock_create.call_args.kwargs["pool_size"] == 5


class TestMySQLAdapter:
    """Connection lifecycle and query execution."""

    def test_query_returns_rows(self) -> None:
        engine = _make_engine(columns=["id", "name"], rows=[(1, "a"), (2, None)])
        with patch("dumpster.adapters.mysql.create_engine", return_value=engine):
            with MySQLAdapter("mysql://u@db/shop") as client:
                result = client.query("SELECT * FROM users")

        assert result == QueryResult(columns=["id", "name"], rows=[(1, "a"), (2, None)])
        assert result.first() == (1, "a")

    def test_single_connection_for_all_queries(self) -> None:
        engine = _make_engine(columns=["x"], rows=[(1,)])
        with patch("dumpster.adapters.mysql.create_engine", return_value=engine):
            with MySQLAdapter("mysql://u@db/shop") as client:
                client.query("SHOW TABLES")
                client.query("SHOW TRIGGERS")

        engine.connect.assert_called_once()
        assert engine.connect.return_value.execute.call_count == 2

    def test_closed_on_exit(self) -> None:
        engine = _make_engine()
        with patch("dumpster.adapters.mysql.create_engine", return_value=engine):
            with MySQLAdapter("mysql://u@db/shop"):
                pass

        engine.connect.return_value.close.assert_called_once()
        engine.dispose.assert_called_once()

    def test_closed_on_error(self) -> None:
        engine = _make_engine()
        with patch("dumpster.adapters.mysql.create_engine", return_value=engine):
            with pytest.raises(RuntimeError):
                with MySQLAdapter("mysql://u@db/shop"):
                    raise RuntimeError("boom")

        engine.dispose.assert_called_once()

    def test_connect_failure(self) -> None:
        engine = _make_engine()
        engine.connect.side_effect = OperationalError("connect", {}, Exception("refused"))
        with patch("dumpster.adapters.mysql.create_engine", return_value=engine):
            adapter = MySQLAdapter("mysql://u@db/shop")
            with pytest.raises(ConnectionFailedError):
                adapter.connect()

    def test_query_failure(self) -> None:
        engine = _make_engine()
        engine.connect.return_value.execute.side_effect = ProgrammingError(
            "SHOW CREATE TABLE nope", {}, Exception("no such table")
        )
        with patch("dumpster.adapters.mysql.create_engine", return_value=engine):
            with MySQLAdapter("mysql://u@db/shop") as client:
                with pytest.raises(QueryError):
                    client.query("SHOW CREATE TABLE nope")


class TestQueryResult:
    """QueryResult helpers."""

    def test_first_empty(self) -> None:
        assert QueryResult(columns=["a"], rows=[]).first() is None
