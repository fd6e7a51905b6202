"""
Name: PostgreSQL Store Tests (mocked driver)

Responsibilities:
  - Driver/pool failures surface as DatabaseError
  - Conditional writes that affect no row map to None
  - Row -> entity mapping

Notes:
  - No database needed: the pool / fetch helpers are patched
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import psycopg
import pytest

from staffatt.crosscutting.exceptions import DatabaseError
from staffatt.domain.entities import CredentialKind
from staffatt.infrastructure.db.errors import PoolNotInitializedError
from staffatt.infrastructure.repositories.postgres import sql
from staffatt.infrastructure.repositories.postgres import PostgresCredentialStore, PostgresSessionStore

T0 = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)

_SESSION_MODULE = "staffatt.infrastructure.repositories.postgres.attendance_session"
_CREDENTIAL_MODULE = "staffatt.infrastructure.repositories.postgres.credential"


@pytest.mark.unit
class TestSqlHelpers:
    def test_driver_error_becomes_database_error(self):
        pool = MagicMock()
        pool.connection.return_value.__enter__.return_value.execute.side_effect = (
            psycopg.OperationalError("canceling statement due to statement timeout")
        )

        with patch.object(sql, "_get_pool", return_value=pool):
            with pytest.raises(DatabaseError) as exc_info:
                sql.fetchone(query="SELECT 1", log_msg="boom", log_extra={})

        assert isinstance(exc_info.value.original_error, psycopg.OperationalError)

    def test_uninitialized_pool_becomes_database_error(self):
        with patch.object(sql, "_get_pool", side_effect=PoolNotInitializedError("no pool")):
            with pytest.raises(DatabaseError):
                sql.fetchall(query="SELECT 1", log_msg="boom", log_extra={})

    def test_fetchone_returns_row(self):
        pool = MagicMock()
        pool.connection.return_value.__enter__.return_value.execute.return_value.fetchone.return_value = (1,)

        with patch.object(sql, "_get_pool", return_value=pool):
            assert sql.fetchone(query="SELECT 1", log_msg="x", log_extra={}) == (1,)


@pytest.mark.unit
class TestPostgresSessionStore:
    def test_open_session_conflict_returns_none(self):
        with patch(f"{_SESSION_MODULE}.fetchone", return_value=None) as fetch:
            assert PostgresSessionStore().open_session(42, T0) is None

        assert "ON CONFLICT" in fetch.call_args.kwargs["query"]

    def test_get_open_session_filters_open_rows(self):
        with patch(f"{_SESSION_MODULE}.fetchone", return_value=(3, 42, T0, None)) as fetch:
            current = PostgresSessionStore().get_open_session(42)

        assert current.id == 3
        assert current.is_open
        assert "check_out_at IS NULL" in fetch.call_args.kwargs["query"]
        assert fetch.call_args.kwargs["params"] == (42,)

    def test_get_open_session_none_when_closed(self):
        with patch(f"{_SESSION_MODULE}.fetchone", return_value=None):
            assert PostgresSessionStore().get_open_session(42) is None

    def test_close_session_maps_row(self):
        row = (5, 42, T0, T0)
        with patch(f"{_SESSION_MODULE}.fetchone", return_value=row) as fetch:
            closed = PostgresSessionStore().close_session(5, T0)

        assert closed.id == 5
        assert closed.is_open is False
        assert "check_out_at IS NULL" in fetch.call_args.kwargs["query"]

    def test_list_sessions_filters_by_staff(self):
        with patch(f"{_SESSION_MODULE}.fetchall", return_value=[(1, 42, T0, None)]) as fetch:
            listed = PostgresSessionStore().list_sessions(start=T0, end=T0, staff_ids=[42])

        assert listed[0].is_open
        assert fetch.call_args.kwargs["params"] == [T0, T0, [42]]
        assert "ANY" in fetch.call_args.kwargs["query"]


@pytest.mark.unit
class TestPostgresCredentialStore:
    def test_find_by_alias_maps_row(self):
        row = (42, "Alice", "alice@example.com", "KIOSK_PIN", ["Member"], "ALICE", "hash")
        with patch(f"{_CREDENTIAL_MODULE}.fetchone", return_value=row) as fetch:
            record = PostgresCredentialStore().find_by_alias("alice")

        assert record.identity.credential_kind is CredentialKind.KIOSK_PIN
        assert record.identity.roles == frozenset({"Member"})
        assert record.verifier == "hash"
        assert fetch.call_args.kwargs["params"] == ("ALICE",)

    def test_unknown_credential_kind_is_database_error(self):
        row = (42, "Alice", "alice@example.com", "SMART_CARD", [], None, "hash")
        with patch(f"{_CREDENTIAL_MODULE}.fetchone", return_value=row):
            with pytest.raises(DatabaseError):
                PostgresCredentialStore().get_credential(42)
