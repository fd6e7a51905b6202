"""
============================================================
TARJETA CRC - repositories/postgres/sql.py
============================================================
Responsibilities:
  - Ejecutar SQL parametrizado sobre el pool global.
  - Centralizar logging + conversión a DatabaseError (timeouts del pool,
    statement_timeout, conectividad, constraint violations).

Collaborators:
  - infrastructure.db.pool.get_pool
  - crosscutting.exceptions.DatabaseError
============================================================
"""

from __future__ import annotations

from typing import Iterable

import psycopg
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ...db.errors import DatabasePoolError


def _get_pool() -> ConnectionPool:
    from ...db.pool import get_pool

    return get_pool()


def fetchone(
    *,
    query: str,
    params: Iterable[object] = (),
    log_msg: str,
    log_extra: dict[str, object],
) -> tuple | None:
    """Ejecuta una sentencia y devuelve la primera fila (o None)."""
    try:
        pool = _get_pool()
        with pool.connection() as conn:
            return conn.execute(query, tuple(params)).fetchone()
    except (psycopg.Error, DatabasePoolError) as exc:
        logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
        raise DatabaseError(log_msg, original_error=exc) from exc


def fetchall(
    *,
    query: str,
    params: Iterable[object] = (),
    log_msg: str,
    log_extra: dict[str, object],
) -> list[tuple]:
    """Ejecuta un SELECT y devuelve todas las filas."""
    try:
        pool = _get_pool()
        with pool.connection() as conn:
            return conn.execute(query, tuple(params)).fetchall()
    except (psycopg.Error, DatabasePoolError) as exc:
        logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
        raise DatabaseError(log_msg, original_error=exc) from exc
