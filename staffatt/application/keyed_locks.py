"""
===============================================================================
TARJETA CRC - application/keyed_locks.py
===============================================================================

Componente:
  KeyedLockTable

Responsabilidades:
  - Serializar operaciones de un mismo staff_id dentro del proceso.
  - Crear locks on-demand y liberarlos cuando nadie los referencia
    (la tabla no crece con la cantidad histórica de staff).
  - Respetar un timeout de adquisición (LockTimeoutError).

Invariantes:
  - Dos claves distintas nunca comparten lock.
  - Una entrada vive mientras tenga holders o waiters (refcount > 0).

Colaboradores:
  - application/usecases/attendance/toggle_check_in.py
===============================================================================
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Hashable, Iterator


class LockTimeoutError(Exception):
    """No se pudo adquirir el lock de la clave dentro del timeout."""

    def __init__(self, key: Hashable, timeout: float):
        self.key = key
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout}s waiting for lock {key!r}")


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    refs: int = 0


class KeyedLockTable:
    """Tabla de locks por clave, con refcount y limpieza automática."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[Hashable, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, key: Hashable, *, timeout: float) -> Iterator[None]:
        entry = self._checkout(key)
        try:
            if not entry.lock.acquire(timeout=timeout):
                raise LockTimeoutError(key, timeout)
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._checkin(key, entry)

    def _checkout(self, key: Hashable) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = _Entry()
                self._entries[key] = entry
            entry.refs += 1
            return entry

    def _checkin(self, key: Hashable, entry: _Entry) -> None:
        with self._guard:
            entry.refs -= 1
            if entry.refs == 0:
                del self._entries[key]
