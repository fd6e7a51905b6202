"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/credential.py
============================================================
Class: InMemoryCredentialStore

Responsibilities:
  - Almacenar identidades + verifiers en memoria (tests / STORE_BACKEND=memory).
  - Replicar la semántica del store Postgres: alias en mayúsculas, email en
    minúsculas, unicidad de ambos, ids incrementales.

Constraints:
  - Thread-safe: acceso protegido por Lock.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from itertools import count
from threading import Lock

from ....domain.entities import CredentialKind, CredentialRecord, Identity


class InMemoryCredentialStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._records: dict[int, CredentialRecord] = {}
        self._ids = count(1)

    def find_by_alias(self, alias: str) -> CredentialRecord | None:
        normalized = alias.strip().upper()
        with self._lock:
            for record in self._records.values():
                if record.identity.alias == normalized:
                    return record
        return None

    def find_by_email(self, email: str) -> CredentialRecord | None:
        normalized = email.strip().lower()
        with self._lock:
            for record in self._records.values():
                if record.identity.email == normalized:
                    return record
        return None

    def get_credential(self, identity_id: int) -> CredentialRecord | None:
        with self._lock:
            return self._records.get(identity_id)

    def get_identity(self, identity_id: int) -> Identity | None:
        record = self.get_credential(identity_id)
        return record.identity if record else None

    def create_identity(
        self,
        *,
        display_name: str,
        email: str,
        credential_kind: CredentialKind,
        verifier: str,
        roles: frozenset[str] = frozenset(),
        alias: str | None = None,
        identity_id: int | None = None,
    ) -> Identity:
        normalized_email = email.strip().lower()
        normalized_alias = alias.strip().upper() if alias else None

        with self._lock:
            for record in self._records.values():
                if record.identity.email == normalized_email:
                    raise ValueError(f"Email already registered: {normalized_email}")
                if normalized_alias and record.identity.alias == normalized_alias:
                    raise ValueError(f"Alias already registered: {normalized_alias}")

            new_id = identity_id if identity_id is not None else next(self._ids)
            if new_id in self._records:
                raise ValueError(f"Identity id already in use: {new_id}")

            identity = Identity(
                id=new_id,
                display_name=display_name,
                email=normalized_email,
                credential_kind=credential_kind,
                roles=frozenset(roles),
                alias=normalized_alias,
            )
            self._records[new_id] = CredentialRecord(identity=identity, verifier=verifier)
            return identity

    def update_verifier(self, identity_id: int, verifier: str) -> bool:
        with self._lock:
            record = self._records.get(identity_id)
            if record is None:
                return False
            self._records[identity_id] = replace(record, verifier=verifier)
            return True
