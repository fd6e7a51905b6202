"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/credential.py
============================================================
Class: PostgresCredentialStore

Responsibilities:
  - Cargar identidades + verifier para autenticación (alias / email / id).
  - Crear identidades y reemplazar verifiers.
  - Mapear filas crudas -> entidades de dominio y validar CredentialKind.

Collaborators:
  - repositories.postgres.sql (fetchone/fetchall + DatabaseError)
  - domain.entities.Identity / CredentialRecord / CredentialKind

Constraints / Notes:
  - Aliases se persisten en mayúsculas (lookup case-insensitive).
  - Emails se persisten en minúsculas (normalización en el borde).
  - Retorna None cuando no existe el recurso.
============================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import CredentialKind, CredentialRecord, Identity
from .sql import fetchone

_IDENTITY_COLUMNS = "id, display_name, email, credential_kind, roles, alias, verifier"


def _row_to_record(row: tuple) -> CredentialRecord:
    try:
        kind = CredentialKind(row[3])
    except ValueError as exc:
        raise DatabaseError(f"Invalid credential kind in database: {row[3]}") from exc

    identity = Identity(
        id=row[0],
        display_name=row[1],
        email=row[2],
        credential_kind=kind,
        roles=frozenset(row[4] or ()),
        alias=row[5],
    )
    return CredentialRecord(identity=identity, verifier=row[6])


class PostgresCredentialStore:
    """Credential store sobre la tabla `identities`."""

    def find_by_alias(self, alias: str) -> CredentialRecord | None:
        normalized = alias.strip().upper()
        row = fetchone(
            query=f"SELECT {_IDENTITY_COLUMNS} FROM identities WHERE alias = %s",
            params=(normalized,),
            log_msg="PostgresCredentialStore: find_by_alias failed",
            log_extra={},
        )
        return _row_to_record(row) if row else None

    def find_by_email(self, email: str) -> CredentialRecord | None:
        normalized = email.strip().lower()
        row = fetchone(
            query=f"SELECT {_IDENTITY_COLUMNS} FROM identities WHERE email = %s",
            params=(normalized,),
            log_msg="PostgresCredentialStore: find_by_email failed",
            log_extra={},
        )
        return _row_to_record(row) if row else None

    def get_credential(self, identity_id: int) -> CredentialRecord | None:
        row = fetchone(
            query=f"SELECT {_IDENTITY_COLUMNS} FROM identities WHERE id = %s",
            params=(identity_id,),
            log_msg="PostgresCredentialStore: get_credential failed",
            log_extra={"identity_id": identity_id},
        )
        return _row_to_record(row) if row else None

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
    ) -> Identity:
        row = fetchone(
            query=f"""
                INSERT INTO identities
                    (display_name, email, credential_kind, roles, alias, verifier)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING {_IDENTITY_COLUMNS}
            """,
            params=(
                display_name,
                email.strip().lower(),
                credential_kind.value,
                sorted(roles),
                alias.strip().upper() if alias else None,
                verifier,
            ),
            log_msg="PostgresCredentialStore: create_identity failed",
            log_extra={"credential_kind": credential_kind.value},
        )
        if not row:
            raise DatabaseError("PostgresCredentialStore: create_identity returned no row")
        return _row_to_record(row).identity

    def update_verifier(self, identity_id: int, verifier: str) -> bool:
        row = fetchone(
            query="UPDATE identities SET verifier = %s WHERE id = %s RETURNING id",
            params=(verifier, identity_id),
            log_msg="PostgresCredentialStore: update_verifier failed",
            log_extra={"identity_id": identity_id},
        )
        return row is not None
