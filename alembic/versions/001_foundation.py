"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema de identidades y sesiones de asistencia.
  - Garantizar a nivel DB: como máximo UNA sesión abierta por staff.

Collaborators:
  - PostgreSQL 16+
  - infrastructure/repositories/postgres/* (usa este esquema como contrato)

Policy:
  - Migración BASELINE. Downgrade NO soportado.
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>, fk_<tabla>_<col>__<ref_tabla>
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =========================================================
    # 1) IDENTITIES (staff de kiosk + administradores)
    # =========================================================
    op.create_table(
        "identities",
        sa.Column("id", sa.BigInteger, sa.Identity(), nullable=False),
        sa.Column("display_name", sa.String(200), nullable=False),
        # email en minúsculas (lo normaliza el repositorio)
        sa.Column("email", sa.String(320), nullable=False),
        # alias en mayúsculas; NULL para identidades sin kiosk
        sa.Column("alias", sa.String(64), nullable=True),
        sa.Column("credential_kind", sa.String(32), nullable=False),
        sa.Column(
            "roles",
            postgresql.ARRAY(sa.Text),
            nullable=False,
            server_default=sa.text("'{}'::text[]"),
        ),
        # Argon2 verifier (nunca el secreto en claro)
        sa.Column("verifier", sa.Text, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_identities"),
        sa.UniqueConstraint("email", name="uq_identities_email"),
        sa.UniqueConstraint("alias", name="uq_identities_alias"),
        sa.CheckConstraint(
            "credential_kind IN ('KIOSK_PIN','ADMIN_PASSWORD')",
            name="ck_identities_credential_kind",
        ),
    )

    # =========================================================
    # 2) ATTENDANCE SESSIONS
    # =========================================================
    op.create_table(
        "attendance_sessions",
        sa.Column("id", sa.BigInteger, sa.Identity(), nullable=False),
        sa.Column("staff_id", sa.BigInteger, nullable=False),
        sa.Column("check_in_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("check_out_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_attendance_sessions"),
        sa.ForeignKeyConstraint(
            ["staff_id"],
            ["identities.id"],
            name="fk_attendance_sessions_staff_id__identities",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "check_out_at IS NULL OR check_out_at >= check_in_at",
            name="ck_attendance_sessions_checkout_after_checkin",
        ),
    )

    # Última sesión por staff (ORDER BY check_in_at DESC) y reportes por rango.
    op.create_index(
        "ix_attendance_sessions_staff_id_check_in_at",
        "attendance_sessions",
        ["staff_id", "check_in_at"],
    )
    op.create_index(
        "ix_attendance_sessions_check_in_at",
        "attendance_sessions",
        ["check_in_at"],
    )

    # Una sola sesión abierta por staff. El INSERT ... ON CONFLICT del
    # repositorio se apoya en este índice parcial.
    op.create_index(
        "uq_attendance_sessions_open_staff",
        "attendance_sessions",
        ["staff_id"],
        unique=True,
        postgresql_where=sa.text("check_out_at IS NULL"),
    )


def downgrade() -> None:
    """Downgrade NO soportado para la migración fundacional."""
    raise NotImplementedError("Baseline: downgrade no soportado por política.")
