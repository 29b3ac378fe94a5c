#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Initial schema — macros, macro parameters and the audit log

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18 00:00:00
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import sqlalchemy as sa
from alembic import op


# -----------------------------------------------------------------------------

revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


# -----------------------------------------------------------------------------

def upgrade() -> None:
    # ── macros ─────────────────────────────────────────────────────────────────
    op.create_table(
        "macros",
        sa.Column("id",               sa.Integer(),     primary_key=True, autoincrement=True),
        sa.Column("key",              sa.Uuid(),        nullable=False, unique=True),
        sa.Column("alias",            sa.String(255),   nullable=False),
        sa.Column("name",             sa.String(255),   nullable=False, server_default=""),
        sa.Column("use_in_editor",    sa.Boolean(),     nullable=False, server_default=sa.false()),
        sa.Column("render_in_editor", sa.Boolean(),     nullable=False, server_default=sa.true()),
        sa.Column("cache_duration",   sa.Integer(),     nullable=False, server_default="0"),
        sa.Column("cache_by_page",    sa.Boolean(),     nullable=False, server_default=sa.true()),
        sa.Column("cache_by_member",  sa.Boolean(),     nullable=False, server_default=sa.false()),
        sa.Column("control_type",     sa.String(255),   nullable=True,  server_default=""),
        sa.Column("control_assembly", sa.String(255),   nullable=True,  server_default=""),
        sa.Column("xslt_path",        sa.String(255),   nullable=True,  server_default=""),
        sa.Column("script_path",      sa.String(255),   nullable=True,  server_default=""),
        sa.Column("created_at",       sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at",       sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_macros_alias", "macros", ["alias"], unique=True)

    # ── macro_properties ───────────────────────────────────────────────────────
    op.create_table(
        "macro_properties",
        sa.Column("id",           sa.Integer(),   primary_key=True, autoincrement=True),
        sa.Column("macro_id",     sa.Integer(),   sa.ForeignKey("macros.id", ondelete="CASCADE"), nullable=False),
        sa.Column("alias",        sa.String(255), nullable=False),
        sa.Column("name",         sa.String(255), nullable=False, server_default=""),
        sa.Column("sort_order",   sa.Integer(),   nullable=False, server_default="0"),
        sa.Column("editor_alias", sa.String(255), nullable=False, server_default=""),
        sa.UniqueConstraint("macro_id", "alias", name="uq_macro_property_alias"),
    )
    op.create_index("ix_macro_properties_macro_id", "macro_properties", ["macro_id"])

    # ── audit_log ──────────────────────────────────────────────────────────────
    op.create_table(
        "audit_log",
        sa.Column("id",         sa.Integer(),    primary_key=True, autoincrement=True),
        sa.Column("object_id",  sa.Integer(),    nullable=False, server_default="-1"),
        sa.Column("comment",    sa.String(1024), nullable=False, server_default=""),
        sa.Column("audit_type", sa.String(16),   nullable=False),
        sa.Column("user_id",    sa.Integer(),    nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_audit_log_object_id", "audit_log", ["object_id"])
    op.create_index("ix_audit_log_user_id",   "audit_log", ["user_id"])


# -----------------------------------------------------------------------------

def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("macro_properties")
    op.drop_table("macros")


# -----------------------------------------------------------------------------
