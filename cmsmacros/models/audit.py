#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Audit model
===========
One row per audited action.  Rows are append-only; nothing in this package
updates or deletes them.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cmsmacros.core.database import Base


# -----------------------------------------------------------------------------

class AuditType(str, enum.Enum):
    NEW = "new"
    SAVE = "save"
    OPEN = "open"
    DELETE = "delete"
    CUSTOM = "custom"


# -----------------------------------------------------------------------------

class AuditItem(Base):
    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    object_id: Mapped[int] = mapped_column(Integer, nullable=False, default=-1, index=True)
    comment: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    audit_type: Mapped[AuditType] = mapped_column(
        Enum(AuditType, native_enum=False, length=16,
             values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    def __repr__(self) -> str:
        return f"<AuditItem {self.audit_type.value} object={self.object_id} user={self.user_id}>"


# -----------------------------------------------------------------------------
