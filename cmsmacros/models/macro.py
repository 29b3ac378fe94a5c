#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Macro / MacroProperty models
============================
Macro          — a reusable rendering component editors can drop into content.
                 How it renders is decided by which of xslt_path, script_path
                 or control_type is populated (see MacroService.get_macro_type).
MacroProperty  — a named parameter a macro accepts, with the alias of the
                 editor used to fill it in.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean, DateTime, ForeignKey, Integer, String, Uuid, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cmsmacros.core.database import Base


# -----------------------------------------------------------------------------

class MacroTypes(str, enum.Enum):
    XSLT = "xslt"
    PARTIAL_VIEW = "partial_view"
    USER_CONTROL = "user_control"
    UNKNOWN = "unknown"


# -----------------------------------------------------------------------------

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -----------------------------------------------------------------------------

class Macro(Base):
    __tablename__ = "macros"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, unique=True, default=uuid.uuid4
    )
    alias: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    use_in_editor: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    render_in_editor: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    cache_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)   # seconds
    cache_by_page: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    cache_by_member: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    control_type: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default="")
    control_assembly: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default="")
    xslt_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default="")
    script_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    # ── Relationships ───────────────────────────────────────────────────────
    # selectin: macros leave the unit of work detached, so parameters must
    # already be loaded.
    properties: Mapped[list["MacroProperty"]] = relationship(
        back_populates="macro",
        cascade="all, delete-orphan",
        order_by="MacroProperty.sort_order",
        lazy="selectin",
    )

    def __init__(self, **kwargs) -> None:
        # An initialised collection survives detachment after the first insert.
        kwargs.setdefault("properties", [])
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Macro {self.alias!r}>"


# -----------------------------------------------------------------------------

class MacroProperty(Base):
    __tablename__ = "macro_properties"
    __table_args__ = (UniqueConstraint("macro_id", "alias", name="uq_macro_property_alias"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    macro_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("macros.id", ondelete="CASCADE"), nullable=False, index=True
    )
    alias: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    editor_alias: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    macro: Mapped["Macro"] = relationship(back_populates="properties", lazy="raise")

    def __repr__(self) -> str:
        return f"<MacroProperty {self.alias!r}>"


# -----------------------------------------------------------------------------
