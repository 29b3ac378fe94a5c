#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request/response validation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from cmsmacros.models import AuditType, MacroTypes


# -----------------------------------------------------------------------------

class OKResponse(BaseModel):
    ok: bool = True
    message: str = "success"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Macro properties
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class MacroPropertyIn(BaseModel):
    alias: str = Field(..., min_length=1, max_length=255, pattern=r"^[A-Za-z][A-Za-z0-9_-]*$")
    name: str = Field(default="", max_length=255)
    sort_order: int = 0
    editor_alias: str = Field(default="", max_length=255)


# -----------------------------------------------------------------------------

def _check_unique_aliases(props: list[MacroPropertyIn]) -> list[MacroPropertyIn]:
    seen: set[str] = set()
    for p in props:
        if p.alias in seen:
            raise ValueError(f"Duplicate property alias '{p.alias}'")
        seen.add(p.alias)
    return props


# -----------------------------------------------------------------------------

class MacroPropertyResponse(BaseModel):
    id: int
    alias: str
    name: str
    sort_order: int
    editor_alias: str

    model_config = {"from_attributes": True}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Macros
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class MacroCreate(BaseModel):
    alias: str = Field(..., min_length=1, max_length=255, pattern=r"^[A-Za-z][A-Za-z0-9_.-]*$")
    name: str = Field(default="", max_length=255)
    use_in_editor: bool = False
    render_in_editor: bool = True
    cache_duration: int = Field(default=0, ge=0)
    cache_by_page: bool = True
    cache_by_member: bool = False
    control_type: str = Field(default="", max_length=255)
    control_assembly: str = Field(default="", max_length=255)
    xslt_path: str = Field(default="", max_length=255)
    script_path: str = Field(default="", max_length=255)
    properties: list[MacroPropertyIn] = Field(default_factory=list)

    @field_validator("properties")
    @classmethod
    def _unique_property_aliases(cls, v: list[MacroPropertyIn]) -> list[MacroPropertyIn]:
        return _check_unique_aliases(v)


# -----------------------------------------------------------------------------

class MacroUpdate(BaseModel):
    """Partial update; ``properties`` replaces the whole parameter list when given."""
    alias: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[A-Za-z][A-Za-z0-9_.-]*$")
    name: Optional[str] = Field(None, max_length=255)
    use_in_editor: Optional[bool] = None
    render_in_editor: Optional[bool] = None
    cache_duration: Optional[int] = Field(None, ge=0)
    cache_by_page: Optional[bool] = None
    cache_by_member: Optional[bool] = None
    control_type: Optional[str] = Field(None, max_length=255)
    control_assembly: Optional[str] = Field(None, max_length=255)
    xslt_path: Optional[str] = Field(None, max_length=255)
    script_path: Optional[str] = Field(None, max_length=255)
    properties: Optional[list[MacroPropertyIn]] = None

    @field_validator("properties")
    @classmethod
    def _unique_property_aliases(cls, v: Optional[list[MacroPropertyIn]]) -> Optional[list[MacroPropertyIn]]:
        return v if v is None else _check_unique_aliases(v)


# -----------------------------------------------------------------------------

class MacroResponse(BaseModel):
    id: int
    key: uuid.UUID
    alias: str
    name: str
    macro_type: MacroTypes
    use_in_editor: bool
    render_in_editor: bool
    cache_duration: int
    cache_by_page: bool
    cache_by_member: bool
    control_type: Optional[str]
    control_assembly: Optional[str]
    xslt_path: Optional[str]
    script_path: Optional[str]
    properties: list[MacroPropertyResponse]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# -----------------------------------------------------------------------------

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Audit
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AuditItemResponse(BaseModel):
    id: int
    object_id: int
    comment: str
    audit_type: AuditType
    user_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


# -----------------------------------------------------------------------------
