#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Audit router
============
GET    /api/v1/audit    — most recent audit entries   [auth required]
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cmsmacros.core.security import get_current_user_id
from cmsmacros.models import AuditType
from cmsmacros.schemas import AuditItemResponse
from cmsmacros.services import MacroService

from .deps import get_macro_service

# -----------------------------------------------------------------------------

router = APIRouter(prefix="/audit", tags=["audit"])


# -----------------------------------------------------------------------------

@router.get("", response_model=list[AuditItemResponse])
async def list_audit_entries(
    limit: int = Query(100, ge=1, le=1000),
    audit_type: Optional[AuditType] = Query(None),
    user_id: Optional[int] = Query(None),
    _caller: int = Depends(get_current_user_id),
    svc: MacroService = Depends(get_macro_service),
):
    return await svc.get_audit_entries(limit=limit, audit_type=audit_type, user_id=user_id)


# -----------------------------------------------------------------------------
