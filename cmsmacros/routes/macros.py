#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Macros router
=============
GET    /api/v1/macros                 — list macros (optionally ?ids=1&ids=2)
POST   /api/v1/macros                 — create a macro          [auth required]
GET    /api/v1/macros/alias/{alias}   — get a macro by alias
GET    /api/v1/macros/{id}            — get a macro by id
PUT    /api/v1/macros/{id}            — update a macro          [auth required]
DELETE /api/v1/macros/{id}            — delete a macro          [auth required]
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from cmsmacros.core.events import EventMessages
from cmsmacros.core.security import get_current_user_id
from cmsmacros.models import Macro, MacroProperty
from cmsmacros.schemas import (
    MacroCreate, MacroPropertyIn, MacroResponse, MacroUpdate, OKResponse,
)
from cmsmacros.services import DuplicateMacroAlias, MacroNotFound, MacroService

from .deps import get_macro_service

# -----------------------------------------------------------------------------

router = APIRouter(prefix="/macros", tags=["macros"])

# Columns a PUT may clear by sending an explicit null.
_NULLABLE_FIELDS = {"control_type", "control_assembly", "xslt_path", "script_path"}


# -----------------------------------------------------------------------------

@router.get("", response_model=list[MacroResponse])
async def list_macros(
    ids: Optional[list[int]] = Query(None),
    svc: MacroService = Depends(get_macro_service),
):
    macros = await svc.get_all(*(ids or []))
    return [_macro_dict(m) for m in macros]


# -----------------------------------------------------------------------------

@router.post("", response_model=MacroResponse, status_code=201)
async def create_macro(
    data: MacroCreate,
    user_id: int = Depends(get_current_user_id),
    svc: MacroService = Depends(get_macro_service),
):
    try:
        await svc.ensure_alias_available(data.alias)
    except DuplicateMacroAlias as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    fields = data.model_dump(exclude={"properties"})
    macro = Macro(**fields, properties=[_property(p) for p in data.properties])
    messages = svc.event_messages_factory.get()
    if not await _save(svc, macro, user_id, messages):
        raise _cancelled(f"Saving macro '{data.alias}' was cancelled", messages)
    return _macro_dict(macro)


# -----------------------------------------------------------------------------

@router.get("/alias/{alias}", response_model=MacroResponse)
async def get_macro_by_alias(alias: str, svc: MacroService = Depends(get_macro_service)):
    macro = await svc.get_by_alias(alias)
    if macro is None:
        raise HTTPException(status_code=404, detail=f"Macro '{alias}' not found")
    return _macro_dict(macro)


# -----------------------------------------------------------------------------

@router.get("/{macro_id}", response_model=MacroResponse)
async def get_macro(macro_id: int, svc: MacroService = Depends(get_macro_service)):
    macro = await _require(svc, macro_id)
    return _macro_dict(macro)


# -----------------------------------------------------------------------------

@router.put("/{macro_id}", response_model=MacroResponse)
async def update_macro(
    macro_id: int,
    data: MacroUpdate,
    user_id: int = Depends(get_current_user_id),
    svc: MacroService = Depends(get_macro_service),
):
    macro = await _require(svc, macro_id)

    if data.alias is not None and data.alias != macro.alias:
        try:
            await svc.ensure_alias_available(data.alias, exclude_id=macro.id)
        except DuplicateMacroAlias as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    for field, value in data.model_dump(exclude_unset=True, exclude={"properties"}).items():
        if value is not None or field in _NULLABLE_FIELDS:
            setattr(macro, field, value)
    if data.properties is not None:
        _replace_properties(macro, data.properties)

    messages = svc.event_messages_factory.get()
    if not await _save(svc, macro, user_id, messages):
        raise _cancelled(f"Saving macro '{macro.alias}' was cancelled", messages)
    return _macro_dict(await _require(svc, macro_id))


# -----------------------------------------------------------------------------

@router.delete("/{macro_id}", response_model=OKResponse)
async def delete_macro(
    macro_id: int,
    user_id: int = Depends(get_current_user_id),
    svc: MacroService = Depends(get_macro_service),
):
    macro = await _require(svc, macro_id)
    messages = svc.event_messages_factory.get()
    if not await svc.delete(macro, user_id, messages=messages):
        raise _cancelled(f"Deleting macro '{macro.alias}' was cancelled", messages)
    return OKResponse(message=f"Macro '{macro.alias}' deleted")


# -----------------------------------------------------------------------------

async def _require(svc: MacroService, macro_id: int) -> Macro:
    try:
        return await svc.require_by_id(macro_id)
    except MacroNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))


async def _save(svc: MacroService, macro: Macro, user_id: int, messages: EventMessages) -> bool:
    # The alias pre-check can lose a race with a concurrent writer; the
    # unique index is the final word.
    try:
        return await svc.save(macro, user_id, messages=messages)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Macro '{macro.alias}' conflicts with an existing macro or property",
        )


def _cancelled(message: str, messages: EventMessages) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={
            "message":  message,
            "messages": [
                {
                    "category":     m.category,
                    "message":      m.message,
                    "message_type": m.message_type.value,
                }
                for m in messages
            ],
        },
    )


def _property(p: MacroPropertyIn) -> MacroProperty:
    return MacroProperty(**p.model_dump())


def _replace_properties(macro: Macro, incoming: list[MacroPropertyIn]) -> None:
    # Reuse rows by alias so an unchanged alias is updated in place rather
    # than deleted and re-inserted under the (macro_id, alias) constraint.
    existing = {p.alias: p for p in macro.properties}
    updated = []
    for p in incoming:
        prop = existing.get(p.alias)
        if prop is None:
            prop = _property(p)
        else:
            prop.name = p.name
            prop.sort_order = p.sort_order
            prop.editor_alias = p.editor_alias
        updated.append(prop)
    macro.properties = updated


def _property_dict(p: MacroProperty) -> dict:
    return {
        "id":           p.id,
        "alias":        p.alias,
        "name":         p.name,
        "sort_order":   p.sort_order,
        "editor_alias": p.editor_alias,
    }


def _macro_dict(m: Macro) -> dict:
    return {
        "id":               m.id,
        "key":              m.key,
        "alias":            m.alias,
        "name":             m.name,
        "macro_type":       MacroService.get_macro_type(m),
        "use_in_editor":    m.use_in_editor,
        "render_in_editor": m.render_in_editor,
        "cache_duration":   m.cache_duration,
        "cache_by_page":    m.cache_by_page,
        "cache_by_member":  m.cache_by_member,
        "control_type":     m.control_type,
        "control_assembly": m.control_assembly,
        "xslt_path":        m.xslt_path,
        "script_path":      m.script_path,
        "properties":       [_property_dict(p) for p in sorted(m.properties, key=lambda p: p.sort_order)],
        "created_at":       m.created_at,
        "updated_at":       m.updated_at,
    }


# -----------------------------------------------------------------------------
