#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Service events
==============
A TypedEvent is a named list of handlers fired by a service around a
mutation.  "-ing" events (saving, deleting) carry cancellable args; the
service checks ``args.cancel`` after dispatch and skips the operation when a
handler asked for it.  "-ed" events carry non-cancellable args.

Handlers can be synchronous or async and receive ``(sender, args)``:

    @MacroService.saving.subscribe
    def block_reserved(sender, args):
        if args.entity.alias.startswith("sys"):
            args.cancel_operation("reserved alias")
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import enum
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Iterable, Optional, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")


# -----------------------------------------------------------------------------

class EventCancellationError(RuntimeError):
    """Raised when a handler tries to cancel a non-cancellable event."""


# -----------------------------------------------------------------------------

class EventMessageType(str, enum.Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class EventMessage:
    category: str
    message: str
    message_type: EventMessageType = EventMessageType.INFO


class EventMessages:
    """Messages handlers want surfaced to whoever triggered the operation."""

    def __init__(self) -> None:
        self._messages: list[EventMessage] = []

    def add(self, message: EventMessage) -> None:
        self._messages.append(message)

    def __iter__(self):
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def count(self) -> int:
        return len(self._messages)


class EventMessagesFactory:
    def get(self) -> EventMessages:
        return EventMessages()


# -----------------------------------------------------------------------------

@dataclass
class CancellableEventArgs(Generic[E]):
    entities: list[E]
    can_cancel: bool = True
    messages: EventMessages = field(default_factory=EventMessages)
    _cancel: bool = field(default=False, init=False, repr=False)

    @property
    def entity(self) -> E | None:
        return self.entities[0] if self.entities else None

    @property
    def cancel(self) -> bool:
        return self._cancel

    def cancel_operation(self, message: str | None = None, category: str = "Cancelled") -> None:
        if not self.can_cancel:
            raise EventCancellationError("This event cannot be cancelled")
        self._cancel = True
        if message:
            self.messages.add(EventMessage(category, message, EventMessageType.WARNING))


class SaveEventArgs(CancellableEventArgs[E]):
    pass


class DeleteEventArgs(CancellableEventArgs[E]):
    pass


def save_args(entity: Any, can_cancel: bool = True, messages: EventMessages | None = None) -> SaveEventArgs:
    return SaveEventArgs(_as_list(entity), can_cancel, messages if messages is not None else EventMessages())


def delete_args(entity: Any, can_cancel: bool = True, messages: EventMessages | None = None) -> DeleteEventArgs:
    return DeleteEventArgs(_as_list(entity), can_cancel, messages if messages is not None else EventMessages())


def _as_list(entity: Any) -> list:
    if isinstance(entity, (list, tuple)):
        return list(entity)
    return [entity]


# -----------------------------------------------------------------------------

EventHandler = Callable[[Any, Any], Optional[Awaitable[None]]]


class TypedEvent:

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[EventHandler] = []

    # -------------------------------------------------------------- subscribe

    def subscribe(self, handler: EventHandler) -> EventHandler:
        """Add *handler*; returns it so this works as a decorator."""
        if handler not in self._handlers:
            self._handlers.append(handler)
            logger.debug("Subscribed %s to %s", getattr(handler, "__name__", handler), self.name)
        return handler

    def unsubscribe(self, handler: EventHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def clear(self) -> None:
        self._handlers.clear()

    @property
    def handlers(self) -> Iterable[EventHandler]:
        return tuple(self._handlers)

    # --------------------------------------------------------------- dispatch

    async def raise_event(self, args: CancellableEventArgs, sender: Any) -> None:
        """Call every handler in subscription order.  Handler errors propagate."""
        for handler in list(self._handlers):
            result = handler(sender, args)
            if inspect.isawaitable(result):
                await result

    async def is_raised_event_cancelled(self, args: CancellableEventArgs, sender: Any) -> bool:
        await self.raise_event(args, sender)
        return args.cancel

    def __repr__(self) -> str:
        return f"<TypedEvent {self.name} handlers={len(self._handlers)}>"


# -----------------------------------------------------------------------------
