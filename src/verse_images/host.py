"""Capabilities the extension needs from its host.

The host dispatches named commands to registered handlers and hands the
extension an execution token that scopes its user data. Both are modelled
here so the extension runs inside the API app, the CLI or tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict

from .errors import CommandAlreadyRegisteredError, CommandNotFoundError

CommandHandler = Callable[..., Awaitable[Any]]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Registration:
    """Handle returned by :meth:`CommandBus.register`."""

    bus: "CommandBus"
    name: str

    def unregister(self) -> bool:
        return self.bus.unregister(self.name)


@dataclass(slots=True)
class CommandBus:
    """In-process registry of command handlers."""

    handlers: Dict[str, CommandHandler] = field(default_factory=dict)

    def register(self, name: str, handler: CommandHandler) -> Registration:
        """Register ``handler`` under ``name``."""
        if name in self.handlers:
            raise CommandAlreadyRegisteredError(f"command '{name}' is already registered")
        self.handlers[name] = handler
        logger.debug("host.command.registered", extra={"command": name})
        return Registration(bus=self, name=name)

    def unregister(self, name: str) -> bool:
        return self.handlers.pop(name, None) is not None

    def is_registered(self, name: str) -> bool:
        return name in self.handlers

    async def invoke(self, name: str, *args: Any) -> Any:
        """Call the handler registered for ``name`` with positional ``args``."""
        handler = self.handlers.get(name)
        if handler is None:
            raise CommandNotFoundError(f"command '{name}' is not registered")
        return await handler(*args)


@dataclass(slots=True)
class ExecutionContext:
    """Per-activation state handed to the extension by its host."""

    execution_token: str
    registrations: list[Registration] = field(default_factory=list)

    def add(self, *registrations: Registration) -> None:
        self.registrations.extend(registrations)

    def dispose(self) -> None:
        """Unregister everything added during activation."""
        while self.registrations:
            self.registrations.pop().unregister()
