"""HTTP routes for invoking registered commands."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from ..errors import CommandNotFoundError, InvalidPromptError
from ..host import CommandBus

router = APIRouter(prefix="/api/commands", tags=["commands"])
logger = structlog.get_logger(__name__)


class CommandRequest(BaseModel):
    """Positional arguments forwarded to the command handler."""

    args: list[Any] = Field(default_factory=list)


class CommandResponse(BaseModel):
    result: Any = None


def get_command_bus(request: Request) -> CommandBus:
    """Fetch the command bus from application state."""
    try:
        return request.app.state.command_bus  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("CommandBus is not configured") from exc


@router.post("/{command}", response_model=CommandResponse)
async def invoke_command(
    command: str,
    payload: CommandRequest,
    bus: CommandBus = Depends(get_command_bus),
) -> CommandResponse:
    """Invoke ``command`` with ``payload.args`` and return its result."""
    try:
        result = await bus.invoke(command, *payload.args)
    except CommandNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidPromptError as exc:
        logger.info("commands.invalid_input", command=command)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return CommandResponse(result=result)
