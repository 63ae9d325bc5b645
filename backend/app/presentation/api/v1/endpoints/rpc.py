"""Single-endpoint RPC used by the remote storage backend."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from app.application.services import RpcDispatcher
from app.infrastructure.dependencies import get_rpc_dispatcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["RPC"])


async def _read_body(request: Request) -> dict[str, Any]:
    """Decode the JSON body; an empty or unparseable body counts as ``{}``."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring unparseable request body (%d bytes)", len(raw))
        return {}
    return body if isinstance(body, dict) else {}


@router.api_route("/rpc", methods=["GET", "POST"])
async def rpc(
    request: Request,
    action: str | None = Query(None, description="Action name, e.g. getBills"),
    dispatcher: RpcDispatcher = Depends(get_rpc_dispatcher),
) -> Any:
    """Dispatch ``action`` against the SQL repositories.

    Writes answer ``{"success": true}``; errors answer ``{"error": ...}``.
    """
    return await dispatcher.dispatch(action, await _read_body(request))
