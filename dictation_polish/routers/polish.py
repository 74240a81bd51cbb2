"""HTTP adapter for the polish handler.

Every method is routed to the handler so it alone decides between 204, 405
and the POST outcomes, and the response is passed through unchanged.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from dictation_polish.config import DeepSeekConfig
from dictation_polish.handler import HandlerRequest, PolishHandler

logger = logging.getLogger(__name__)
router = APIRouter(tags=["polish"])

POLISH_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def get_polish_handler() -> PolishHandler:
    """Build a handler from the environment as it is at request time."""
    return PolishHandler(DeepSeekConfig.from_env())


@router.api_route("/api/deepseek-polish", methods=POLISH_METHODS)
@router.api_route("/.netlify/functions/deepseek-polish", methods=POLISH_METHODS)
async def deepseek_polish(
    request: Request,
    handler: PolishHandler = Depends(get_polish_handler),
) -> Response:
    raw = await request.body()
    result = await handler.handle(
        HandlerRequest(method=request.method, body=raw.decode("utf-8", errors="replace")),
    )
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )
