"""Dictation polish request handler.

Maps one inbound request (method + raw body) to one response. Every path,
including unexpected exceptions, ends in a JSON response carrying the CORS
headers; nothing is raised past :meth:`PolishHandler.handle`.
"""

import json
import logging
from dataclasses import dataclass, field

import httpx
from pydantic import BaseModel

from dictation_polish.config import DeepSeekConfig
from dictation_polish.models.polish import ErrorBody, PolishRequest
from dictation_polish.services.deepseek import DeepSeekClient, UpstreamError
from dictation_polish.services.prompts import build_messages
from dictation_polish.services.report import normalize_report, parse_report_content

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


@dataclass
class HandlerRequest:
    method: str
    body: str = ""


@dataclass
class HandlerResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def json(self) -> object:
        return json.loads(self.body)


def _encode_json(data: dict) -> bytes:
    try:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates from the model cannot be UTF-8 encoded; escape them
        return json.dumps(data, separators=(",", ":")).encode("ascii")


def _json_response(status_code: int, payload: BaseModel) -> HandlerResponse:
    return HandlerResponse(
        status_code=status_code,
        headers={**CORS_HEADERS, "Content-Type": "application/json"},
        body=_encode_json(payload.model_dump(exclude_none=True)),
    )


def _error(status_code: int, error: str, details: str | None = None) -> HandlerResponse:
    return _json_response(status_code, ErrorBody(error=error, details=details))


class PolishHandler:
    def __init__(
        self,
        config: DeepSeekConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.client = DeepSeekClient(config, transport=transport)

    async def handle(self, request: HandlerRequest) -> HandlerResponse:
        if request.method == "OPTIONS":
            return HandlerResponse(status_code=204, headers=dict(CORS_HEADERS))

        if request.method != "POST":
            logger.warning("Rejected %s request", request.method)
            return _error(405, "Method Not Allowed")

        try:
            return await self._polish(request.body)
        except UpstreamError as e:
            return _error(502, "DeepSeek error", e.body)
        except Exception as e:
            logger.exception("Polish request failed")
            return _error(500, "Server exception", str(e))

    async def _polish(self, raw_body: str) -> HandlerResponse:
        payload = json.loads(raw_body) if raw_body else {}
        polish_request = PolishRequest.from_payload(payload)

        if not polish_request.text:
            logger.warning("Polish request missing text")
            return _error(400, "Missing text")

        if not self.config.api_key:
            logger.warning("DEEPSEEK_API_KEY not set, cannot polish report")
            return _error(500, "Server missing DEEPSEEK_API_KEY")

        logger.info(
            "Polishing dictation: text_len=%d, template=%s",
            len(polish_request.text), bool(polish_request.template),
        )

        content = await self.client.complete(build_messages(polish_request))
        report = normalize_report(parse_report_content(content), polish_request.text)
        return _json_response(200, report)
