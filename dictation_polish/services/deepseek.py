"""DeepSeek chat-completions client.

Sends one prompt to ``{base_url}/v1/chat/completions`` and returns the text
of the first choice. Non-2xx replies raise :class:`UpstreamError` carrying the
upstream body verbatim; transport failures propagate as ``httpx`` errors.
"""

import logging

import httpx

from dictation_polish.config import DeepSeekConfig
from dictation_polish.models.polish import coerce_text

logger = logging.getLogger(__name__)

DEEPSEEK_TEMPERATURE = 0.2


class UpstreamError(Exception):
    """The completion API answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"DeepSeek returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


def extract_content(data: object) -> str:
    """Return ``choices[0].message.content`` or "" if any step is missing."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return ""
    return coerce_text(message.get("content"))


class DeepSeekClient:
    def __init__(
        self,
        config: DeepSeekConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    def build_payload(self, messages: list[dict]) -> dict:
        return {
            "model": self.config.model,
            "messages": messages,
            "temperature": DEEPSEEK_TEMPERATURE,
        }

    async def complete(self, messages: list[dict]) -> str:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout),
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            resp = await client.post(
                self.config.completions_url,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.config.api_key}",
                },
                json=self.build_payload(messages),
            )

            if not resp.is_success:
                body = resp.text
                logger.warning(
                    "DeepSeek API error %s: %s", resp.status_code, body[:200],
                )
                raise UpstreamError(resp.status_code, body)

            data = resp.json()

        content = extract_content(data)
        logger.info(
            "DeepSeek response: model=%s, content_len=%d",
            self.config.model, len(content),
        )
        return content
