from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx

from agent.core.prompt import GENERIC_CLIENT_ERROR, NO_RESPONSE_ERROR
from agent.models import ChatMessage


logger = logging.getLogger(__name__)

AGENT_PATH = "/api/agent"


class AgentRequestError(RuntimeError):
    """The agent endpoint could not be reached or answered with an error."""


class AgentClient:
    """Posts the session transcript to the proxy handler.

    One request per call, no retries. ``timeout`` of None waits for the reply
    as long as it takes. Pass ``http_client`` to reuse a connection pool or to
    route requests through a custom transport.
    """

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    async def request_reply(self, messages: Sequence[ChatMessage]) -> str:
        payload = {
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        url = f"{self.base_url}{AGENT_PATH}"

        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Agent request failed: %s", exc)
            raise AgentRequestError(str(exc) or GENERIC_CLIENT_ERROR) from exc

        if not response.is_success:
            body = _json_or_none(response)
            error = body.get("error") if isinstance(body, dict) else None
            logger.warning("Agent answered %s: %s", response.status_code, error)
            raise AgentRequestError(error or NO_RESPONSE_ERROR)

        body = _json_or_none(response)
        if not isinstance(body, dict):
            raise AgentRequestError(GENERIC_CLIENT_ERROR)
        text = body.get("text")
        return text if isinstance(text, str) else ""


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
