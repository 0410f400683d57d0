from __future__ import annotations

import asyncio
import logging
import uuid
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence

import httpx

from agent.core.prompt import EMPTY_REPLY_ERROR, GENERIC_CLIENT_ERROR, GREETING
from agent.models import ChatMessage, ChatTurn
from client.agent_client import AgentClient, AgentRequestError
from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)


class AgentState(str, Enum):
    IDLE = "idle"
    THINKING = "thinking"
    ERROR = "error"


class ReplySource(Protocol):
    async def request_reply(self, messages: Sequence[ChatMessage]) -> str:
        ...


def _new_id() -> str:
    return uuid.uuid4().hex


INITIAL_GREETING = ChatTurn(id="greeting", role="assistant", content=GREETING)


class ConversationStore:
    """Transcript and agent state of one chat session.

    Only one request may be in flight: ``submit`` is refused while the agent
    is thinking. After a failure the state drops back to idle on its own once
    ``error_reset_delay`` seconds have passed.
    """

    def __init__(
        self,
        client: ReplySource,
        error_reset_delay: Optional[float] = None,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.client = client
        if error_reset_delay is None:
            error_reset_delay = get_settings().error_reset_delay
        self.error_reset_delay = error_reset_delay
        self.id_factory = id_factory
        self.messages: List[ChatTurn] = [INITIAL_GREETING]
        self.input = ""
        self.agent_state = AgentState.IDLE
        self.error_message: Optional[str] = None

    @property
    def can_send(self) -> bool:
        return bool(self.input.strip()) and self.agent_state is not AgentState.THINKING

    @property
    def visible_error(self) -> Optional[str]:
        if self.agent_state is AgentState.ERROR:
            return self.error_message
        return None

    async def submit(self, text: Optional[str] = None) -> bool:
        """Send ``text`` (or the pending input). Returns False when refused."""
        if text is not None:
            self.input = text
        if not self.can_send:
            return False

        user_turn = ChatTurn(id=self.id_factory(), role="user", content=self.input.strip())
        self.input = ""
        self.messages = [*self.messages, user_turn]
        self.agent_state = AgentState.THINKING
        self.error_message = None

        transcript = [turn.to_message() for turn in self.messages]
        try:
            reply = await self.client.request_reply(transcript)
            cleaned = (reply or "").strip()
            if not cleaned:
                raise AgentRequestError(EMPTY_REPLY_ERROR)
        except AgentRequestError as exc:
            self._fail(str(exc) or EMPTY_REPLY_ERROR)
            return True
        except Exception as exc:
            logger.exception("Reply source failed: %s", exc)
            self._fail(str(exc) or GENERIC_CLIENT_ERROR)
            return True

        self.messages = [
            *self.messages,
            ChatTurn(id=self.id_factory(), role="assistant", content=cleaned),
        ]
        self.agent_state = AgentState.IDLE
        return True

    def _fail(self, message: str) -> None:
        logger.info("Agent request failed: %s", message)
        self.error_message = message
        self.agent_state = AgentState.ERROR
        # Not cancelled by later submissions; it only ever moves error -> idle.
        asyncio.get_running_loop().call_later(self.error_reset_delay, self._clear_error_state)

    def _clear_error_state(self) -> None:
        if self.agent_state is AgentState.ERROR:
            self.agent_state = AgentState.IDLE


def open_session(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ConversationStore:
    settings = settings or get_settings()
    return ConversationStore(
        AgentClient(
            settings.agent_api_url,
            http_client=http_client,
            timeout=settings.agent_request_timeout,
        ),
        error_reset_delay=settings.error_reset_delay,
    )
