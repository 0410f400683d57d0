from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from fastapi import Depends
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_google_genai import (
    ChatGoogleGenerativeAI,
    HarmBlockThreshold,
    HarmCategory,
)

from agent.core.prompt import SYSTEM_PROMPT
from agent.fallback import fallback_response
from agent.models import ChatMessage
from config.settings import Settings, get_settings


logger = logging.getLogger("jarvispark")

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
}


class ReplyGenerator(Protocol):
    """Anything that turns a transcript into reply text."""

    def generate(self, messages: Sequence[ChatMessage]) -> str:
        ...


class FallbackGenerator:
    """Used when no Gemini credential is configured."""

    def generate(self, messages: Sequence[ChatMessage]) -> str:
        return fallback_response(messages)


def generation_config(settings: Settings) -> Dict[str, Any]:
    return {
        "temperature": settings.temperature,
        "top_p": settings.top_p,
        "top_k": settings.top_k,
        "max_output_tokens": settings.max_output_tokens,
    }


def build_llm(settings: Settings) -> ChatGoogleGenerativeAI:
    if not settings.gemini_api_key:
        raise RuntimeError(
            "GEMINI_API_KEY not set. Please configure it in environment or .env"
        )

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.gemini_api_key,
        safety_settings=SAFETY_SETTINGS,
        **generation_config(settings),
    )


def to_lc_messages(history: Sequence[ChatMessage]) -> List[BaseMessage]:
    """Map transcript turns onto Gemini's vocabulary.

    The persona instruction goes first as a user turn; assistant turns become
    AIMessage, which Gemini receives with role ``model``.
    """
    messages: List[BaseMessage] = [HumanMessage(content=SYSTEM_PROMPT)]
    for item in history or []:
        if item.role == "assistant":
            messages.append(AIMessage(content=item.content))
        else:
            messages.append(HumanMessage(content=item.content))
    return messages


def extract_text(result: Any) -> str:
    content = getattr(result, "content", result)
    if isinstance(content, str):
        return content
    parts: List[str] = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and isinstance(part.get("text"), str):
            parts.append(part["text"])
    return "".join(parts)


class GeminiGenerator:
    def __init__(self, settings: Settings, llm: Optional[BaseChatModel] = None) -> None:
        self.settings = settings
        self.llm = llm

    def generate(self, messages: Sequence[ChatMessage]) -> str:
        if self.llm is None:
            self.llm = build_llm(self.settings)
        lc_messages = to_lc_messages(messages)
        logger.info(
            "Calling %s with %s turns (persona included)",
            self.settings.gemini_model,
            len(lc_messages),
        )
        return extract_text(self.llm.invoke(lc_messages))


def get_generator(settings: Settings = Depends(get_settings)) -> ReplyGenerator:
    if not settings.gemini_api_key:
        return FallbackGenerator()
    logger.info(
        "Config: model=%s generation=%s",
        settings.gemini_model,
        generation_config(settings),
    )
    return GeminiGenerator(settings)
