from __future__ import annotations

import re
from typing import List, Optional, Sequence

from agent.core.prompt import (
    FALLBACK_CHECKLIST_HEADER,
    FALLBACK_CLOSING,
    FALLBACK_ECHO,
    FALLBACK_NO_DETAILS,
    FALLBACK_NOTICE,
    FALLBACK_PLACEHOLDER_TASKS,
)
from agent.models import ChatMessage


MAX_TASKS = 5

# The byte-order mark counts as whitespace here; str.isspace() disagrees.
_WHITESPACE_RE = re.compile(r"[\s\ufeff]+")
_PUNCTUATION_RE = re.compile(r"[!?]+")
_SEGMENT_RE = re.compile(r"[.,]")


def _latest_user_message(messages: Sequence[ChatMessage]) -> Optional[ChatMessage]:
    for message in reversed(messages or []):
        if message.role == "user":
            return message
    return None


def _sanitize(text: str) -> str:
    text = _WHITESPACE_RE.sub(" ", text)
    text = _PUNCTUATION_RE.sub(".", text)
    return text.strip()


def extract_tasks(text: str) -> List[str]:
    """Split free text into at most MAX_TASKS checklist candidates."""
    segments = (segment.strip() for segment in _SEGMENT_RE.split(_sanitize(text)))
    return [segment for segment in segments if segment][:MAX_TASKS]


def render_checklist(tasks: Sequence[str]) -> str:
    if not tasks:
        return "\n".join(FALLBACK_PLACEHOLDER_TASKS)
    return "\n".join(
        f"{index}. {task[0].upper()}{task[1:]}" for index, task in enumerate(tasks, start=1)
    )


def fallback_response(messages: Sequence[ChatMessage]) -> str:
    """Canned reply used when no Gemini credential is configured.

    Pure function of the transcript: the latest user turn is echoed back
    verbatim and its sentences/clauses become a numbered checklist.
    """
    latest_user = _latest_user_message(messages)
    raw_content = latest_user.content if latest_user else ""

    if latest_user:
        echo = FALLBACK_ECHO.format(content=raw_content)
    else:
        echo = FALLBACK_NO_DETAILS

    return "\n".join(
        [
            FALLBACK_NOTICE,
            "",
            echo,
            "",
            FALLBACK_CHECKLIST_HEADER,
            render_checklist(extract_tasks(raw_content)),
            "",
            FALLBACK_CLOSING,
        ]
    )
