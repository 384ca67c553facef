from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from agent.context.builder import build_user_context
from agent.core.prompt import FALLBACK_SYSTEM_PROMPT


logger = logging.getLogger("modelday.context")

PROFILE_MARKER = "USER PROFILE:"

SOURCE_PREBUILT = "pre-built"
SOURCE_USER_DATA = "userData"
SOURCE_CONVERSATION = "conversation"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class ResolvedContext:
    system_context: str
    source: str
    has_user_data: bool

    @property
    def context_limited(self) -> bool:
        return not self.has_user_data


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _carries_context(turn: Mapping[str, Any]) -> bool:
    return bool(turn.get("userData")) or bool(turn.get("context"))


def _mentions_profile(value: Any) -> bool:
    return isinstance(value, str) and PROFILE_MARKER in value


def _has_user_data(user_data: Any, context: Any, turns: List[Mapping[str, Any]]) -> bool:
    if user_data or _mentions_profile(context):
        return True
    return any(turn.get("userData") or _mentions_profile(turn.get("context")) for turn in turns)


def resolve_system_context(
    user_data: Optional[Dict[str, Any]] = None,
    context: Optional[str] = None,
    conversation: Optional[List[Mapping[str, Any]]] = None,
) -> ResolvedContext:
    """Pick the system prompt for a chat turn.

    Priority: a pre-built ``context`` string, then ``user_data``, then the
    first conversation turn that carries ``userData`` or ``context``, and
    finally the static prompt that explains no user data is available.
    """
    turns = [turn for turn in (conversation or []) if isinstance(turn, Mapping)]
    has_user_data = _has_user_data(user_data, context, turns)

    if _has_text(context):
        logger.info("Using pre-built context from request")
        return ResolvedContext(context, SOURCE_PREBUILT, has_user_data)

    if user_data:
        logger.info("Building context from userData")
        return ResolvedContext(build_user_context(user_data), SOURCE_USER_DATA, has_user_data)

    carrier = next((turn for turn in turns if _carries_context(turn)), None)
    if carrier is not None:
        logger.info("Using context embedded in conversation history")
        if carrier.get("userData"):
            system_context = build_user_context(carrier["userData"])
        else:
            system_context = str(carrier["context"])
        return ResolvedContext(system_context, SOURCE_CONVERSATION, has_user_data)

    logger.info("Using fallback context with limitations")
    return ResolvedContext(FALLBACK_SYSTEM_PROMPT, SOURCE_FALLBACK, has_user_data)
