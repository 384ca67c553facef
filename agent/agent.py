from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder
from langchain_google_genai import ChatGoogleGenerativeAI

from agent.core.parsing import parse_json_object
from agent.core.prompt import EXTRACTION_SYSTEM_PROMPT
from config.settings import get_settings


logger = logging.getLogger("modelday.agent")


CHAT_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_context}"),
        MessagesPlaceholder("chat_history", optional=True),
        ("human", "{input}"),
    ]
)

EXTRACTION_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_prompt}"),
        (
            "human",
            (
                "Document type: {document_type}\n"
                "Please analyze this text and extract all relevant information:\n\n"
                "{text}"
            ),
        ),
    ]
)


class EmptyModelResponse(RuntimeError):
    pass


@dataclass
class ModelReply:
    text: str
    model: Optional[str] = None
    usage: Dict[str, Any] = field(default_factory=dict)


def build_chat_model(purpose: str = "chat") -> BaseChatModel:
    settings = get_settings()
    if not settings.google_api_key:
        raise RuntimeError(
            "GOOGLE_API_KEY not set. Please configure it in environment or .env"
        )

    if purpose == "extraction":
        return ChatGoogleGenerativeAI(
            model=settings.extraction_model,
            google_api_key=settings.google_api_key,
            temperature=settings.extraction_temperature,
            max_output_tokens=settings.extraction_max_tokens,
        )

    return ChatGoogleGenerativeAI(
        model=settings.chat_model,
        google_api_key=settings.google_api_key,
        temperature=settings.chat_temperature,
        top_p=settings.chat_top_p,
        max_output_tokens=settings.chat_max_tokens,
    )


def to_lc_messages(history: List[Mapping[str, Any]], limit: Optional[int] = None) -> List[BaseMessage]:
    """Convert client conversation turns to LangChain messages.

    Turns use ``role`` plus ``content`` (or the older ``message`` key); turns
    without text, such as ones that only carry ``userData``, are skipped.
    """
    turns = [item for item in (history or []) if isinstance(item, Mapping)]
    if limit:
        turns = turns[-limit:]

    messages: List[BaseMessage] = []
    for item in turns:
        role = str(item.get("role") or "user").lower()
        content = item.get("content") or item.get("message") or ""
        if not isinstance(content, str) or not content.strip():
            continue
        if role in ("assistant", "ai", "bot"):
            messages.append(AIMessage(content=content))
        else:
            # unknown roles, "system" included, go in as user turns
            messages.append(HumanMessage(content=content))
    return messages


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(str(part.get("text") or ""))
    return "".join(parts)


def _to_reply(llm: BaseChatModel, message: BaseMessage) -> ModelReply:
    text = _message_text(message).strip()
    if not text:
        raise EmptyModelResponse("No response from model")

    metadata = getattr(message, "response_metadata", None) or {}
    usage = dict(getattr(message, "usage_metadata", None) or {})
    model = metadata.get("model_name") or getattr(llm, "model", None)
    return ModelReply(text=text, model=model, usage=usage)


def run_chat(
    llm: BaseChatModel,
    system_context: str,
    message: str,
    history: Optional[List[Mapping[str, Any]]] = None,
) -> ModelReply:
    settings = get_settings()
    chat_history = to_lc_messages(history or [], settings.max_history_turns)
    payload: Dict[str, Any] = {"system_context": system_context, "input": message}
    if chat_history:
        payload["chat_history"] = chat_history

    logger.info(
        "Calling chat model: context_len=%s history_turns=%s message_len=%s",
        len(system_context),
        len(chat_history),
        len(message),
    )
    result = (CHAT_PROMPT | llm).invoke(payload)
    reply = _to_reply(llm, result)
    logger.info("Chat model responded: %s chars", len(reply.text))
    return reply


def run_extraction(
    llm: BaseChatModel,
    text: str,
    document_type: str = "modeling_document",
) -> Tuple[Dict[str, Any], ModelReply]:
    """Ask the model for the structured fields found in ``text``."""
    logger.info("Calling extraction model: text_len=%s document_type=%s", len(text), document_type)
    result = (EXTRACTION_PROMPT | llm).invoke(
        {
            "system_prompt": EXTRACTION_SYSTEM_PROMPT,
            "document_type": document_type,
            "text": text,
        }
    )
    reply = _to_reply(llm, result)
    extracted = parse_json_object(reply.text)
    logger.info(
        "Extraction complete: %s of %s fields populated",
        count_populated(extracted),
        len(extracted),
    )
    return extracted, reply


def count_populated(data: Mapping[str, Any]) -> int:
    return sum(1 for value in data.values() if value is not None)
