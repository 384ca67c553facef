from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agent.agent import EmptyModelResponse, build_chat_model, count_populated, run_chat, run_extraction
from agent.context import build_user_context, resolve_system_context
from agent.context.records import COLLECTION_KEYS
from agent.core.errors import classify_upstream_error
from agent.core.parsing import ModelOutputError
from app.models import ChatRequest, ChatWithContextRequest, ContextRequest, OcrRequest
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("modelday")

STARTED_AT = time.monotonic()

app = FastAPI(title="ModelDay Backend Server", version="1.0.0")

settings = get_settings()
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=r"^(https://.*\.vercel\.app|http://localhost:\d+)$",
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )


DATA_FORMAT_HINT = {
    "userData": "Send user data in 'userData' field",
    "context": "Send pre-built context in 'context' field",
    "conversation": "Embed userData/context in conversation messages",
}


class RelayError(Exception):
    """An error reported to the client as ``{error, code[, message]}``."""

    def __init__(self, status_code: int, error: str, code: str, message: Optional[str] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.code = code
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error, "code": self.code}
        if self.message is not None:
            body["message"] = self.message
        return body


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _detail(exc: Exception) -> str:
    return str(exc) if get_settings().is_development else "Something went wrong"


@app.exception_handler(RelayError)
def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        body = {"error": "Endpoint not found", "code": "NOT_FOUND", "path": request.url.path}
    elif exc.status_code == 405:
        body = {"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}
    else:
        body = {"error": str(exc.detail), "code": "HTTP_ERROR"}
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "code": "INVALID_REQUEST", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "code": "UNHANDLED_ERROR", "message": _detail(exc)},
    )


def _upstream_error(exc: Exception, code: str) -> RelayError:
    mapped = classify_upstream_error(exc)
    if mapped is not None:
        return RelayError(mapped.status_code, mapped.error, mapped.code)
    return RelayError(500, "Internal server error", code, _detail(exc))


def _require_api_key() -> None:
    if not get_settings().google_api_key:
        raise RelayError(500, "Model API key not configured", "MISSING_API_KEY")


def _validate_message(message: Any) -> str:
    if message is None or (isinstance(message, str) and not message.strip()):
        raise RelayError(400, "Message is required", "MISSING_MESSAGE")
    if not isinstance(message, str) or len(message) > get_settings().max_message_chars:
        raise RelayError(400, "Invalid message format or too long", "INVALID_MESSAGE")
    return message


def _complete_chat(
    message: str,
    conversation: List[Dict[str, Any]],
    user_data: Optional[Dict[str, Any]] = None,
    context: Optional[str] = None,
    error_code: str = "INTERNAL_ERROR",
) -> Dict[str, Any]:
    resolved = resolve_system_context(user_data=user_data, context=context, conversation=conversation)
    try:
        llm = build_chat_model()
        reply = run_chat(llm, resolved.system_context, message, conversation)
    except Exception as exc:
        logger.exception("Chat completion failed: %s", exc)
        raise _upstream_error(exc, error_code) from exc

    return {
        "success": True,
        "response": reply.text,
        "usage": reply.usage,
        "model": reply.model,
        "timestamp": _now_iso(),
        "hasUserData": resolved.has_user_data,
        "contextLimited": resolved.context_limited,
        "contextSource": resolved.source,
        "dataFormat": DATA_FORMAT_HINT,
    }


@app.get("/")
def root() -> Dict[str, Any]:
    return {
        "message": "ModelDay Backend Server",
        "version": app.version,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "chat": "/api/chat (enhanced with automatic context building)",
            "context": "/api/context (for testing and manual context building)",
            "chatWithContext": "/api/chat-with-context (alternative endpoint)",
            "ocr": "/api/ocr (AI-powered document text analysis and data extraction)",
        },
    }


@app.get("/health")
def health() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": _now_iso(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "environment": get_settings().app_env,
    }


@app.post("/api/chat")
def chat(req: ChatRequest) -> Dict[str, Any]:
    message = _validate_message(req.message)
    _require_api_key()

    conversation = [turn.model_dump(exclude_none=True) for turn in req.conversation]
    logger.info(
        "Incoming chat: message_len=%s history_turns=%s user_data=%s context=%s",
        len(message),
        len(conversation),
        bool(req.userData),
        bool(req.context),
    )
    return _complete_chat(message, conversation, user_data=req.userData, context=req.context)


@app.post("/api/context")
def context(req: ContextRequest) -> Dict[str, Any]:
    if req.userData is None:
        raise RelayError(400, "User data is required", "MISSING_USER_DATA")

    user_data = req.userData
    try:
        built = build_user_context(user_data)
        stats = {}
        for key in COLLECTION_KEYS:
            value = user_data.get(key)
            stats[key] = len(value) if isinstance(value, list) else 0
    except Exception as exc:
        logger.exception("Context building failed: %s", exc)
        raise RelayError(500, "Internal server error", "CONTEXT_ERROR", _detail(exc)) from exc

    return {
        "success": True,
        "context": built,
        "timestamp": _now_iso(),
        "dataStats": stats,
        "usage": {
            "method1": "Send this context in 'context' field to /api/chat",
            "method2": "Send original userData in 'userData' field to /api/chat",
            "method3": "Embed userData in conversation message metadata",
        },
    }


@app.post("/api/chat-with-context")
def chat_with_context(req: ChatWithContextRequest) -> Dict[str, Any]:
    message = _validate_message(req.message)
    if req.userData is None:
        raise RelayError(400, "User data is required for this endpoint", "MISSING_USER_DATA")
    _require_api_key()

    conversation = [turn.model_dump(exclude_none=True) for turn in req.conversation]
    try:
        built = build_user_context(req.userData)
    except Exception as exc:
        logger.exception("Context building failed: %s", exc)
        raise RelayError(500, "Internal server error", "CHAT_CONTEXT_ERROR", _detail(exc)) from exc
    return _complete_chat(message, conversation, context=built, error_code="CHAT_CONTEXT_ERROR")


@app.post("/api/ocr")
def ocr(req: OcrRequest) -> Dict[str, Any]:
    text = req.text
    if not isinstance(text, str) or not text.strip():
        raise RelayError(400, "Text content is required for OCR analysis", "MISSING_TEXT")
    _require_api_key()

    logger.info("OCR analysis request: text_len=%s document_type=%s", len(text), req.documentType)
    try:
        llm = build_chat_model("extraction")
        extracted, reply = run_extraction(llm, text, req.documentType)
    except ModelOutputError as exc:
        logger.warning("Extraction reply was not a JSON object: %s", exc)
        raise RelayError(502, "Invalid JSON response from model", "INVALID_MODEL_OUTPUT", _detail(exc)) from exc
    except EmptyModelResponse as exc:
        raise RelayError(502, "No response from model", "INVALID_MODEL_OUTPUT") from exc
    except Exception as exc:
        logger.exception("OCR analysis failed: %s", exc)
        raise _upstream_error(exc, "OCR_ERROR") from exc

    return {
        "success": True,
        "extractedData": extracted,
        "usage": reply.usage,
        "model": reply.model,
        "timestamp": _now_iso(),
        "textLength": len(text),
        "fieldsExtracted": count_populated(extracted),
        "confidence": "high",
    }
