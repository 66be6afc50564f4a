"""
Chat API endpoints.

Routes:
- POST /chat - Answer a question with documentation context

Dependencies: doc_assistant.application.services.chat_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from doc_assistant.api.deps import get_chat_service
from doc_assistant.application.services import ChatService
from doc_assistant.core.exceptions import CompletionError
from doc_assistant.models.chat import ChatAnswer, ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatAnswer)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatAnswer:
    """
    Answer a documentation question.

    Args:
        request: Message and context flag
        chat_service: Injected ChatService

    Returns:
        ChatAnswer: Generated answer with source files

    Raises:
        HTTPException(502): Completion service failed
    """
    try:
        return await chat_service.answer(request.message, include_context=request.include_context)
    except CompletionError as e:
        logger.error(f"{__name__}:chat - Completion failed: {e}")
        raise HTTPException(status_code=502, detail=e.message)
