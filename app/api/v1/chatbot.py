"""
"Ask OP" chat endpoint.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.chatbot import (
    ChatbotError,
    ChatMessage,
    build_company_context,
    chat_with_op,
    format_chat_response,
)
from app.services.companies import CompanyService, company_dict

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


class ChatRequest(BaseModel):
    messages: List[ChatTurn] = Field(..., min_length=1)
    company_id: Optional[int] = Field(None, description="Company the user is viewing")
    company_context: Optional[str] = Field(None, max_length=500)


@router.post("/chat")
async def chat(request: ChatRequest, db: Session = Depends(get_db)):
    """
    Send the conversation to the assistant.

    A company_id is turned into a context string from the company record;
    otherwise company_context is passed through as given.
    """
    context = request.company_context
    if request.company_id is not None:
        service = CompanyService(db)
        company = service.get_company(request.company_id)
        if company:
            data = company_dict(company, service.get_aggregate_score(company.id))
            context = build_company_context(company.name, data)

    messages = [ChatMessage(role=m.role, content=m.content) for m in request.messages]
    try:
        reply = await chat_with_op(messages, company_context=context)
    except ChatbotError as e:
        raise HTTPException(status_code=502, detail=e.message)

    return {"message": reply, "html": format_chat_response(reply)}
