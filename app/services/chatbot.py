"""
"Ask OP" chat assistant.

Answers free-form questions about companies with the shared LLM client.
An optional company context string is appended to the system prompt when
the user is looking at a specific company.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.core.llm_client import LLMClient, get_llm_client

logger = logging.getLogger(__name__)

CHAT_ROLES = ("user", "assistant")

SYSTEM_PROMPT = """You are "OP" (Optimal Platform), an expert AI assistant for a company culture comparison platform. Your role is to help users learn about company cultures, work environments, compensation, and career opportunities.

You have access to a database of companies with detailed culture metrics, salary data, reviews, and job information. When users ask about companies:

1. If the company is in our database, provide specific data points (ratings, salaries, reviews)
2. If the company is not in our database, use your knowledge to provide accurate information
3. Always be honest about what you know vs. don't know
4. Provide actionable insights to help users make career decisions
5. Be conversational and helpful, not robotic

Key metrics you can discuss:
- Overall Rating (0-5)
- Work-Life Balance (0-5)
- Compensation & Benefits (0-5)
- Career Opportunities (0-5)
- Company Culture (0-5)
- Management Quality (0-5)
- Salary ranges by role and level
- Interview experiences
- Job openings and growth

When comparing companies, highlight key differences and trade-offs. Be balanced and fair in your assessments."""

FAILURE_MESSAGE = "Failed to get response from AI assistant"


class ChatbotError(Exception):
    """The assistant could not produce a reply."""

    def __init__(self, message: str = FAILURE_MESSAGE):
        self.message = message
        super().__init__(message)


@dataclass
class ChatMessage:
    role: str  # user | assistant
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


def build_system_prompt(company_context: Optional[str] = None) -> str:
    if not company_context:
        return SYSTEM_PROMPT
    return (
        f"{SYSTEM_PROMPT}\n\nCurrent Context: The user is viewing information about "
        f"{company_context}. Use this context to provide relevant insights."
    )


async def chat_with_op(
    messages: List[ChatMessage],
    company_context: Optional[str] = None,
    llm_client: Optional[LLMClient] = None,
) -> str:
    """
    Send the conversation to the LLM and return the assistant's reply.

    Raises:
        ChatbotError: No LLM configured, provider failure or empty reply
    """
    llm = llm_client or get_llm_client()
    if llm is None:
        logger.error("Chatbot error: no LLM provider configured")
        raise ChatbotError()

    try:
        response = await llm.chat(
            [m.to_dict() for m in messages],
            system_prompt=build_system_prompt(company_context),
        )
    except Exception as e:
        logger.error(f"Chatbot error: {e}")
        raise ChatbotError() from e

    if not response.content:
        logger.error("Chatbot error: empty response from LLM")
        raise ChatbotError()
    return response.content


def format_chat_response(text: str) -> str:
    """Render **bold**, *italic* and newlines as HTML."""
    text = re.sub(r"\*\*(.*?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"\*(.*?)\*", r"<em>\1</em>", text)
    return text.replace("\n", "<br/>")


def build_company_context(company_name: str, data: Optional[Dict[str, Any]] = None) -> str:
    """e.g. "Acme - (Technology) - Rating: 4.2/5"."""
    if not data:
        return company_name

    parts = [company_name]
    if data.get("industry"):
        parts.append(f"({data['industry']})")
    overall = (data.get("aggregate_score") or {}).get("overall_rating")
    if overall:
        parts.append(f"Rating: {overall}/5")
    return " - ".join(parts)
