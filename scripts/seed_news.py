#!/usr/bin/env python3
"""
Seed News Script

Generates one LLM-written news item per company (first 20) and per
industry (first 10). Requires OPENAI_API_KEY or ANTHROPIC_API_KEY.

Usage:
    python -m scripts.seed_news
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.database import create_tables, get_session_factory
from app.core.llm_client import get_llm_client
from app.services.news_generation import NewsGenerator, seed_news


def main():
    llm = get_llm_client()
    if llm is None:
        print("No LLM provider configured; set OPENAI_API_KEY or ANTHROPIC_API_KEY")
        sys.exit(1)

    create_tables()
    db = get_session_factory()()
    try:
        print("Generating AI news...")
        counts = asyncio.run(seed_news(db, NewsGenerator(llm)))
        print(
            f"\nStored {counts['company_news']} company news items and "
            f"{counts['industry_news']} industry news items"
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
