"""
Query Synthesis - Single-Shot LLM Prompting

Prompt templates for turning a child's profile into YouTube search terms.

Architecture:
- Pattern: single text-generation call, plain-text output (one term per line)
- Model: Gemini (GEMINI_MODEL setting)
- Output budget: small (a handful of 2-3 word lines)

The service layer is in:
- kidtube/services/query_service.py
"""

from kidtube.agents.query.prompts import (
    QUERY_SYSTEM_PROMPT,
    build_query_prompt,
)

__all__ = [
    "QUERY_SYSTEM_PROMPT",
    "build_query_prompt",
]
