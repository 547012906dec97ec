"""
Query Service - Gemini search-term synthesis

Turns a child's profile (age, gender, interests) into a short list of YouTube
search terms.

Architecture:
- Pattern: single text-generation call, plain-text output
- Model: GEMINI_MODEL setting (default Gemini 2.5 Flash)
- API: Google Gen AI Python SDK (google-genai)
- Output: one search term per line, parsed and filtered here

Failure policy:
- Missing GOOGLE_API_KEY, an API error, an empty response or a response with
  no usable lines all fall back to deterministic "kids <interest>" queries.
- Failures are logged and written to the request's debug trace; they are
  never raised to the caller.
"""

import logging
import re
from typing import List, Optional

from google import genai
from google.genai import types

from kidtube.agents.query.prompts import QUERY_SYSTEM_PROMPT, build_query_prompt
from kidtube.config import settings
from kidtube.services.debug_trace import DebugTrace

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client = None

QUERY_MAX_OUTPUT_TOKENS = 100
QUERY_TEMPERATURE = 0.7

# Leading "1." / "2)" / "-" / "*" / "•" list markers
_ENUMERATION_MARKER = re.compile(r"^(?:\d+[.)]|[-*•])\s*")


def _get_gemini_client():
    """
    Lazy initialization of Gemini client.
    Uses the Google Gen AI SDK.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    api_key = settings.GOOGLE_API_KEY

    if not api_key:
        logger.warning(
            "GOOGLE_API_KEY not configured. Query synthesis will use fallback queries. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        return None

    try:
        _gemini_client = genai.Client(api_key=api_key)
        logger.info("Gemini client initialized successfully for query synthesis")
        return _gemini_client
    except Exception as e:
        logger.error(f"Failed to initialize Gemini client: {e}")
        return None


def _extract_response_text(response) -> Optional[str]:
    """Get the text out of a Gemini response, preferring the first text part."""
    if response.candidates:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            for part in candidate.content.parts:
                if getattr(part, "text", None):
                    return part.text

    return response.text


def parse_query_lines(text: str, count: int) -> List[str]:
    """
    Parse the model output into search terms.

    Lines are trimmed; empty lines, lines containing a colon, lines starting
    with an enumeration marker and lines containing "Example" are dropped.
    At most `count` terms are returned.
    """
    # Some responses come back with escaped newlines
    normalized = text.replace("\\n", "\n")

    queries: List[str] = []
    for line in normalized.split("\n"):
        query = line.strip()
        if not query:
            continue
        if ":" in query or "Example" in query:
            continue
        if _ENUMERATION_MARKER.match(query):
            continue
        queries.append(query)

    return queries[:count]


def build_fallback_queries(interests: List[str], count: int) -> List[str]:
    """Deterministic queries used whenever Gemini is unavailable: "kids <interest>"."""
    return [f"kids {interest}" for interest in interests[:count]]


async def synthesize_queries(
    age: int,
    sex: str,
    interests: List[str],
    trace: DebugTrace,
    count: Optional[int] = None,
) -> List[str]:
    """
    Produce the ordered list of search queries for a profile.

    This function:
    1. Builds the prompt from the profile
    2. Calls Gemini with a small output budget
    3. Parses one query per line, dropping headers and examples
    4. Falls back to "kids <interest>" queries on any failure

    Args:
        age: Child's age in years
        sex: Gender label from the form
        interests: Selected interests (non-empty)
        trace: Debug trace for this request
        count: Maximum number of queries (defaults to QUERY_COUNT)

    Returns:
        Non-empty list of at most `count` queries
    """
    if count is None:
        count = settings.QUERY_COUNT

    fallback_queries = build_fallback_queries(interests, count)

    client = _get_gemini_client()
    if client is None:
        trace.mark("llm_not_configured")
        trace.llm = {"error": "Gemini API key not configured", "fallbackQueries": fallback_queries}
        trace.queries = fallback_queries
        trace.query_source = "fallback"
        return fallback_queries

    prompt = build_query_prompt(age=age, sex=sex, interests=interests, count=count)
    trace.llm = {
        "model": settings.GEMINI_MODEL,
        "prompt": prompt[:200] + "...",
        "system": QUERY_SYSTEM_PROMPT,
        "maxOutputTokens": QUERY_MAX_OUTPUT_TOKENS,
    }

    try:
        trace.mark("calling_llm")
        logger.info(f"Calling Gemini for {count} search queries (age={age}, interests={interests})")

        config = types.GenerateContentConfig(
            system_instruction=QUERY_SYSTEM_PROMPT,
            temperature=QUERY_TEMPERATURE,
            max_output_tokens=QUERY_MAX_OUTPUT_TOKENS,
            # Short answer; spend the whole budget on output
            thinking_config=types.ThinkingConfig(thinking_budget=0),
        )

        response = await client.aio.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt,
            config=config,
        )

        text = _extract_response_text(response)
    except Exception as e:
        logger.error(f"Error calling Gemini API: {e}")
        trace.mark("llm_error")
        trace.record_error("query_synthesis", str(e), errorType=type(e).__name__)
        trace.llm["fallbackQueries"] = fallback_queries
        trace.queries = fallback_queries
        trace.query_source = "fallback"
        return fallback_queries

    trace.mark("llm_success")
    trace.llm["rawText"] = text

    queries = parse_query_lines(text or "", count)
    if not queries:
        logger.warning("Gemini response contained no usable search queries, using fallback")
        trace.record_error("query_synthesis", "No usable search queries in Gemini response")
        trace.llm["fallbackQueries"] = fallback_queries
        trace.queries = fallback_queries
        trace.query_source = "fallback"
        return fallback_queries

    logger.info(f"Synthesized search queries: {queries}")
    trace.queries = queries
    trace.query_source = "gemini"
    return queries
