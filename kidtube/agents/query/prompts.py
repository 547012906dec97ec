"""
Query Synthesis Prompt Templates

Contains the system prompt and user prompt builder for the Query Service.

The model is asked for plain text, one search term per line, because the
terms are fed straight into the YouTube search endpoint. The parser in
kidtube/services/query_service.py drops anything that looks like a header,
a numbered list item or an example, so the prompt's own example block never
leaks into the searches.
"""

from typing import List

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

QUERY_SYSTEM_PROMPT = "Generate simple YouTube search terms."


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def build_query_prompt(
    age: int,
    sex: str,
    interests: List[str],
    count: int = 3,
) -> str:
    """
    Build the user prompt for query synthesis.

    Args:
        age: Child's age in years
        sex: Gender label from the form
        interests: Selected interests, in order
        count: Number of search terms to ask for

    Returns:
        str: Prompt ready to be sent to Gemini
    """
    interest_list = ", ".join(interests)

    return f"""Create {count} YouTube search terms for a {age}-year-old {sex} child who likes: {interest_list}.

Make each search term:
- 2-3 words only
- Include "kids" or "children"
- Focus on the interests: {interest_list}

Format: one search term per line, no extra text.

Example:
kids dinosaurs
children princesses
educational science"""
