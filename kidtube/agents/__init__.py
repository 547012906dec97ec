"""
LLM components for the KidTube backend.

1. Query Synthesis (single-shot text generation)
   - Uses Gemini to turn a child's profile into short YouTube search terms
   - NOT an ADK agent - uses the Google Gen AI SDK directly
   - Service layer: kidtube/services/query_service.py
   - Prompt templates: kidtube/agents/query/prompts.py
"""
