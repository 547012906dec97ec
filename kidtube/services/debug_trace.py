"""
Per-request debug trace for the recommendation pipeline.

A DebugTrace is created by the route for each request and passed explicitly
through every pipeline stage. Stages only append to it; nothing reads it back
for control flow. The serialized trace is returned as `debug` so the UI can
show what happened (which queries were used, which calls failed).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class DebugTrace:
    """
    Append-only diagnostic record for one request.

    Attributes:
        timestamp: When the request started (UTC, ISO-8601)
        step: Last pipeline step reached
        steps: Every step reached, in order
        request: Echo of the validated profile
        api_key_status: Which external services were configured
        llm: Gemini request/response summary
        queries: Search queries that were actually used
        query_source: "gemini" or "fallback"
        search_results: One summary per YouTube search call
        errors: Failures by stage, in the order they happened
        final_result: Human-readable outcome
    """
    timestamp: str = field(default_factory=_now_iso)
    step: str = "starting"
    steps: List[str] = field(default_factory=list)
    request: Dict[str, Any] = field(default_factory=dict)
    api_key_status: Dict[str, bool] = field(default_factory=dict)
    llm: Dict[str, Any] = field(default_factory=dict)
    queries: List[str] = field(default_factory=list)
    query_source: Optional[str] = None
    search_results: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    final_result: Optional[str] = None

    def mark(self, step: str) -> None:
        """Record that the pipeline reached `step`."""
        self.step = step
        self.steps.append(step)

    def record_error(self, stage: str, message: str, **details: Any) -> None:
        """Record a recovered (or fatal) failure for `stage`."""
        entry: Dict[str, Any] = {"stage": stage, "message": message, "at": _now_iso()}
        entry.update(details)
        self.errors.append(entry)

    def record_search(self, query: str, video_count: int, success: bool, **details: Any) -> None:
        """Record the outcome of one search call."""
        entry: Dict[str, Any] = {
            "query": query,
            "videoCount": video_count,
            "success": success,
        }
        entry.update(details)
        self.search_results.append(entry)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the `debug` field of the response."""
        return {
            "timestamp": self.timestamp,
            "step": self.step,
            "steps": list(self.steps),
            "request": dict(self.request),
            "apiKeyStatus": dict(self.api_key_status),
            "llm": dict(self.llm),
            "queries": list(self.queries),
            "querySource": self.query_source,
            "searchResults": [dict(entry) for entry in self.search_results],
            "errors": [dict(entry) for entry in self.errors],
            "finalResult": self.final_result,
        }
