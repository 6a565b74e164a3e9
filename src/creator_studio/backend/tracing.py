"""Request tracing for backend calls.

When a debug directory is configured, each request gets a human-readable
trace ID and its request/response/error bodies are saved as JSON files:

    {debug_dir}/logs/{session_id}/{trace_id}/request.json
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class RequestTracer:
    """Generates trace IDs and saves debug data for backend calls.

    Example:
        tracer = RequestTracer(debug_dir="/tmp/creator-studio")
        trace_id = tracer.generate_trace_id("generateContent", "review of a laptop")
        tracer.save_debug(trace_id, "request.json", body)
    """

    def __init__(self, debug_dir: str | Path | None = None) -> None:
        self._request_counter = 0
        self._session_id: str | None = None
        self._debug_dir_config = debug_dir

    @property
    def debug_dir(self) -> Path | None:
        """Session debug directory, or None when tracing is disabled."""
        if not self._debug_dir_config:
            return None

        if self._session_id is None:
            self._session_id = time.strftime("%Y-%m-%d_%H-%M-%S")

        return Path(self._debug_dir_config) / "logs" / self._session_id

    def generate_trace_id(self, operation: str, context: str = "") -> str:
        """Generate a trace ID like ``00001_031333_generateContent_review_of_a``."""
        self._request_counter += 1
        timestamp = time.strftime("%H%M%S")

        words = context.split()[:3]
        label = "_".join(w[:8] for w in words)[:20]
        label = "".join(c if c.isalnum() or c == "_" else "" for c in label) or "request"

        return f"{self._request_counter:05d}_{timestamp}_{operation}_{label}"

    def save_debug(self, trace_id: str, filename: str, data: Any) -> None:
        """Save debug data to JSON file if a debug directory is configured."""
        if not self.debug_dir:
            return

        try:
            trace_path = self.debug_dir / trace_id
            trace_path.mkdir(parents=True, exist_ok=True)

            filepath = trace_path / filename
            with open(filepath, "w") as f:
                json.dump(data, f, indent=2, default=str)
            logger.debug("[%s] Saved debug file: %s", trace_id, filepath)
        except OSError as e:
            logger.warning("[%s] Failed to save debug file %s: %s", trace_id, filename, e)
