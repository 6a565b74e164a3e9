"""GeminiClient - aiohttp client for the Gemini REST API.

Implements both GenerationBackend and VideoBackend. Each client is bound
to one StudioConfig; to switch credentials build a new client with
``client.with_config(config.with_api_key(...))``.

Key features:
- Lazily created aiohttp.ClientSession, released by close()
- HTTP errors mapped onto the Creator Studio error taxonomy
- Structured responses validated with pydantic
- Optional request/response dumps via RequestTracer
- No retries: a failed call fails the step that made it
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from creator_studio.backend.parsing import parse_result
from creator_studio.backend.prompts import GENERATION_SPECS, GenerationSpec, render_choose_best
from creator_studio.backend.protocols import GenerationKind
from creator_studio.backend.tracing import RequestTracer
from creator_studio.core.config import StudioConfig
from creator_studio.core.errors import BackendCallError, CredentialError, ParseError
from creator_studio.core.operations.operation import PollableOperation

logger = logging.getLogger(__name__)

# Video defaults for generated Shorts
VIDEO_ASPECT_RATIO = "9:16"
VIDEO_RESOLUTION = "720p"

_CREDENTIAL_STATUS_CODES = frozenset({401, 403})


class GeminiClient:
    """Async client for text generation and long-running video jobs.

    Example:
        >>> async with GeminiClient(StudioConfig.from_env()) as client:
        ...     hooks = await client.generate(GenerationKind.HOOKS, "review of a new laptop")
        ...     operation = await client.start_long_running_job("a cat surfing at sunset")
    """

    def __init__(self, config: StudioConfig) -> None:
        self._config = config
        self._session_holder: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()
        self._tracer = RequestTracer(debug_dir=config.debug_dir)

    @property
    def config(self) -> StudioConfig:
        return self._config

    def with_config(self, config: StudioConfig) -> GeminiClient:
        """Return a new client bound to ``config``."""
        return GeminiClient(config)

    async def __aenter__(self) -> GeminiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Text generation
    # ------------------------------------------------------------------

    async def generate(self, kind: GenerationKind, input: str) -> Any:
        """Run one generation and return its parsed result.

        Raises:
            BackendCallError: On network/HTTP/refusal failures.
            ParseError: If the output does not match the expected shape.
        """
        spec = GENERATION_SPECS[kind]
        text = await self.generate_text(
            spec.render(input),
            model=self._model_for(spec),
            json_output=spec.json_output,
            use_search=spec.use_search,
        )

        if spec.schema is None:
            return text.strip()
        return parse_result(text, spec.schema, what=spec.what)

    async def choose(self, candidates: list[str], purpose: str) -> str:
        """Ask the model to pick one candidate. The answer is returned as-is."""
        text = await self.generate_text(
            render_choose_best(candidates, purpose),
            model=self._config.text_model,
        )
        return text.strip()

    async def generate_text(
        self,
        prompt: str,
        model: str | None = None,
        json_output: bool = False,
        use_search: bool = False,
    ) -> str:
        """Send one prompt and return the concatenated response text.

        Raises:
            BackendCallError: On failure or when the model returns no text.
        """
        model = model or self._config.text_model
        body: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        if json_output:
            body["generationConfig"] = {"responseMimeType": "application/json"}
        if use_search:
            body["tools"] = [{"google_search": {}}]

        url = f"{self._base_url}/models/{model}:generateContent"
        data = await self._request_json("POST", url, "generateContent", prompt, body)

        text = _extract_text(data)
        if not text.strip():
            reason = _refusal_reason(data)
            raise BackendCallError(
                f"The model returned no text{f' ({reason})' if reason else ''}",
                error_type="empty_response",
            )
        return text

    # ------------------------------------------------------------------
    # Long-running video generation
    # ------------------------------------------------------------------

    async def start_long_running_job(self, prompt: str) -> PollableOperation:
        """Start video generation.

        Raises:
            BackendCallError: If the job could not be started.
            ParseError: If the response carries no operation name.
        """
        body = {
            "instances": [{"prompt": prompt}],
            "parameters": {
                "aspectRatio": VIDEO_ASPECT_RATIO,
                "resolution": VIDEO_RESOLUTION,
                "sampleCount": 1,
            },
        }
        url = f"{self._base_url}/models/{self._config.video_model}:predictLongRunning"
        data = await self._request_json("POST", url, "predictLongRunning", prompt, body)
        return operation_from_payload(data)

    async def poll_job(self, operation: PollableOperation) -> PollableOperation:
        """Fetch the current status of ``operation``."""
        url = f"{self._base_url}/{operation.name.lstrip('/')}"
        data = await self._request_json("GET", url, "getOperation", operation.name)
        return operation_from_payload(data)

    async def fetch_artifact(self, locator: str) -> bytes:
        """Download the artifact at ``locator``.

        Raises:
            BackendCallError: On network or HTTP failure.
        """
        headers = self._auth_headers() if self._is_backend_url(locator) else None
        session = await self._get_http_session()
        try:
            async with session.get(locator, headers=headers) as response:
                if response.status != 200:
                    await self._raise_for_status(response)
                return await response.read()
        except aiohttp.ClientError as e:
            raise BackendCallError(f"Network error: {e}", error_type="network_error") from e
        except TimeoutError as e:
            raise BackendCallError(
                f"Request timed out after {self._config.timeout}s", error_type="timeout"
            ) from e

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    @property
    def _base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def _auth_headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self._config.api_key}

    def _is_backend_url(self, url: str) -> bool:
        """True when ``url`` is served by the configured API host."""
        return url.startswith(f"{self._base_url}/")

    def _model_for(self, spec: GenerationSpec) -> str:
        if spec.model_role == "pro":
            return self._config.pro_model
        if spec.model_role == "search":
            return self._config.search_model
        return self._config.text_model

    async def _get_http_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session (lazy initialization)."""
        async with self._session_lock:
            if self._session_holder is None or self._session_holder.closed:
                self._session_holder = aiohttp.ClientSession(
                    headers={"Content-Type": "application/json"},
                    timeout=aiohttp.ClientTimeout(total=self._config.timeout),
                )
            return self._session_holder

    async def _request_json(
        self,
        method: str,
        url: str,
        operation: str,
        context: str,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON body."""
        trace_id = self._tracer.generate_trace_id(operation, context)
        if body is not None:
            self._tracer.save_debug(trace_id, "request.json", body)

        logger.debug("[%s] backend_request: method=%s, url=%s", trace_id, method, url)

        session = await self._get_http_session()
        try:
            async with session.request(
                method, url, json=body, headers=self._auth_headers()
            ) as response:
                if response.status != 200:
                    await self._raise_for_status(response, trace_id)
                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise ParseError(f"Backend returned non-JSON body: {e}") from e
        except aiohttp.ClientError as e:
            self._tracer.save_debug(
                trace_id, "error.json", {"error_type": "network_error", "message": str(e)}
            )
            raise BackendCallError(f"Network error: {e}", error_type="network_error") from e
        except TimeoutError as e:
            self._tracer.save_debug(
                trace_id, "error.json", {"error_type": "timeout", "timeout": self._config.timeout}
            )
            raise BackendCallError(
                f"Request timed out after {self._config.timeout}s", error_type="timeout"
            ) from e

        self._tracer.save_debug(trace_id, "response.json", data)
        if not isinstance(data, dict):
            raise ParseError("Backend returned an unexpected JSON body")
        return data

    async def _raise_for_status(
        self, response: aiohttp.ClientResponse, trace_id: str | None = None
    ) -> None:
        """Raise the matching error for a non-200 response."""
        try:
            error_body = await response.json(content_type=None)
            error = error_body.get("error") if isinstance(error_body, dict) else None
            if isinstance(error, dict):
                message = error.get("message") or str(error_body)
                status_text = error.get("status")
            else:
                message = str(error or error_body)
                status_text = None
        except (ValueError, aiohttp.ContentTypeError):
            message = await response.text()
            status_text = None

        detail = f"API error ({response.status}): {message}"
        if status_text:
            detail = f"{detail} [{status_text}]"

        if trace_id:
            self._tracer.save_debug(
                trace_id, "error.json", {"status_code": response.status, "message": message}
            )

        if response.status in _CREDENTIAL_STATUS_CODES:
            raise CredentialError(detail, status_code=response.status)
        raise BackendCallError(detail, status_code=response.status)

    async def close(self) -> None:
        """Close the HTTP session. It is recreated on the next call."""
        async with self._session_lock:
            if self._session_holder and not self._session_holder.closed:
                await self._session_holder.close()
            self._session_holder = None

    def __repr__(self) -> str:
        return f"GeminiClient(base_url={self._base_url!r})"


def _extract_text(data: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate."""
    candidate = _first_candidate(data)
    if candidate is None:
        return ""
    content = candidate.get("content") or {}
    parts = (content.get("parts") or []) if isinstance(content, dict) else []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def _first_candidate(data: dict[str, Any]) -> dict[str, Any] | None:
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        raise ParseError("Backend returned malformed candidates")
    if not candidates:
        return None
    if not isinstance(candidates[0], dict):
        raise ParseError("Backend returned a malformed candidate")
    return candidates[0]


def _refusal_reason(data: dict[str, Any]) -> str | None:
    feedback = data.get("promptFeedback") or {}
    if isinstance(feedback, dict) and feedback.get("blockReason"):
        return f"blocked: {feedback['blockReason']}"
    candidate = _first_candidate(data)
    if candidate is not None and candidate.get("finishReason") not in (None, "STOP"):
        return f"finish reason: {candidate['finishReason']}"
    return None


def operation_from_payload(data: dict[str, Any]) -> PollableOperation:
    """Build a PollableOperation from a long-running operation resource.

    Raises:
        ParseError: If the payload has no operation name.
    """
    name = data.get("name")
    if not name:
        raise ParseError("Backend did not return an operation name")

    error = data.get("error")
    error_message = error.get("message") if isinstance(error, dict) else None

    locator = None
    response = data.get("response") or {}
    samples = (response.get("generateVideoResponse") or {}).get("generatedSamples") or []
    if samples:
        locator = (samples[0].get("video") or {}).get("uri")

    return PollableOperation(
        name=name,
        done=bool(data.get("done", False)),
        result_locator=locator,
        error=error_message,
    )
