"""Backend - adapter for the hosted generative-AI service.

    protocols   GenerationBackend / VideoBackend contracts and GenerationKind
    gemini      GeminiClient (aiohttp, Gemini REST API)
    models      pydantic models for structured responses
    parsing     JSON-ish text -> typed result, ParseError on mismatch
    prompts     prompt templates per GenerationKind
"""

from creator_studio.backend.gemini import GeminiClient
from creator_studio.backend.models import (
    DescriptionGenerationResponse,
    ScriptGenerationResponse,
    ShortsGenerationResponse,
    TitleGenerationResponse,
)
from creator_studio.backend.parsing import parse_json_from_text, parse_result
from creator_studio.backend.protocols import GenerationBackend, GenerationKind, VideoBackend

__all__ = [
    "GeminiClient",
    "GenerationBackend",
    "GenerationKind",
    "VideoBackend",
    "TitleGenerationResponse",
    "DescriptionGenerationResponse",
    "ScriptGenerationResponse",
    "ShortsGenerationResponse",
    "parse_json_from_text",
    "parse_result",
]
