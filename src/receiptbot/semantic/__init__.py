"""Semantic understanding module using LLM inference."""

from .inference import BedrockClient
from .prompt import build_request
from .sanitizer import deduplicate, sanitize

__all__ = ["BedrockClient", "build_request", "deduplicate", "sanitize"]
