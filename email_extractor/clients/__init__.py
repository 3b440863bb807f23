from .base_client import BaseLLMClient, parse_extraction_response
from .gemini_client import GeminiClient

__all__ = ["BaseLLMClient", "GeminiClient", "parse_extraction_response"]
