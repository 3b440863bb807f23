"""
email_extractor/clients/gemini_client.py
Gemini client using OpenAI SDK for structured outputs
"""
from openai import AsyncOpenAI
from typing import Optional, Type
import logging

from pydantic import BaseModel

from .base_client import BaseLLMClient
from ..config import GEMINI_OPENAI_BASE_URL, GeminiConfig
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a precise data extraction assistant. Always respond with valid JSON "
    "matching the required schema. Never include explanations outside the JSON structure."
)


class GeminiClient(BaseLLMClient):
    """
    Gemini client using OpenAI SDK for structured outputs.
    Uses Google's OpenAI-compatible API endpoint.
    """

    service_name = "Gemini"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        temperature: float = 0.1,
        base_url: str = GEMINI_OPENAI_BASE_URL,
        client: Optional[AsyncOpenAI] = None
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "The GEMINI_API_KEY environment variable is not set. "
                "Please configure it to use the application."
            )

        # Initialize OpenAI client with Google AI endpoint
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=base_url)

        self.model_name = model_name
        self.temperature = temperature

        logger.info(f"✓ GeminiClient initialized with OpenAI SDK")
        logger.info(f"  - Model: {model_name}")
        logger.info(f"  - Temperature: {temperature}")

    @classmethod
    def from_config(cls, config: GeminiConfig) -> "GeminiClient":
        return cls(
            api_key=config.api_key,
            model_name=config.model_name,
            temperature=config.temperature,
            base_url=config.base_url
        )

    async def _call_llm(
        self,
        prompt: str,
        response_model: Type[BaseModel]
    ) -> Optional[str]:
        """
        Send one chat completion constrained to the response model's JSON schema.
        Transport and API errors propagate to the caller.
        """
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt}
        ]

        response = await self.client.chat.completions.create(
            model=self.model_name,
            messages=messages,
            temperature=self.temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": response_model.__name__,
                    "schema": response_model.model_json_schema(),
                    "strict": True
                }
            }
        )

        if not response or not response.choices:
            logger.warning("Empty response from Gemini")
            return None

        raw_json = response.choices[0].message.content
        if raw_json:
            logger.debug(f"Raw response: {raw_json[:200]}...")

        return raw_json
