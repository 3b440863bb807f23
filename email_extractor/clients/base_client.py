"""
email_extractor/clients/base_client.py
Abstract base class for LLM-backed email extraction clients
"""
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type
from pydantic import BaseModel, ValidationError

from ..errors import ExternalServiceError
from ..schema import EmailExtractionOutput

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

UNKNOWN_SERVICE_ERROR = "An unknown error occurred while contacting the AI service."

EXTRACTION_PROMPT = """
You are a specialized AI that simulates a web crawler and email address extractor.
Your task is to analyze the likely public-facing content of the ENTIRE website accessible from the provided URL, as if you were performing a deep crawl (depth = -1), following links to all other pages within the same domain (like "Contact", "About", "Team" pages).

From this analysis, identify and extract any email addresses that would likely be present across the analyzed scope.

URL to analyze: "{url}"

Rules:
1. Only return valid email address formats.
2. Do not invent email addresses. If none are likely to be found, return an empty list.
3. If the URL appears invalid, non-existent, or is a common placeholder (e.g., example.com, yoursite.com), return an empty list.
4. Your final output MUST be a JSON object conforming to the specified schema.

Example for a successful extraction: {{"emails": ["contact@company.com", "support@company.com"]}}
Example for no emails found: {{"emails": []}}
"""


class _RawEmailPayload(BaseModel):
    """Loose shape check applied before filtering: an object with an `emails` array"""
    emails: List[Any]


def _clean_json_response(raw_response: str) -> str:
    """
    Strip a markdown code fence wrapping the whole response
    Anything else is left for json.loads to accept or reject
    """
    text = raw_response.strip()

    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1).strip()

    return text


def parse_extraction_response(raw_response: Optional[str]) -> EmailExtractionOutput:
    """
    Validate a raw model response into a typed result.

    Empty text means "no emails found". Unparseable text raises
    json.JSONDecodeError; parseable JSON without an `emails` array raises
    pydantic.ValidationError. Entries that are not strings containing '@'
    are dropped.
    """
    if raw_response is None or not raw_response.strip():
        logger.warning("Model returned an empty response")
        return EmailExtractionOutput(emails=[])

    data = json.loads(_clean_json_response(raw_response))
    payload = _RawEmailPayload.model_validate(data)

    emails = [e for e in payload.emails if isinstance(e, str) and "@" in e]
    dropped = len(payload.emails) - len(emails)
    if dropped:
        logger.debug(f"Dropped {dropped} malformed entries from model output")

    return EmailExtractionOutput(emails=emails)


class BaseLLMClient(ABC):
    """
    Base class for extraction clients.

    Subclasses only implement the transport (`_call_llm`); prompt building,
    response validation and error wrapping live here. There is no retry,
    caching or rate limiting: one call to `extract_emails` makes exactly one
    request.
    """

    service_name = "AI"

    @abstractmethod
    async def _call_llm(
        self,
        prompt: str,
        response_model: Type[BaseModel]
    ) -> Optional[str]:
        """
        Must be implemented by subclasses
        Should return the raw JSON string (or None for an empty reply)
        """
        pass

    def build_prompt(self, url: str) -> str:
        return EXTRACTION_PROMPT.format(url=url)

    async def extract_emails(self, url: str) -> List[str]:
        """
        Ask the model for the email addresses likely present on `url`.

        Raises ExternalServiceError when the request fails or the reply is
        not JSON. A reply that is JSON but has the wrong shape is logged and
        treated as zero results.
        """
        if not url:
            return []

        try:
            raw_response = await self._call_llm(self.build_prompt(url), EmailExtractionOutput)
            result = parse_extraction_response(raw_response)

        except ValidationError as e:
            logger.error(f"Invalid JSON structure received for {url}: {e}")
            return []

        except ExternalServiceError:
            raise

        except Exception as e:
            logger.error(f"Error extracting emails for {url}: {e}")
            if str(e):
                raise ExternalServiceError(
                    f"Failed to extract emails. {self.service_name} API error: {e}"
                ) from e
            raise ExternalServiceError(UNKNOWN_SERVICE_ERROR) from e

        logger.debug(f"✓ {url}: {len(result.emails)} email(s)")
        return result.emails
