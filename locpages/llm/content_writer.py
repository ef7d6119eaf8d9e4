"""Content writer: turns an update plus business context into page copy.

One call writes one intent variant of a page. The LLM is asked for a JSON
object with a title, description, URL slug hint, highlights and FAQs.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from locpages.domain.errors import ContentWriterError
from locpages.domain.models.website_info import FAQEntry
from locpages.llm.client import LLMClient
from locpages.settings import settings

logger = logging.getLogger(__name__)

# Intent tag -> the kind of search the page is framed for
INTENT_FRAMINGS: dict[str, str] = {
    "direct": (
        "people searching for the business by name. Lead with the business name "
        "and the update itself."
    ),
    "local": (
        '"near me" searches from people close by. Lead with the neighborhood and '
        "city, and make the location obvious."
    ),
    "category": (
        "people searching for this category of business in the city. Lead with the "
        "category and the city rather than the brand."
    ),
    "branded-local": (
        "searches combining the business name with the city. Pair the brand with the "
        "city in the title."
    ),
    "service-urgent": (
        'urgent, "open now" searches from people who need this today. Emphasize '
        "availability, hours and how to get it right away."
    ),
    "competitive": (
        '"best X in city" comparison searches. Emphasize what sets the business apart '
        "from others in the area."
    ),
}

INTENT_TYPES: tuple[str, ...] = tuple(INTENT_FRAMINGS)

CONTENT_PROMPT = """You write short public web pages for a local business update.
The page is optimized for AI search assistants and search engines targeting {framing}

BUSINESS:
{business}

UPDATE:
{update_text}
{expiry}
Return ONLY a JSON object with these fields:
{{
  "title": "page title, under 70 characters",
  "description": "1-2 sentence summary that directly answers what is on offer, under 160 characters",
  "slug": "short lowercase url slug, 2-5 words joined by hyphens",
  "highlights": ["3-5 short bullet points"],
  "faqs": [{{"question": "...", "answer": "..."}}]
}}

Rules:
- Only use facts from the business and update above; never invent prices, dates or contact details
- Write 2-4 FAQs that people would actually ask about this update
- No markdown, no text outside the JSON object
"""


class ContentRequest(BaseModel):
    """Input to one content-writer call."""

    update_text: str
    business: dict[str, Any] = {}
    intent: str | None = None
    expires_at: datetime | None = None


class ContentDraft(BaseModel):
    """Copy written for one page variant."""

    title: str = Field(min_length=1)
    description: str = ""
    slug: str | None = None
    page_type: str = "update"
    highlights: list[str] = []
    faqs: list[FAQEntry] = []

    @field_validator("highlights", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(item).strip() for item in value if item and str(item).strip()]

    @field_validator("faqs", mode="before")
    @classmethod
    def _complete_faqs(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [
            faq for faq in value
            if isinstance(faq, FAQEntry) or (isinstance(faq, dict) and faq.get("question") and faq.get("answer"))
        ]


class ContentWriter(ABC):
    """Writes page copy for one update and intent."""

    @abstractmethod
    async def write(self, request: ContentRequest) -> ContentDraft:
        """Write copy for a page variant.

        Raises:
            ContentWriterError: If the copy could not be produced
        """


def _describe_business(business: dict[str, Any]) -> str:
    lines = []
    for key, label in (
        ("name", "Name"),
        ("category", "Category"),
        ("location", "Location"),
        ("description", "About"),
        ("phone", "Phone"),
        ("website", "Website"),
        ("hours", "Hours"),
    ):
        if business.get(key):
            lines.append(f"- {label}: {business[key]}")
    for key, label in (("services", "Services"), ("specialties", "Specialties")):
        if business.get(key):
            lines.append(f"- {label}: {', '.join(business[key])}")
    return "\n".join(lines) if lines else "- (no details provided)"


def build_content_prompt(request: ContentRequest) -> str:
    """Build the intent-specific prompt for a content request."""
    framing = INTENT_FRAMINGS.get(request.intent or "direct", INTENT_FRAMINGS["direct"])
    expiry = f"Valid until: {request.expires_at.isoformat()}\n" if request.expires_at else ""
    return CONTENT_PROMPT.format(
        framing=framing,
        business=_describe_business(request.business),
        update_text=request.update_text.strip(),
        expiry=expiry,
    )


def parse_content_response(response_text: str) -> ContentDraft:
    """Extract and validate the JSON object in an LLM response."""
    text = response_text.strip()

    # Remove markdown code blocks if present
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\s*", "", text)
        text = re.sub(r"\s*```$", "", text)

    json_match = re.search(r"\{.*\}", text, re.DOTALL)
    if not json_match:
        raise ContentWriterError("Content writer returned no JSON object")

    try:
        data = json.loads(json_match.group())
    except json.JSONDecodeError as e:
        raise ContentWriterError(f"Content writer returned invalid JSON: {e}") from e

    try:
        return ContentDraft.model_validate(data)
    except ValidationError as e:
        raise ContentWriterError(f"Content writer returned incomplete content: {e.error_count()} invalid fields") from e


class LLMContentWriter(ContentWriter):
    """Content writer backed by an LLM client."""

    def __init__(self, llm_client: LLMClient) -> None:
        self.llm_client = llm_client

    async def write(self, request: ContentRequest) -> ContentDraft:
        prompt = build_content_prompt(request)
        try:
            response = await self.llm_client.generate(
                prompt,
                {
                    "temperature": settings.content_writer_temperature,
                    "max_tokens": settings.content_writer_max_tokens,
                    "json": True,
                },
            )
        except Exception as e:
            logger.error(f"Content writer LLM call failed for intent {request.intent}: {e}")
            raise ContentWriterError(f"Content generation failed: {e}") from e

        draft = parse_content_response(response)
        logger.info(
            f"Wrote {request.intent or 'default'} content: {draft.title[:50]}",
            extra={"intent": request.intent, "faq_count": len(draft.faqs)},
        )
        return draft
