"""Outreach pitch text. Uses the OpenAI API when configured, else a local template."""

import logging
import os
from typing import Optional

from openai import AsyncOpenAI

from bounty_feed.models.business import BusinessLead

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
_MAX_TOKENS = 200
_TEMPERATURE = 0.7


def _humanize(tag: str) -> str:
    return tag.replace("_", " ")


def template_pitch(lead: BusinessLead, service_query: str) -> str:
    """Deterministic pitch built from the lead's strongest evidence."""
    business = lead.business
    reasons: list[str] = []
    if lead.pain_points:
        top = lead.pain_points[0]
        noun = "reviews mention" if top.count > 1 else "review mentions"
        reasons.append(f"{top.count} {noun} {_humanize(top.category)}")
    if lead.missing_features:
        names = ", ".join(_humanize(m.feature) for m in lead.missing_features[:2])
        reasons.append(f"their website appears to lack {names}")
    if not reasons:
        reasons.append("their online presence has room to grow")
    service = lead.suggested_services[0].service.name if lead.suggested_services else service_query
    return (
        f"{business.name} ({business.category}) is a good fit for {service_query}: "
        f"{'; '.join(reasons)}. Lead with {service} and show the impact on bookings and enquiries."
    )


def build_prompt(lead: BusinessLead, service_query: str) -> str:
    """Build pitch prompt."""
    business = lead.business
    description = lead.suggested_services[0].pitch_summary if lead.suggested_services else ""
    examples = [e for p in lead.pain_points for e in p.example_phrases][:3]
    reviews = "; ".join(examples)
    lines = [
        "You are a business consultant helping freelancers identify opportunities.",
        "",
        f'A freelancer is searching for "{service_query}" services they can offer.',
        "",
        "Here's a potential client:",
        f"- Business Name: {business.name}",
        f"- Business Type: {business.category or 'Unknown'}",
    ]
    if description:
        lines.append(f"- Description: {description}")
    if reviews:
        lines.append(f"- Customer Reviews Summary: {reviews}")
    lines += [
        "",
        f"Write a 2-3 sentence pitch explaining SPECIFICALLY how this business could benefit from "
        f"{service_query} services. Be concrete and actionable: mention specific things they could "
        "implement and the expected business impact. Don't be generic.",
        "",
        "Keep it concise and compelling. This is an outreach opportunity for the freelancer.",
    ]
    return "\n".join(lines)


class PitchWriter:
    """
    Best-effort pitch generation. Never raises: a missing key, API error or
    empty completion all fall back to template_pitch.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Optional[AsyncOpenAI] = None,
    ):
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self._model = model
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None or bool(self._api_key)

    def _openai(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def write(self, lead: BusinessLead, service_query: str) -> str:
        if not self.enabled:
            return template_pitch(lead, service_query)
        try:
            response = await self._openai().chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": build_prompt(lead, service_query)}],
                max_tokens=_MAX_TOKENS,
                temperature=_TEMPERATURE,
            )
            text = (response.choices[0].message.content or "").strip()
        except Exception as e:
            logger.warning("Pitch generation failed for %s: %s", lead.business.name, e)
            return template_pitch(lead, service_query)
        return text or template_pitch(lead, service_query)
