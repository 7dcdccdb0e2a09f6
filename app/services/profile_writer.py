"""
Profile writing service – "write with AI" for profile sections.

Flow:
  1. Look for a cached answer to a similar prompt of the same category
  2. On a hit, return the cached answer
  3. Otherwise generate text with Claude (Bedrock) and cache it
"""

import logging

from app.schemas.ai import Category, WriteResult
from app.services import ai_response_db, bedrock, matching

logger = logging.getLogger(__name__)

WRITER_SYSTEM = (
    "You write short, professional text for a job seeker's profile. "
    "Answer with the text only, without headings, options or commentary."
)

_TEMPLATES: dict[str, str] = {
    Category.ADDRESS.value: (
        "Write a professional address description or cover note for: {prompt}. "
        "Keep it concise and professional."
    ),
    Category.EDUCATION.value: (
        "Write a professional education description for: {prompt}. "
        "Include relevant achievements and skills gained. "
        "Do not give options, write a single paragraph of 1 to 3 lines."
    ),
    Category.EXPERIENCE.value: (
        "Write a professional work experience description{role_clause} "
        "with focus on: {prompt}. "
        "Highlight responsibilities, achievements, and skills used."
    ),
    Category.PORTFOLIO.value: (
        "Write an engaging portfolio project description for: {prompt}. "
        "Highlight key features, technologies used, and impact."
    ),
    Category.AWARDS.value: (
        "Write a professional award or honor description for: {prompt}. "
        "Include the significance and achievement details."
    ),
    Category.SKILLS.value: (
        "Write a professional skills description or summary for: {prompt}. "
        "Focus on proficiency levels and practical applications."
    ),
}

_DEFAULT_TEMPLATE = "Write a professional description for: {prompt}"


class GenerationError(Exception):
    """The text generator returned no usable text."""


def build_generation_prompt(
    prompt: str, category: Category | str, role: str | None = None
) -> str:
    """Category-specific instruction sent to the text generator."""
    template = _TEMPLATES.get(getattr(category, "value", category), _DEFAULT_TEMPLATE)
    role_clause = f' for the role "{role.strip()}"' if role and role.strip() else ""
    return template.format(prompt=prompt.strip(), role_clause=role_clause)


def write_with_ai(
    prompt: str, category: Category | str, role: str | None = None
) -> WriteResult:
    """
    Return profile text for ``prompt``, reusing a cached answer when a
    similar prompt of the same category was answered before.
    """
    category_value = getattr(category, "value", category)
    if category_value != Category.EXPERIENCE.value:
        role = None

    match = matching.find_similar_response(prompt, category, role)
    if match is not None:
        logger.info(
            "Serving cached answer  id=%s  category=%s  similarity=%d",
            match.response.id,
            category_value,
            match.similarity_percent,
        )
        return WriteResult(
            answer=match.response.answer,
            cached=True,
            similarity=match.similarity_percent,
            response_id=match.response.id,
        )

    answer = bedrock.quick_ask(
        build_generation_prompt(prompt, category, role),
        system=WRITER_SYSTEM,
    ).strip()
    if not answer:
        raise GenerationError("Failed to generate AI response")

    response_id = ai_response_db.insert_response(category, prompt, answer, role)
    logger.info(
        "Generated %s content  id=%d  prompt=%r", category_value, response_id, prompt[:50]
    )
    return WriteResult(answer=answer, cached=False, response_id=response_id)
