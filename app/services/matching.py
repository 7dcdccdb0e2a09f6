"""
Similarity matching for the AI response cache.

Finds a previously generated answer whose prompt is close enough to a new
prompt of the same category that it can be reused instead of calling the
text generator again.

Flow:
  1. Fetch every cached response of the category from the store
  2. Normalize both prompts (alias tables per category)
  3. Score with edit-distance similarity plus a per-category booster
  4. Keep the first best candidate scoring at least SIMILARITY_THRESHOLD
"""

import logging
import math
import re
from typing import Callable, Iterable

from rapidfuzz.distance import Levenshtein

from app.schemas.ai import Category, MatchResult, StoredResponse
from app.services.ai_response_db import fetch_by_category

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.75

# ── Alias tables ────────────────────────────────────────────────────────────

EDUCATION_ALIASES: dict[str, str] = {
    # Bachelor degrees
    "bca": "bachelor of computer applications",
    "b.ca": "bachelor of computer applications",
    "bachelor in computer applications": "bachelor of computer applications",
    "bachelor of computer applications": "bachelor of computer applications",
    "btech": "bachelor of technology",
    "b.tech": "bachelor of technology",
    "bachelor of technology": "bachelor of technology",
    "be": "bachelor of engineering",
    "b.e": "bachelor of engineering",
    "bachelor of engineering": "bachelor of engineering",
    "bsc": "bachelor of science",
    "b.sc": "bachelor of science",
    "bachelor of science": "bachelor of science",
    "ba": "bachelor of arts",
    "b.a": "bachelor of arts",
    "bachelor of arts": "bachelor of arts",
    "bcom": "bachelor of commerce",
    "b.com": "bachelor of commerce",
    "bachelor of commerce": "bachelor of commerce",
    # Master degrees
    "mca": "master of computer applications",
    "m.ca": "master of computer applications",
    "master in computer applications": "master of computer applications",
    "master of computer applications": "master of computer applications",
    "mtech": "master of technology",
    "m.tech": "master of technology",
    "master of technology": "master of technology",
    "me": "master of engineering",
    "m.e": "master of engineering",
    "master of engineering": "master of engineering",
    "msc": "master of science",
    "m.sc": "master of science",
    "master of science": "master of science",
    "ma": "master of arts",
    "m.a": "master of arts",
    "master of arts": "master of arts",
    "mba": "master of business administration",
    "m.b.a": "master of business administration",
    "master of business administration": "master of business administration",
    # Doctorate
    "phd": "doctor of philosophy",
    "ph.d": "doctor of philosophy",
    "doctorate": "doctor of philosophy",
    "doctor of philosophy": "doctor of philosophy",
    # Diplomas
    "diploma": "diploma",
    "polytechnic": "diploma",
    # School
    "12th": "higher secondary",
    "class 12": "higher secondary",
    "intermediate": "higher secondary",
    "higher secondary": "higher secondary",
    "10th": "secondary",
    "class 10": "secondary",
    "matriculation": "secondary",
    "secondary": "secondary",
}

# Substring replacements, applied in order
JOB_TITLE_ALIASES: dict[str, str] = {
    "frontend developer": "frontend developer",
    "front-end developer": "frontend developer",
    "front end developer": "frontend developer",
    "backend developer": "backend developer",
    "back-end developer": "backend developer",
    "back end developer": "backend developer",
    "fullstack developer": "fullstack developer",
    "full-stack developer": "fullstack developer",
    "full stack developer": "fullstack developer",
    "software engineer": "software engineer",
    "software developer": "software developer",
    "web developer": "web developer",
    "mobile developer": "mobile developer",
    "devops engineer": "devops engineer",
    "data scientist": "data scientist",
    "ui/ux designer": "ui ux designer",
    "product manager": "product manager",
}

EDUCATION_KEYWORDS = (
    "bachelor",
    "master",
    "phd",
    "diploma",
    "computer",
    "science",
    "engineering",
    "technology",
    "applications",
)

EXPERIENCE_KEYWORDS = (
    "developer",
    "engineer",
    "manager",
    "senior",
    "junior",
    "lead",
    "years",
    "experience",
)

_SKILL_SEPARATORS = re.compile(r"[\s,;]+")


# ── String distance ─────────────────────────────────────────────────────────


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in [0, 1] derived from edit distance."""
    a, b = a.lower(), b.lower()
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - levenshtein_distance(a, b)) / max_len


# ── Normalization ───────────────────────────────────────────────────────────


def _normalize_education(text: str) -> str:
    normalized = text.lower().strip()
    return EDUCATION_ALIASES.get(normalized, normalized)


def _normalize_experience(text: str, role: str | None = None) -> str:
    normalized = text.lower().strip()
    if role:
        normalized = f"{role.lower()} {normalized}"

    for variant, canonical in JOB_TITLE_ALIASES.items():
        if variant in normalized:
            normalized = normalized.replace(variant, canonical, 1)
    return normalized


def _normalize_skills(text: str) -> str:
    normalized = re.sub(r"[,;]", " ", text.lower().strip())
    return re.sub(r"\s+", " ", normalized)


def normalize(text: str, category: str, role: str | None = None) -> str:
    """
    Canonical form of ``text`` for comparison within ``category``.

    ``role`` only affects Experience, where it is prefixed to the text.
    Categories without an alias table are lowercased and trimmed.
    """
    if category == Category.EDUCATION:
        return _normalize_education(text)
    if category == Category.EXPERIENCE:
        return _normalize_experience(text, role)
    if category == Category.SKILLS:
        return _normalize_skills(text)
    return text.lower().strip()


# ── Category boosters ───────────────────────────────────────────────────────


def degree_level(normalized: str) -> str:
    """Coarse degree level of a normalized education string."""
    if "bachelor" in normalized or "diploma" in normalized:
        return "undergraduate"
    if "master" in normalized:
        return "postgraduate"
    if "doctor" in normalized or "phd" in normalized:
        return "doctorate"
    if "secondary" in normalized:
        return "secondary"
    return "unknown"


def _boost_education(score: float, first: str, second: str) -> float:
    level1, level2 = degree_level(first), degree_level(second)
    if level1 != level2 and "unknown" not in (level1, level2):
        score *= 0.3

    common = total = 0
    for keyword in EDUCATION_KEYWORDS:
        in_first, in_second = keyword in first, keyword in second
        if in_first or in_second:
            total += 1
            if in_first and in_second:
                common += 1

    if total:
        overlap = common / total
        if overlap > 0.5:
            score += overlap * 0.2
    return score


def _boost_experience(score: float, first: str, second: str) -> float:
    common = sum(1 for kw in EXPERIENCE_KEYWORDS if kw in first and kw in second)
    return score + (common / len(EXPERIENCE_KEYWORDS)) * 0.15


def _skill_tokens(text: str) -> list[str]:
    return [token for token in _SKILL_SEPARATORS.split(text) if len(token) > 2]


def _boost_skills(score: float, first: str, second: str) -> float:
    skills1, skills2 = _skill_tokens(first), _skill_tokens(second)
    if not skills1 or not skills2:
        return score

    # Counts pairs, so duplicate tokens can push the ratio past 1 (clamped later)
    matching = sum(
        1 for s1 in skills1 for s2 in skills2 if similarity(s1, s2) > 0.8
    )
    return max(score, matching / max(len(skills1), len(skills2)))


# Keyed by value; Category members hash by name
BOOSTERS: dict[str, Callable[[float, str, str], float]] = {
    Category.EDUCATION.value: _boost_education,
    Category.EXPERIENCE.value: _boost_experience,
    Category.SKILLS.value: _boost_skills,
}


def typed_similarity(
    prompt1: str,
    prompt2: str,
    category: str,
    role1: str | None = None,
    role2: str | None = None,
) -> float:
    """Category-aware similarity of two prompts, clamped to at most 1.0."""
    normalized1 = normalize(prompt1, category, role1)
    normalized2 = normalize(prompt2, category, role2)

    if normalized1 == normalized2:
        return 1.0

    score = similarity(normalized1, normalized2)
    booster = BOOSTERS.get(getattr(category, "value", category))
    if booster is not None:
        score = booster(score, normalized1, normalized2)
    return min(score, 1.0)


# ── Ranking ─────────────────────────────────────────────────────────────────


def best_match(
    prompt: str,
    category: str,
    candidates: Iterable[StoredResponse],
    role: str | None = None,
) -> MatchResult | None:
    """
    Highest-scoring candidate at or above SIMILARITY_THRESHOLD.

    Ties keep the earliest candidate. Candidates of another category are skipped.
    """
    winner: StoredResponse | None = None
    best_score = 0.0

    for candidate in candidates:
        if candidate.category != category:
            continue
        score = typed_similarity(prompt, candidate.prompt, category, role, candidate.role)
        if score > best_score and score >= SIMILARITY_THRESHOLD:
            winner, best_score = candidate, score

    if winner is None:
        return None
    return MatchResult(response=winner, similarity_percent=math.floor(best_score * 100 + 0.5))


def find_similar_response(
    prompt: str,
    category: str,
    role: str | None = None,
    *,
    fetch: Callable[[str], list[StoredResponse]] | None = None,
) -> MatchResult | None:
    """
    Look up a reusable cached response for ``prompt``.

    Returns None when nothing clears the threshold, and also when the store
    cannot be read, so callers can always fall back to fresh generation.
    """
    fetch = fetch or fetch_by_category
    try:
        candidates = fetch(category)
    except Exception:
        logger.exception(
            "Cached response lookup failed  category=%s",
            getattr(category, "value", category),
        )
        return None

    match = best_match(prompt, category, candidates, role)
    logger.info(
        "Similarity lookup  category=%s  candidates=%d  hit=%s  similarity=%s",
        getattr(category, "value", category),
        len(candidates),
        match is not None,
        match.similarity_percent if match else None,
    )
    return match
