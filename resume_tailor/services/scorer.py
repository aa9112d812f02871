"""
Local, deterministic ATS compatibility scoring.

Keywords are pulled from both texts with the same extraction rules and the
score is the share of job-description keywords that also occur in the resume.
Nothing here touches the network; the same inputs always give the same report.
"""
import re
from typing import FrozenSet, Sequence, Tuple

from resume_tailor.models.report import MatchReport

# Alphanumeric runs; a trailing "++" or "#" stays on the token (c++, f#).
# Anything else splits, so "node.js" -> "node", "js" and "REST API" -> "rest", "api".
TOKEN_PATTERN = re.compile(r"[a-z0-9]+(?:\+\+|#)?")

MIN_TOKEN_LENGTH = 3
MAX_DISPLAYED_MISSING = 10
MAX_LISTED_KEYWORDS = 8

STOP_WORDS: FrozenSet[str] = frozenset({
    # articles, conjunctions, prepositions
    "the", "and", "for", "with", "from", "into", "about", "over", "than", "then",
    "but", "nor", "yet", "via", "per", "any", "all", "each", "both", "also",
    "such", "more", "most", "other", "some", "very", "just", "only", "well",
    # pronouns and determiners
    "you", "your", "yours", "our", "ours", "out", "they", "them", "their", "this",
    "that", "these", "those", "who", "whom", "which", "what", "its", "his", "her",
    # auxiliary and modal verbs
    "are", "was", "were", "been", "being", "have", "has", "had", "does", "did",
    "will", "would", "can", "could", "should", "may", "might", "must", "shall",
    # resume and job-posting filler
    "experience", "experiences", "team", "teams", "role", "roles", "company",
    "year", "years", "work", "working", "job", "position", "including", "etc",
})

STRENGTHS_SENTINEL = "No key skills detected"
IMPROVEMENTS_SENTINEL = "Great keyword coverage! No major gaps found."

# (lower bound, summary, recommendations); checked highest first.
SCORE_TIERS: Tuple[Tuple[int, str, Tuple[str, ...]], ...] = (
    (
        80,
        "Excellent match! Your resume strongly aligns with the job requirements.",
        (
            "Make minor optimizations to wording so it mirrors the job description exactly.",
            "Quantify the impact of your achievements further with concrete metrics.",
        ),
    ),
    (
        60,
        "Good match with room for improvement. Focus on incorporating missing keywords.",
        (
            "Fine-tune your resume by working the missing keywords into your bullet points.",
            "Align your experience section more closely with the listed requirements.",
            "Add measurable results to your most relevant accomplishments.",
        ),
    ),
    (
        30,
        "Fair match. Consider significant updates to better align with the job description.",
        (
            "Add specific keywords and skills from the job description to your resume.",
            "Quantify your achievements with numbers, percentages and outcomes.",
            "Emphasize the projects and responsibilities most relevant to this role.",
        ),
    ),
    (
        0,
        "Low match. Your resume needs substantial revision to meet the job requirements.",
        (
            "Restructure your resume around the core requirements of this job.",
            "Highlight your technical skills in a dedicated, easy-to-scan skills section.",
            "Adopt the terminology used in the job description throughout your resume.",
        ),
    ),
)


def extract_keywords(text: str) -> Tuple[str, ...]:
    """Ordered, de-duplicated keywords of ``text``."""
    seen = set()
    keywords = []
    for token in TOKEN_PATTERN.findall((text or "").lower()):
        if token.rstrip("+#").isdigit():
            continue
        if len(token) < MIN_TOKEN_LENGTH or token in STOP_WORDS:
            continue
        if token not in seen:
            seen.add(token)
            keywords.append(token)
    return tuple(keywords)


def compute_score(matched_count: int, total_count: int) -> int:
    """Percentage rounded half-up, 0 when there is nothing to match."""
    if total_count <= 0:
        return 0
    return (200 * matched_count + total_count) // (2 * total_count)


def select_tier(score: int) -> Tuple[str, Tuple[str, ...]]:
    for lower_bound, summary, recommendations in SCORE_TIERS:
        if score >= lower_bound:
            return summary, recommendations
    return SCORE_TIERS[-1][1], SCORE_TIERS[-1][2]


def describe_strengths(matched: Sequence[str]) -> Tuple[str, ...]:
    if not matched:
        return (STRENGTHS_SENTINEL,)
    return tuple(
        f'Your resume mentions "{keyword}", which the job description asks for'
        for keyword in matched[:MAX_LISTED_KEYWORDS]
    )


def describe_improvements(missing: Sequence[str]) -> Tuple[str, ...]:
    if not missing:
        return (IMPROVEMENTS_SENTINEL,)
    return tuple(
        f'Consider adding "{keyword}" if it reflects your experience'
        for keyword in missing[:MAX_LISTED_KEYWORDS]
    )


def score_match(resume_text: str, job_description_text: str) -> MatchReport:
    job_keywords = extract_keywords(job_description_text)
    resume_keywords = frozenset(extract_keywords(resume_text))

    matched = tuple(k for k in job_keywords if k in resume_keywords)
    missing = tuple(k for k in job_keywords if k not in resume_keywords)

    score = compute_score(len(matched), len(job_keywords))
    summary, recommendations = select_tier(score)

    return MatchReport(
        score=score,
        matched_keywords=matched,
        missing_keywords=missing[:MAX_DISPLAYED_MISSING],
        all_missing_keywords=missing,
        strengths=describe_strengths(matched),
        improvements=describe_improvements(missing),
        recommendations=recommendations,
        summary=summary,
    )
