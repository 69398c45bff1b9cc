"""Parsing utilities for JSearch (RapidAPI) job payloads."""

from typing import Optional

MAX_HIGHLIGHT_SKILLS = 5
_SKILL_WORDS = 4


def publisher_to_source(publisher: Optional[str]) -> str:
    """Map a JSearch publisher name to a record source tag (indeed is the catch-all)."""
    pub = (publisher or "").lower()
    if "linkedin" in pub:
        return "linkedin"
    return "indeed"


def skills_from_job(job: dict) -> list[str]:
    """
    Required skills when present; otherwise the first words of up to
    five qualification highlights.
    """
    required = job.get("job_required_skills")
    if required:
        return [str(s) for s in required]

    qualifications = (job.get("job_highlights") or {}).get("Qualifications") or []
    skills: list[str] = []
    for qual in qualifications[:MAX_HIGHLIGHT_SKILLS]:
        words = " ".join(str(qual).split()[:_SKILL_WORDS])
        if 3 < len(words) < 50:
            skills.append(words)
    return skills


def format_location(job: dict) -> str:
    """Remote, or city/state/country joined."""
    if job.get("job_is_remote"):
        return "Remote"
    parts = [job.get("job_city"), job.get("job_state"), job.get("job_country")]
    return ", ".join(p for p in parts if p) or "Unknown"


def budget_type_for_period(period: Optional[str]) -> str:
    return "hourly" if (period or "").upper() == "HOUR" else "fixed"
