"""Utility functions."""

import re

# Common words per language, used for a cheap sanity check on fetched text.
LANGUAGE_INDICATORS = {
    "en": ["the", "and", "is", "in", "to", "of", "a", "that", "have", "I"],
    "ko": ["은", "는", "이", "가", "을", "를", "에", "의", "로", "와"],
}


def extract_video_id(url_or_id: str) -> str | None:
    """Extract YouTube video ID from URL or return as-is if valid ID."""
    patterns = [
        r"(?:v=|/v/|youtu\.be/)([a-zA-Z0-9_-]{11})",
        r"(?:embed/)([a-zA-Z0-9_-]{11})",
        r"(?:shorts/)([a-zA-Z0-9_-]{11})",
    ]
    for pattern in patterns:
        match = re.search(pattern, url_or_id)
        if match:
            return match.group(1)
    if re.match(r"^[a-zA-Z0-9_-]{11}$", url_or_id):
        return url_or_id
    return None


def format_timestamp(seconds: float) -> str:
    """Format seconds to HH:MM:SS or MM:SS."""
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = int(seconds % 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def verify_transcript_language(
    texts: list[str], language: str, sample_size: int = 5
) -> bool:
    """Check whether the first few lines look like ``language``.

    Substring match on the indicator words, so it only tells "plausible"
    from "clearly something else". Unknown languages never verify.
    """
    sample = " ".join(texts[:sample_size]).lower()
    indicators = LANGUAGE_INDICATORS.get(language, [])
    matches = [word for word in indicators if word.lower() in sample]
    return len(matches) >= 2
