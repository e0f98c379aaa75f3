"""Markdown renderers behind the MCP tools."""

import logging
from typing import Literal

from subtitle_proxy.models import SubtitleSegment
from subtitle_proxy.providers.base import NoCaptionsError
from subtitle_proxy.service import SubtitleService
from subtitle_proxy.utils import extract_video_id, format_timestamp

logger = logging.getLogger(__name__)


def _segments_to_markdown(segments: list[SubtitleSegment]) -> str:
    """Format segments as markdown with timestamps."""
    lines = []
    for seg in segments:
        ts = format_timestamp(seg.start)
        lines.append(f"**[{ts}]** {seg.text}")
    return "\n".join(lines)


async def caption_tracks_report(service: SubtitleService, url: str) -> str:
    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    try:
        tracks = await service.list_tracks(video_id)
    except NoCaptionsError:
        return f"No captions available for {video_id}."
    except Exception as e:
        logger.exception(f"Error fetching caption tracks for {video_id}")
        return f"Error fetching caption tracks for {video_id}: {e}"

    lines = [
        f"- `{t.language_code}` {t.name}" + (" (auto-generated)" if t.is_generated else "")
        for t in tracks
    ]
    return f"## Caption Tracks: {video_id}\n**{len(tracks)} track(s)**\n\n" + "\n".join(lines)


async def subtitles_report(
    service: SubtitleService,
    url: str,
    language: str | None = None,
    format: Literal["text", "segments"] = "text",
) -> str:
    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    try:
        subtitles = await service.fetch_subtitles(video_id, language)
    except NoCaptionsError:
        return f"No subtitles found for {video_id}."
    except Exception as e:
        logger.exception(f"Error fetching subtitles for {video_id}")
        return f"Error fetching subtitles for {video_id}: {e}"

    header = f"## Subtitles: {video_id}\n**Language:** {subtitles.language}\n"
    if format == "segments":
        body = _segments_to_markdown(subtitles.segments)
    else:
        body = subtitles.text
    return f"{header}\n{body}"
