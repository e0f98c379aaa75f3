"""Provider using youtube-transcript-api directly."""

import asyncio
import logging
from functools import partial

from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled, YouTubeTranscriptApi

from subtitle_proxy.models import CaptionTrack, SubtitleSegment, Subtitles
from .base import NoCaptionsError, TranscriptProvider

logger = logging.getLogger(__name__)


class YouTubeTranscriptProvider(TranscriptProvider):
    def __init__(self):
        self._api = YouTubeTranscriptApi()

    async def list_tracks(self, video_id: str) -> list[CaptionTrack]:
        loop = asyncio.get_event_loop()
        try:
            transcripts = await loop.run_in_executor(
                None, partial(self._list, video_id)
            )
        except (TranscriptsDisabled, NoTranscriptFound) as e:
            raise NoCaptionsError(f"No captions available for {video_id}: {e}") from e

        if not transcripts:
            raise NoCaptionsError(f"No captions available for {video_id}")

        return [
            CaptionTrack(
                language_code=t.language_code,
                name=t.language or t.language_code,
                base_url=video_id,
                is_generated=t.is_generated,
            )
            for t in transcripts
        ]

    async def fetch_subtitles(
        self, video_id: str, language: str | None = None
    ) -> Subtitles:
        loop = asyncio.get_event_loop()
        try:
            fetched = await loop.run_in_executor(
                None, partial(self._fetch, video_id, language)
            )
        except (TranscriptsDisabled, NoTranscriptFound) as e:
            raise NoCaptionsError(f"No subtitles found for {video_id}: {e}") from e

        if fetched is None:
            raise NoCaptionsError(f"No subtitles found for {video_id}")

        segments = [
            SubtitleSegment(text=s.text, start=s.start, duration=s.duration)
            for s in fetched
        ]
        if not segments:
            raise NoCaptionsError(f"No subtitles found for {video_id}")

        return Subtitles(
            video_id=video_id,
            language=getattr(fetched, "language_code", None) or language or "en",
            is_generated=getattr(fetched, "is_generated", False),
            segments=segments,
        )

    def _list(self, video_id: str) -> list:
        """Synchronous track listing in executor."""
        return list(self._api.list(video_id))

    def _fetch(self, video_id: str, language: str | None):
        """Synchronous fetch in executor. Returns None if the video has no tracks."""
        transcript_list = self._api.list(video_id)
        if language:
            transcript = transcript_list.find_transcript([language])
        else:
            transcript = next(iter(transcript_list), None)
            if transcript is None:
                return None
        logger.debug(f"Fetching {transcript.language_code} track for {video_id}")
        return transcript.fetch()
