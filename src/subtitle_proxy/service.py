"""Cache-backed lookups of caption tracks and subtitles."""

import logging

from subtitle_proxy.cache import Namespace, ResponseCache
from subtitle_proxy.models import CaptionTrack, Subtitles
from subtitle_proxy.providers.base import TranscriptProvider
from subtitle_proxy.utils import LANGUAGE_INDICATORS, verify_transcript_language

logger = logging.getLogger(__name__)


def subtitle_key(video_id: str, language: str | None = None) -> str:
    if language:
        return f"{video_id}:{language}"
    return video_id


class SubtitleService:
    """Looks up the cache first and falls through to the provider on a miss.

    Concurrent misses for the same key are not coalesced; each one fetches.
    """

    def __init__(self, provider: TranscriptProvider, cache: ResponseCache):
        self._provider = provider
        self._cache = cache

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    async def list_tracks(self, video_id: str) -> list[CaptionTrack]:
        cached = self._cache.get(Namespace.TRACK_LIST, video_id)
        if cached is not None:
            logger.debug(f"Track list cache hit: {video_id}")
            return cached

        tracks = await self._provider.list_tracks(video_id)
        self._cache.put(Namespace.TRACK_LIST, video_id, tracks)
        return tracks

    async def fetch_subtitles(
        self, video_id: str, language: str | None = None
    ) -> Subtitles:
        key = subtitle_key(video_id, language)
        cached = self._cache.get(Namespace.SUBTITLE_BODY, key)
        if cached is not None:
            logger.debug(f"Subtitle cache hit: {key}")
            return cached

        subtitles = await self._provider.fetch_subtitles(video_id, language)
        if language in LANGUAGE_INDICATORS and not verify_transcript_language(
            [s.text for s in subtitles.segments], language
        ):
            logger.warning(
                f"Subtitles for {video_id} do not look like '{language}'"
            )
        self._cache.put(Namespace.SUBTITLE_BODY, key, subtitles)
        return subtitles

    async def close(self) -> None:
        await self._provider.close()
