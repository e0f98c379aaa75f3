"""Abstract base for transcript providers."""

from abc import ABC, abstractmethod

from subtitle_proxy.models import CaptionTrack, Subtitles


class NoCaptionsError(ValueError):
    """The video exists but has no usable captions."""


class TranscriptProvider(ABC):
    @abstractmethod
    async def list_tracks(self, video_id: str) -> list[CaptionTrack]:
        """List the caption tracks available for a video."""
        ...

    @abstractmethod
    async def fetch_subtitles(
        self, video_id: str, language: str | None = None
    ) -> Subtitles:
        """Fetch one caption track. ``None`` picks the video's default track."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
