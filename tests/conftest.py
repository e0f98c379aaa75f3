"""Shared test fixtures."""

from unittest.mock import AsyncMock

import pytest

from subtitle_proxy.cache import ResponseCache
from subtitle_proxy.models import CaptionTrack, SubtitleSegment, Subtitles
from subtitle_proxy.providers.base import TranscriptProvider
from subtitle_proxy.service import SubtitleService


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_segments():
    return [
        SubtitleSegment(text="Hello world", start=0.0, duration=2.5),
        SubtitleSegment(text="this is a test", start=2.5, duration=3.0),
        SubtitleSegment(text="of the transcript", start=5.5, duration=2.0),
        SubtitleSegment(text="extraction system", start=7.5, duration=2.5),
        SubtitleSegment(text="goodbye world", start=70.0, duration=2.0),
    ]


@pytest.fixture
def sample_subtitles(sample_segments):
    return Subtitles(
        video_id="dQw4w9WgXcQ",
        language="en",
        is_generated=False,
        segments=sample_segments,
    )


@pytest.fixture
def sample_tracks():
    return [
        CaptionTrack(language_code="en", name="English", base_url="dQw4w9WgXcQ"),
        CaptionTrack(
            language_code="ko",
            name="Korean (auto-generated)",
            base_url="dQw4w9WgXcQ",
            is_generated=True,
        ),
    ]


@pytest.fixture
def provider(sample_tracks, sample_subtitles):
    mock = AsyncMock(spec=TranscriptProvider)
    mock.list_tracks = AsyncMock(return_value=sample_tracks)
    mock.fetch_subtitles = AsyncMock(return_value=sample_subtitles)
    return mock


@pytest.fixture
def cache(clock):
    return ResponseCache(max_size=10, max_age=3600, clock=clock)


@pytest.fixture
def service(provider, cache):
    return SubtitleService(provider, cache)
