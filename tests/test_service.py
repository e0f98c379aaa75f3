"""Tests for the cache-backed lookup service."""

import logging

import pytest

from subtitle_proxy.cache import Namespace
from subtitle_proxy.models import SubtitleSegment, Subtitles
from subtitle_proxy.providers.base import NoCaptionsError
from subtitle_proxy.service import subtitle_key


class TestSubtitleKey:
    def test_without_language(self):
        assert subtitle_key("dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_with_language(self):
        assert subtitle_key("dQw4w9WgXcQ", "ko") == "dQw4w9WgXcQ:ko"


class TestListTracks:
    @pytest.mark.asyncio
    async def test_miss_fetches_and_stores(self, service, provider, cache, sample_tracks):
        tracks = await service.list_tracks("dQw4w9WgXcQ")
        assert tracks == sample_tracks
        provider.list_tracks.assert_awaited_once_with("dQw4w9WgXcQ")
        assert cache.get(Namespace.TRACK_LIST, "dQw4w9WgXcQ") == sample_tracks

    @pytest.mark.asyncio
    async def test_hit_skips_provider(self, service, provider):
        await service.list_tracks("dQw4w9WgXcQ")
        await service.list_tracks("dQw4w9WgXcQ")
        assert provider.list_tracks.await_count == 1

    @pytest.mark.asyncio
    async def test_expired_entry_refetches(self, service, provider, clock):
        await service.list_tracks("dQw4w9WgXcQ")
        clock.advance(3601)
        await service.list_tracks("dQw4w9WgXcQ")
        assert provider.list_tracks.await_count == 2

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(self, service, provider, cache):
        provider.list_tracks.side_effect = NoCaptionsError("none")
        with pytest.raises(NoCaptionsError):
            await service.list_tracks("dQw4w9WgXcQ")
        assert len(cache) == 0


class TestFetchSubtitles:
    @pytest.mark.asyncio
    async def test_default_track_keyed_by_video(self, service, provider, cache, sample_subtitles):
        result = await service.fetch_subtitles("dQw4w9WgXcQ")
        assert result is sample_subtitles
        provider.fetch_subtitles.assert_awaited_once_with("dQw4w9WgXcQ", None)
        assert cache.get(Namespace.SUBTITLE_BODY, "dQw4w9WgXcQ") is sample_subtitles

    @pytest.mark.asyncio
    async def test_languages_cached_separately(self, service, provider, cache):
        await service.fetch_subtitles("dQw4w9WgXcQ", "en")
        await service.fetch_subtitles("dQw4w9WgXcQ", "en")
        await service.fetch_subtitles("dQw4w9WgXcQ", "de")
        assert provider.fetch_subtitles.await_count == 2
        assert cache.get(Namespace.SUBTITLE_BODY, "dQw4w9WgXcQ:de") is not None

    @pytest.mark.asyncio
    async def test_language_mismatch_warns(self, service, provider, caplog):
        provider.fetch_subtitles.return_value = Subtitles(
            video_id="dQw4w9WgXcQ",
            language="ko",
            segments=[SubtitleSegment(text="xyz qqq", start=0.0, duration=1.0)],
        )
        with caplog.at_level(logging.WARNING, logger="subtitle_proxy.service"):
            result = await service.fetch_subtitles("dQw4w9WgXcQ", "ko")
        assert result.segments[0].text == "xyz qqq"
        assert "do not look like 'ko'" in caplog.text

    @pytest.mark.asyncio
    async def test_matching_language_does_not_warn(self, service, caplog):
        with caplog.at_level(logging.WARNING, logger="subtitle_proxy.service"):
            await service.fetch_subtitles("dQw4w9WgXcQ", "en")
        assert "do not look like" not in caplog.text

    @pytest.mark.asyncio
    async def test_close_closes_provider(self, service, provider):
        await service.close()
        provider.close.assert_awaited_once()
