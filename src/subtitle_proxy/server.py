"""Subtitle proxy server: HTTP API for the front-end plus MCP tools."""

import asyncio
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Annotated, Callable, Literal

import uvicorn
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.server import TransportSecuritySettings
from pydantic import Field
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import Response

from subtitle_proxy import routes, tools
from subtitle_proxy.cache import ResponseCache
from subtitle_proxy.config import Settings, Transport
from subtitle_proxy.providers.base import TranscriptProvider
from subtitle_proxy.providers.youtube import YouTubeTranscriptProvider
from subtitle_proxy.service import SubtitleService
from subtitle_proxy.sweeper import CacheSweeper

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("subtitle-proxy")

# Tool annotations for read-only API tools
TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "openWorldHint": True,
}

HELP_TEXT = """# Subtitle Proxy - Help Guide

## Available Tools

### list_caption_tracks
List the caption tracks (languages) available for a YouTube video.
- Example: list_caption_tracks(url="https://youtube.com/watch?v=VIDEO_ID")

### get_subtitles
Fetch the subtitles of a video.
- Omit language to get the video's default track
- Two output formats: text, or segments (with timestamps)
- Example: get_subtitles(url="VIDEO_ID", language="en", format="segments")

## HTTP API
- GET /health
- GET /api/subtitles/list?videoId=VIDEO_ID
- GET /api/subtitles/fetch?videoId=VIDEO_ID&lang=en

Results are cached in memory, so repeated lookups do not hit YouTube again.
"""


class SubtitleProxy:
    """Composition root: owns the cache, service and sweeper for one process."""

    def __init__(
        self,
        settings: Settings | None = None,
        provider: TranscriptProvider | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or Settings()
        self.cache = ResponseCache(
            max_size=self.settings.cache_max_size,
            max_age=self.settings.cache_max_age_seconds,
            clock=clock,
        )
        self.service = SubtitleService(provider or YouTubeTranscriptProvider(), self.cache)
        self.sweeper = CacheSweeper(
            self.cache, interval=self.settings.cache_sweep_interval_seconds
        )
        self.mcp = self._create_mcp()

    @asynccontextmanager
    async def _session_lifespan(self, server: FastMCP):
        async with self.sweeper:
            yield

    def _create_mcp(self) -> FastMCP:
        mcp = FastMCP(
            "Subtitle Proxy",
            instructions="List caption tracks and fetch subtitles of YouTube videos",
            lifespan=self._session_lifespan,
            transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
        )
        service = self.service

        @mcp.tool(annotations=TOOL_ANNOTATIONS)
        async def list_caption_tracks(
            url: Annotated[str, Field(description="YouTube video URL or video ID (e.g. https://youtube.com/watch?v=dQw4w9WgXcQ or just dQw4w9WgXcQ)")],
        ) -> str:
            """List the caption tracks available for a YouTube video."""
            return await tools.caption_tracks_report(service, url)

        @mcp.tool(annotations=TOOL_ANNOTATIONS)
        async def get_subtitles(
            url: Annotated[str, Field(description="YouTube video URL or video ID")],
            language: Annotated[str | None, Field(default=None, description="Language code of the caption track (e.g. en, ko). Omit for the video's default track")] = None,
            format: Annotated[Literal["text", "segments"], Field(default="text", description="Output format: text for plain text, segments for timestamped segments")] = "text",
        ) -> str:
            """Fetch the subtitles of a YouTube video."""
            return await tools.subtitles_report(service, url, language, format)

        @mcp.resource("subtitles://help")
        def help_resource() -> str:
            """Usage guide for the subtitle proxy."""
            return HELP_TEXT

        @mcp.custom_route("/health", methods=["GET"])
        async def health(request: Request) -> Response:
            return await routes.health(service, request)

        @mcp.custom_route("/api/subtitles/list", methods=["GET"])
        async def list_subtitles(request: Request) -> Response:
            return await routes.list_subtitles(service, request)

        @mcp.custom_route("/api/subtitles/fetch", methods=["GET"])
        async def fetch_subtitles(request: Request) -> Response:
            return await routes.fetch_subtitles(service, request)

        return mcp

    def http_app(self) -> Starlette:
        """Streamable-HTTP app with CORS, error handling and the front-end build."""
        app = self.mcp.streamable_http_app()
        session_manager_lifespan = app.router.lifespan_context

        @asynccontextmanager
        async def lifespan(app: Starlette):
            async with self.sweeper:
                async with session_manager_lifespan(app):
                    logger.info(f"Proxy server running on port {self.settings.port}")
                    yield
            await self.service.close()
            logger.info("Server stopped")

        app.router.lifespan_context = lifespan
        # Added first so it runs inside CORS and error responses keep the headers.
        app.add_middleware(routes.JSONErrorMiddleware)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
        if self.settings.static_dir:
            app.mount(
                "/",
                routes.SPAStaticFiles(directory=self.settings.static_dir, html=True),
                name="frontend",
            )
        return app

    def run(self) -> None:
        logging.getLogger().setLevel(self.settings.log_level.upper())
        if self.settings.transport == Transport.STREAMABLE_HTTP:
            uvicorn.run(
                self.http_app(),
                host=self.settings.host,
                port=self.settings.port,
                log_level=self.settings.log_level.lower(),
            )
        else:
            self.mcp.run(transport="stdio")
            asyncio.run(self.service.close())


def main():
    SubtitleProxy().run()


if __name__ == "__main__":
    main()
