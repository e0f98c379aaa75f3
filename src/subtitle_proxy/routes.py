"""HTTP endpoints consumed by the browser front-end."""

import logging

from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from subtitle_proxy.providers.base import NoCaptionsError
from subtitle_proxy.service import SubtitleService
from subtitle_proxy.utils import extract_video_id

logger = logging.getLogger(__name__)

INVALID_VIDEO_ID = "Please provide a valid YouTube video ID."
NO_CAPTIONS = "No captions available for this video. Please try another video."
NO_SUBTITLES = "No subtitles found for this video."
CAPTIONS_UNAVAILABLE = "Unable to fetch captions. Please try again later."
SUBTITLES_UNAVAILABLE = "Unable to fetch subtitles. Please try again later."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _video_id(request: Request) -> str | None:
    return extract_video_id(request.query_params.get("videoId", "").strip())


async def health(service: SubtitleService, request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "cache": service.cache.stats()})


async def list_subtitles(service: SubtitleService, request: Request) -> JSONResponse:
    video_id = _video_id(request)
    if not video_id:
        return _error(400, INVALID_VIDEO_ID)

    try:
        tracks = await service.list_tracks(video_id)
    except NoCaptionsError:
        return _error(404, NO_CAPTIONS)
    except Exception:
        logger.exception(f"Error fetching caption tracks for {video_id}")
        return _error(500, CAPTIONS_UNAVAILABLE)

    return JSONResponse(
        {"captionTracks": [t.model_dump(mode="json", by_alias=True) for t in tracks]}
    )


async def fetch_subtitles(service: SubtitleService, request: Request) -> JSONResponse:
    video_id = _video_id(request)
    if not video_id:
        return _error(400, INVALID_VIDEO_ID)
    language = request.query_params.get("lang") or None

    try:
        subtitles = await service.fetch_subtitles(video_id, language)
    except NoCaptionsError:
        return _error(404, NO_SUBTITLES)
    except Exception:
        logger.exception(f"Error fetching subtitles for {video_id}")
        return _error(500, SUBTITLES_UNAVAILABLE)

    return JSONResponse({
        "videoId": subtitles.video_id,
        "language": subtitles.language,
        "subtitles": [s.model_dump(mode="json") for s in subtitles.segments],
    })


async def server_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Server error: {exc!r}")
    return _error(500, f"Internal server error: {exc}")


class JSONErrorMiddleware:
    """Turns unhandled exceptions into the JSON 500 body the front-end expects."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def _send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, _send)
        except Exception as exc:
            if response_started:
                raise
            response = await server_error(Request(scope), exc)
            await response(scope, receive, send)


class SPAStaticFiles(StaticFiles):
    """Static front-end build; unknown paths fall back to ``index.html``."""

    async def get_response(self, path: str, scope) -> Response:
        try:
            response = await super().get_response(path, scope)
        except HTTPException as e:
            if e.status_code != 404:
                raise
            return await super().get_response("index.html", scope)
        if response.status_code == 404:
            return await super().get_response("index.html", scope)
        return response
