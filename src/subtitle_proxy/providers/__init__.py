"""Transcript providers."""

from .base import NoCaptionsError, TranscriptProvider
from .youtube import YouTubeTranscriptProvider

__all__ = ["NoCaptionsError", "TranscriptProvider", "YouTubeTranscriptProvider"]
