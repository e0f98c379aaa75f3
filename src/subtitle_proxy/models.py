"""Data models for caption tracks and subtitles."""

from pydantic import BaseModel, computed_field
from pydantic.alias_generators import to_camel


class CaptionTrack(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    language_code: str
    name: str
    base_url: str
    is_generated: bool = False


class SubtitleSegment(BaseModel):
    text: str
    start: float
    duration: float


class Subtitles(BaseModel):
    video_id: str
    language: str
    is_generated: bool = False
    segments: list[SubtitleSegment] = []

    @computed_field
    @property
    def text(self) -> str:
        return " ".join(s.text for s in self.segments)
