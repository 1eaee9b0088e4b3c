from typing import List

from pydantic import BaseModel, Field


class SearchParams(BaseModel):
    """Validated /thumbnails query."""
    channel_id: str = Field(..., min_length=1)
    max_results: int


class ResourceId(BaseModel):
    videoId: str


class SearchItem(BaseModel):
    id: ResourceId


class SearchListResponse(BaseModel):
    """The part of a YouTube search.list response we read."""
    items: List[SearchItem] = []


class VideoResponse(BaseModel):
    thumbnailUrl: str
    videoUrl: str


class ThumbnailsResponse(BaseModel):
    videos: List[VideoResponse] = []
