import re
import logging
from typing import Dict, Optional, Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..errors import InvalidParameter, UpstreamError, UpstreamSchemaError
from ..models.schemas import SearchParams, SearchListResponse, ThumbnailsResponse, VideoResponse

logger = logging.getLogger("ytthumbs.services.youtube_service")

THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# Base-10 integer, optional sign, no surrounding whitespace
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1
MAX_RESULTS_INVALID = "maxResults needs to be a valid Integer"


def parse_search_params(channel_id: Optional[str], max_results: Optional[str]) -> SearchParams:
    """
    Validate the raw /thumbnails query values.
    """
    if not channel_id:
        raise InvalidParameter("channelId", "channelId is missing")

    if max_results is None or not _INTEGER_RE.fullmatch(max_results):
        raise InvalidParameter("maxResults", MAX_RESULTS_INVALID)

    try:
        value = int(max_results)
    except ValueError:
        # more digits than the interpreter will convert
        raise InvalidParameter("maxResults", MAX_RESULTS_INVALID)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidParameter("maxResults", MAX_RESULTS_INVALID)

    return SearchParams(channel_id=channel_id, max_results=value)


def search_query(params: SearchParams, api_key: str) -> Dict[str, Any]:
    return {
        "part": "snippet",
        "channelId": params.channel_id,
        "maxResults": params.max_results,
        "order": "date",
        "type": "video",
        "key": api_key,
    }


def build_search_url(params: SearchParams, settings: Settings) -> str:
    """
    Build the outbound search.list URL. Query values are percent-encoded.
    """
    return str(httpx.URL(settings.search_url, params=search_query(params, settings.api_key)))


def redact(url: str) -> str:
    """Strip the API key from a URL before it is logged."""
    return re.sub(r"([?&]key=)[^&]*", r"\1***", url)


def map_search_response(status_code: int, body: str) -> ThumbnailsResponse:
    """
    Turn a raw search.list response into the public thumbnails payload.

    Order of upstream items is kept as is.
    """
    if status_code > 299:
        logger.error(f"Response failed with status code: {status_code} and\nbody: {body}")
        raise UpstreamError(
            f"YouTube API returned response code {status_code}",
            upstream_status=status_code,
            body=body,
        )

    try:
        search_data = SearchListResponse.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"Could not parse YouTube search response: {e}")
        raise UpstreamSchemaError()

    return ThumbnailsResponse(videos=[
        VideoResponse(
            thumbnailUrl=THUMBNAIL_URL.format(video_id=item.id.videoId),
            videoUrl=WATCH_URL.format(video_id=item.id.videoId),
        )
        for item in search_data.items
    ])


async def fetch_thumbnails(client: httpx.AsyncClient, params: SearchParams, settings: Settings) -> ThumbnailsResponse:
    """
    Search a channel's latest videos and return their thumbnail and watch URLs.
    """
    url = build_search_url(params, settings)
    logger.debug(f"Requesting {redact(url)}")

    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"Request to YouTube API failed: {e!r}")
        raise UpstreamError("An internal error occurred while making the request")

    result = map_search_response(response.status_code, response.text)
    logger.info(f"Found {len(result.videos)} videos for channel {params.channel_id}")
    return result
