import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from ..config import Settings
from ..errors import SerializationError
from ..models.schemas import ThumbnailsResponse
from ..services.youtube_service import fetch_thumbnails, parse_search_params

logger = logging.getLogger("ytthumbs.routes.thumbnail_routes")

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


@router.get("/thumbnails", response_model=ThumbnailsResponse)
async def thumbnails(
    channelId: Optional[str] = Query(None, description="YouTube channel to search"),
    maxResults: Optional[str] = Query(None, description="Number of videos to return"),
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Latest videos of a channel as thumbnail and watch URLs.
    """
    # Validated by hand so that bad input gets a plain 400 instead of FastAPI's 422
    params = parse_search_params(channelId, maxResults)
    result = await fetch_thumbnails(client, params, settings)

    try:
        return JSONResponse(content=result.model_dump())
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to serialize thumbnails response: {e}")
        raise SerializationError()


@router.options("/thumbnails", status_code=status.HTTP_204_NO_CONTENT)
async def thumbnails_preflight():
    return Response(status_code=status.HTTP_204_NO_CONTENT)
