from typing import Optional

from fastapi import status


class ThumbnailsError(Exception):
    """
    Base class for errors that end a /thumbnails request.

    `detail` is the message returned to the client, so it must never contain
    raw upstream output.
    """

    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class InvalidParameter(ThumbnailsError):
    """A query parameter is missing or malformed."""

    def __init__(self, parameter: str, detail: str):
        super().__init__(detail, status_code=status.HTTP_400_BAD_REQUEST)
        self.parameter = parameter


class UpstreamError(ThumbnailsError):
    """
    The YouTube API could not be reached or answered with a non-2xx status.

    `upstream_status` is None for transport failures. `body` is kept for
    logging only.
    """

    def __init__(self, detail: str, upstream_status: Optional[int] = None, body: str = ""):
        super().__init__(detail)
        self.upstream_status = upstream_status
        self.body = body


class UpstreamSchemaError(ThumbnailsError):
    def __init__(self, detail: str = "YouTube API returned an unexpected response"):
        super().__init__(detail)


class SerializationError(ThumbnailsError):
    def __init__(self, detail: str = "An internal error occurred while generating the json response"):
        super().__init__(detail)


class ConfigurationError(Exception):
    """Raised at startup when the process environment is unusable."""
