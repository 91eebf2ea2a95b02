"""
Feed Items Mapper - Extract Layer

Pure decoding of a raw HTTP payload into domain items. Either every entry is
valid and the whole list is returned, or FeedDecodingError is raised.
"""

from typing import List

from pydantic import ValidationError

from .schemas import RemoteFeedItem, RemoteFeedResponse
from ..transformation.models import FeedItem

OK_200 = 200


class FeedDecodingError(ValueError):
    """Raised when a response cannot be turned into feed items"""


def decode_remote_items(data: bytes) -> List[RemoteFeedItem]:
    """
    Decode a JSON payload into wire models

    Args:
        data: Raw response body

    Returns:
        List[RemoteFeedItem]: Entries in payload order
    """
    try:
        response = RemoteFeedResponse.model_validate_json(data)
    except ValidationError as e:
        raise FeedDecodingError(f"Invalid feed payload: {e.error_count()} error(s)\n{e}") from e
    except RecursionError as e:
        raise FeedDecodingError("Feed payload is nested too deeply") from e

    return response.items


def map_feed_items(data: bytes, status_code: int) -> List[FeedItem]:
    """
    Map an HTTP response to feed items

    Args:
        data: Raw response body
        status_code: HTTP status of the response

    Returns:
        List[FeedItem]: Decoded items in payload order

    Raises:
        FeedDecodingError: On any non-200 status or invalid payload
    """
    if status_code != OK_200:
        raise FeedDecodingError(f"Unexpected status code {status_code}")

    return [remote.to_model() for remote in decode_remote_items(data)]
