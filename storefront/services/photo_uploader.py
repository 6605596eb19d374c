"""Turns submitted photo references into public URLs."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from typing import Annotated
from urllib.parse import quote

from fastapi import Depends

from storefront.config import settings

logger = logging.getLogger(__name__)


class PhotoUploader:
    """Stores nothing itself: it assigns each photo a stable public URL.

    The object storage bucket behind ``base_url`` is fed by the client
    upload flow, outside this service.
    """

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    def upload(self, photos: Sequence[str]) -> list[str]:
        urls = [
            f"{self._base_url}/{uuid.uuid4().hex}-{quote(photo.strip(), safe='')}"
            for photo in photos
        ]
        logger.debug("Assigned %d photo URLs", len(urls))
        return urls


def get_photo_uploader() -> PhotoUploader:
    return PhotoUploader(settings.PHOTO_BASE_URL)


PhotoUploaderDependency = Annotated[PhotoUploader, Depends(get_photo_uploader)]
