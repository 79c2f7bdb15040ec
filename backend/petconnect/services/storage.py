"""Module: storage."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from petconnect.core.codes import now_millis
from petconnect.services.http import bearer, send

logger = logging.getLogger(__name__)


@dataclass
class PhotoUpload:
    filename: str
    content: bytes
    content_type: str


class StorageClient:
    """Photo uploads to the hosted object storage bucket."""

    def __init__(self, http: httpx.AsyncClient, bucket: str):
        self.http = http
        self.bucket = bucket

    @staticmethod
    def photo_path(owner_id: uuid.UUID | str, filename: str, millis: int | None = None) -> str:
        """Object path ``{owner_id}/{millis}.{ext}`` for an uploaded photo."""
        extension = filename.split(".")[-1]
        if millis is None:
            millis = now_millis()
        return f"{owner_id}/{millis}.{extension}"

    def public_url(self, path: str) -> str:
        base = str(self.http.base_url).rstrip("/")
        return f"{base}/storage/v1/object/public/{self.bucket}/{quote(path)}"

    async def upload(self, path: str, content: bytes, content_type: str, access_token: str) -> str:
        await send(
            self.http,
            "POST",
            f"/storage/v1/object/{self.bucket}/{quote(path)}",
            content=content,
            headers={**bearer(access_token), "Content-Type": content_type},
        )
        logger.info("Uploaded %s bytes to %s/%s", len(content), self.bucket, path)
        return path

    async def upload_photo(self, owner_id: uuid.UUID, photo: PhotoUpload, access_token: str) -> str:
        """Upload a pet photo and return its public URL."""
        path = self.photo_path(owner_id, photo.filename)
        await self.upload(path, photo.content, photo.content_type, access_token)
        return self.public_url(path)
