# ABOUTME: Imgur album API client resolving an album ID to its ordered image list
# ABOUTME: Unexpected response shapes mean an empty album; transport and HTTP failures raise

import httpx

from album_archiver.albums.models import AlbumImage
from album_archiver.errors import AlbumResolutionError
from album_archiver.utils.logging import get_logger, log_api_call

DEFAULT_API_BASE = "https://api.imgur.com/3"


class ImgurAlbumProvider:
    """Resolves albums through the provider's read endpoint using a client credential."""

    def __init__(self, client: httpx.AsyncClient, client_id: str, api_base: str = DEFAULT_API_BASE):
        self.http_client = client
        self.client_id = client_id
        self.api_base = api_base.rstrip("/")
        self.logger = get_logger(__name__)

    def album_url(self, album_id: str) -> str:
        return f"{self.api_base}/album/{album_id}"

    @log_api_call("imgur_album")
    async def resolve(self, album_id: str) -> list[AlbumImage]:
        """Return the album's images in provider order.

        Raises:
            AlbumResolutionError: If the request fails or the body is not JSON
        """
        try:
            response = await self.http_client.get(
                self.album_url(album_id),
                headers={"Authorization": f"Client-ID {self.client_id}"},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise AlbumResolutionError(f"Album {album_id} could not be fetched: {e}") from e
        except ValueError as e:
            raise AlbumResolutionError(f"Album {album_id} returned a non-JSON body: {e}") from e

        images = self._parse_images(payload)
        if images is None:
            self.logger.warning("Unexpected album response shape, treating as empty", album_id=album_id)
            return []

        self.logger.info("Resolved album", album_id=album_id, image_count=len(images))
        return images

    @staticmethod
    def _parse_images(payload: object) -> list[AlbumImage] | None:
        """Extract ``data.images`` entries; None when the payload is not album-shaped."""
        if not isinstance(payload, dict):
            return None
        data = payload.get("data")
        if not isinstance(data, dict) or not isinstance(data.get("images"), list):
            return None

        images: list[AlbumImage] = []
        for item in data["images"]:
            if not isinstance(item, dict) or not isinstance(item.get("link"), str):
                continue
            mime_type = item.get("type") if isinstance(item.get("type"), str) else "image/jpeg"
            images.append(AlbumImage(link=item["link"], mime_type=mime_type))
        return images
