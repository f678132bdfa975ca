# backend/app/services/image_service.py
"""
Cliente del servicio externo de imágenes (Cloudinary).

Las imágenes de categorías, subcategorías e ítems se suben a una carpeta por
tipo de entidad y la entidad guarda la URL canónica (secure_url). Al
reemplazar una imagen se destruye primero la anterior.

Se usa la API REST de Cloudinary con peticiones firmadas; la firma la
calcula el SDK oficial (cloudinary.utils.api_sign_request) y el transporte
es httpx.
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlparse

import cloudinary.utils
import httpx

from app.core.config import Settings
from app.core.exceptions import ImageStoreError

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    """Fichero de imagen ya validado por la capa de subida."""
    filename: str
    content_type: str
    data: bytes


class CloudinaryImageStore:
    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        base_url: str = "https://api.cloudinary.com/v1_1",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        if not self.is_configured:
            logger.warning("Cloudinary no configurado. La subida de imágenes no estará disponible.")

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryImageStore":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            base_url=settings.CLOUDINARY_API_BASE_URL,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def sign(self, params: Dict[str, str]) -> str:
        """Firma los parámetros de una petición a la API de Cloudinary."""
        return cloudinary.utils.api_sign_request(params, self.api_secret)

    def _signed_params(self, params: Dict[str, str]) -> Dict[str, str]:
        params = dict(params, timestamp=str(int(time.time())))
        return dict(params, api_key=self.api_key, signature=self.sign(params))

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    @staticmethod
    def public_id_from_url(image_url: str) -> str:
        """
        Obtiene el public_id a partir de la URL entregada por Cloudinary.

        .../image/upload/v1700000000/menu_items/abc123.jpg -> menu_items/abc123
        """
        segments = [s for s in urlparse(image_url).path.split("/") if s]
        if len(segments) < 2:
            raise ImageStoreError(f"Cannot derive image id from URL: {image_url}")
        return "/".join(segments[-2:]).rsplit(".", 1)[0]

    async def upload(self, image: ImageUpload, folder: str) -> str:
        """Sube la imagen a la carpeta indicada y devuelve su URL canónica."""
        if not self.is_configured:
            raise ImageStoreError("Image storage is not configured")

        url = f"{self.base_url}/{self.cloud_name}/image/upload"
        try:
            async with self._client() as client:
                response = await client.post(
                    url,
                    data=self._signed_params({"folder": folder}),
                    files={"file": (image.filename, image.data, image.content_type)},
                )
                response.raise_for_status()
                secure_url = response.json().get("secure_url")
        except httpx.HTTPStatusError as e:
            logger.error(f"Error HTTP subiendo imagen a Cloudinary: {e.response.status_code} - {e.response.text}")
            raise ImageStoreError("Image upload failed") from e
        except httpx.HTTPError as e:
            logger.error(f"Error subiendo imagen a Cloudinary: {e}")
            raise ImageStoreError("Image upload failed") from e

        if not secure_url:
            raise ImageStoreError("Image upload failed")
        logger.info(f"Imagen '{image.filename}' subida a Cloudinary: {secure_url}")
        return secure_url

    async def delete(self, image_url: str) -> None:
        """Destruye en Cloudinary la imagen correspondiente a la URL."""
        if not self.is_configured:
            raise ImageStoreError("Image storage is not configured")

        url = f"{self.base_url}/{self.cloud_name}/image/destroy"
        public_id = self.public_id_from_url(image_url)
        try:
            async with self._client() as client:
                response = await client.post(url, data=self._signed_params({"public_id": public_id}))
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ImageStoreError(f"Image deletion failed for {public_id}") from e
        logger.info(f"Imagen '{public_id}' eliminada de Cloudinary")


async def replace_image(
    image_store: CloudinaryImageStore,
    current_url: Optional[str],
    image: ImageUpload,
    folder: str,
) -> str:
    """
    Reemplaza la imagen de una entidad.

    El borrado de la imagen anterior es best-effort: si falla solo se
    registra y se continúa con la subida de la nueva.
    """
    if current_url:
        try:
            await image_store.delete(current_url)
        except ImageStoreError as e:
            logger.warning(f"⚠️ No se pudo eliminar la imagen anterior '{current_url}': {e}")
    return await image_store.upload(image, folder)


async def discard_image(image_store: CloudinaryImageStore, image_url: Optional[str]) -> None:
    """
    Elimina una imagen recién subida cuya escritura en la base de datos ha
    fallado. Best-effort: un error solo se registra.
    """
    if not image_url:
        return
    try:
        await image_store.delete(image_url)
    except ImageStoreError as e:
        logger.warning(f"⚠️ No se pudo eliminar la imagen huérfana '{image_url}': {e}")
