# backend/app/api/payload.py
"""
Lectura del cuerpo de las peticiones de escritura.

Los endpoints de creación y actualización aceptan JSON o un formulario
multipart (cuando se adjunta una imagen en el campo "image"). Aquí se
aplican también las restricciones de la subida: tipos de imagen permitidos
y tamaño máximo.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import Request
from starlette.datastructures import UploadFile

from app.core.config import Settings
from app.core.exceptions import ImageTooLargeError, InvalidImageTypeError, PayloadError
from app.services.image_service import ImageUpload

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def read_image(upload: UploadFile, settings: Settings) -> ImageUpload:
    """Valida el tipo y el tamaño del fichero subido y lo carga en memoria."""
    if upload.content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise InvalidImageTypeError()

    data = await upload.read(settings.IMAGE_MAX_BYTES + 1)
    if len(data) > settings.IMAGE_MAX_BYTES:
        logger.warning(f"⚠️ SUBIDA: '{upload.filename}' supera {settings.IMAGE_MAX_BYTES} bytes")
        raise ImageTooLargeError(settings.IMAGE_MAX_BYTES)

    return ImageUpload(filename=upload.filename, content_type=upload.content_type, data=data)


async def read_payload(request: Request, settings: Settings) -> Tuple[Dict[str, Any], Optional[ImageUpload]]:
    """
    Devuelve los campos del cuerpo y la imagen adjunta, si la hay.

    Raises:
        PayloadError: si el cuerpo JSON no es un objeto válido
        InvalidImageTypeError / ImageTooLargeError: si la imagen no es aceptable
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload = {key: value for key, value in form.items() if not isinstance(value, UploadFile)}
        upload = form.get(IMAGE_FIELD)
        if isinstance(upload, UploadFile) and upload.filename:
            return payload, await read_image(upload, settings)
        return payload, None

    body = await request.body()
    if not body:
        return {}, None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise PayloadError("Request body must be valid JSON") from e
    if not isinstance(payload, dict):
        raise PayloadError("Request body must be a JSON object")
    return payload, None
