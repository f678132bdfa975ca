# backend/app/core/exceptions.py
"""
Excepciones de dominio de la aplicación.

Cada excepción lleva el código HTTP y un mensaje seguro para el cliente.
Los servicios las lanzan y los manejadores de app/api/errors.py las
convierten en la respuesta uniforme {success: false, message: ...}.
"""

from starlette import status


class AppError(Exception):
    """Base de todos los errores controlados de la aplicación."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PayloadError(AppError):
    """El cuerpo de la petición no se puede interpretar (JSON mal formado, etc.)."""


class BusinessRuleError(AppError):
    """Violación de una regla de negocio (padre exclusivo, descuento, impuestos)."""


class NotFoundError(AppError):
    """La entidad referenciada por id o nombre no existe."""

    status_code = status.HTTP_404_NOT_FOUND


class DuplicateError(AppError):
    """Colisión con un valor único ya existente."""

    def __init__(self, field: str):
        super().__init__(f"{field[:1].upper()}{field[1:]} already exists")
        self.field = field


class InvalidImageTypeError(AppError):
    """El fichero subido no es una imagen de un tipo permitido."""

    def __init__(self, message: str = "Invalid file type. Only JPEG, PNG, and WEBP images are allowed"):
        super().__init__(message)


class ImageTooLargeError(AppError):
    """El fichero subido supera el tamaño máximo permitido."""

    def __init__(self, max_bytes: int):
        super().__init__(f"File size too large. Maximum size is {max_bytes // (1024 * 1024)}MB")
        self.max_bytes = max_bytes


class ImageStoreError(AppError):
    """Fallo del servicio externo de imágenes."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
