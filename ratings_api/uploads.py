# ratings_api/uploads.py
import logging
import os
import time

from fastapi import UploadFile

from ratings_api.config import get_settings
from ratings_api.errors import BadRequest

logger = logging.getLogger(__name__)


def images_dir() -> str:
    settings = get_settings()
    path = os.path.join(settings.PUBLIC_DIR, settings.IMAGES_SUBDIR)
    os.makedirs(path, exist_ok=True)
    return path


def public_url(filename: str) -> str:
    return f"/{get_settings().IMAGES_SUBDIR}/{filename}"


def _unique_filename(directory: str, ext: str) -> str:
    stamp = int(time.time() * 1000)
    filename = f"emp-{stamp}{ext}"
    while os.path.exists(os.path.join(directory, filename)):
        stamp += 1
        filename = f"emp-{stamp}{ext}"
    return filename


async def save_employee_photo(photo: UploadFile) -> str:
    """
    Guarda la foto en PUBLIC_DIR/images con nombre emp-<timestamp><ext>
    y devuelve la URL pública. El empleado guarda solo esa URL.
    """
    settings = get_settings()
    if not photo.content_type or not photo.content_type.startswith("image/"):
        raise BadRequest("Solo se permiten imágenes")

    content = await photo.read()
    if not content:
        raise BadRequest("La imagen está vacía")
    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    if len(content) > max_bytes:
        raise BadRequest(f"Imagen demasiado pesada (max {settings.MAX_UPLOAD_MB}MB)")

    directory = images_dir()
    ext = os.path.splitext(photo.filename or "")[1].lower()
    filename = _unique_filename(directory, ext)
    with open(os.path.join(directory, filename), "wb") as fh:
        fh.write(content)

    logger.info("Foto guardada: %s (%d bytes)", filename, len(content))
    return public_url(filename)


def discard_photo(url: str) -> None:
    """Borra una foto recién subida cuando el alta/edición no se concretó."""
    filename = os.path.basename(url)
    path = os.path.join(images_dir(), filename)
    if os.path.exists(path):
        os.remove(path)
        logger.info("Foto descartada: %s", filename)
