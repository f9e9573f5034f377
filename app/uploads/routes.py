import logging
import secrets
import time
from pathlib import Path

from fastapi import APIRouter, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from app import config
from app.errors import ValidationError

router = APIRouter()
logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def _reject(message: str):
    logger.warning(f"Profile picture rejected: {message}")
    raise ValidationError([{"field": "profilePicture", "message": message}], message=message)


def _save(destination: Path, content: bytes) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(content)


@router.post("/upload/profile-picture", summary="Upload a profile picture")
async def upload_profile_picture(profile_picture: UploadFile = File(..., alias="profilePicture")):
    extension = Path(profile_picture.filename or "").suffix.lower()
    if not (profile_picture.content_type or "").startswith("image/") or extension not in ALLOWED_EXTENSIONS:
        _reject("Only image files are allowed")

    content = await profile_picture.read(config.MAX_UPLOAD_BYTES + 1)
    if not content:
        _reject("No file uploaded")
    if len(content) > config.MAX_UPLOAD_BYTES:
        _reject(f"File too large: limit is {config.MAX_UPLOAD_BYTES} bytes")

    filename = f"profilePicture-{int(time.time() * 1000)}-{secrets.token_hex(4)}{extension}"
    destination = config.UPLOAD_DIR / filename
    await run_in_threadpool(_save, destination, content)

    logger.info(f"Profile picture uploaded: {filename}")
    return {
        "success": True,
        "data": {
            "filename": filename,
            "url": f"/uploads/{filename}",
            "path": str(destination),
        },
    }
