"""Avatar choices for new users: the glyph palette and picture uploads."""
from pathlib import Path
from uuid import uuid4

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from campaign_calendar.api.deps import AdminDep
from campaign_calendar.core.config import settings
from campaign_calendar.core.constants import AVATAR_GLYPHS, DEFAULT_AVATAR_GLYPH
from campaign_calendar.schemas import AvatarGlyphsRead, AvatarUploadResponse

router = APIRouter()

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
AVATAR_SUBDIR = "user-avatars"


def avatar_dir() -> Path:
    path = Path(settings.UPLOAD_DIR) / AVATAR_SUBDIR
    path.mkdir(parents=True, exist_ok=True)
    return path


@router.get("/avatar-glyphs", response_model=AvatarGlyphsRead, summary="List avatar glyphs")
def list_avatar_glyphs(caller: AdminDep) -> AvatarGlyphsRead:
    return AvatarGlyphsRead(glyphs=list(AVATAR_GLYPHS), default=DEFAULT_AVATAR_GLYPH)


@router.post(
    "/avatar",
    response_model=AvatarUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload avatar picture",
)
async def upload_avatar(caller: AdminDep, file: UploadFile = File(...)) -> AvatarUploadResponse:
    file_content = await file.read()

    if len(file_content) > settings.MAX_AVATAR_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File size exceeds maximum allowed size of {settings.MAX_AVATAR_SIZE / 1024 / 1024}MB",
        )

    file_extension = Path(file.filename or "").suffix.lower()
    if file_extension not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File type not allowed. Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
        )

    filename = f"{uuid4().hex}{file_extension}"
    try:
        (avatar_dir() / filename).write_bytes(file_content)
    except OSError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save file: {e}",
        ) from None

    return AvatarUploadResponse(avatar_url=f"/uploads/{AVATAR_SUBDIR}/{filename}")
