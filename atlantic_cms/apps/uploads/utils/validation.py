"""
Upload validation rules

Everything here runs before storage is touched: a rejected file never
causes a network call.
"""
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple
import random
import string

MB = 1024 * 1024


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    BOTH = "both"


class CallSite(str, Enum):
    GENERIC_IMAGE = "generic_image"
    SECTION_IMAGE = "section_image"
    SECTION_VIDEO = "section_video"
    CREATOR_APPLICATION = "creator_application"
    LEGACY_VIDEO = "legacy_video"


class UploadFolder(str, Enum):
    """Top-level folders of the storage bucket"""
    SECTIONS = "sections"
    PORTFOLIO = "portfolio"
    BLOG = "blog"
    IMAGES = "images"
    APPLICATIONS = "applications"
    UPLOADS = "uploads"


IMAGE_MIME_TYPES: FrozenSet[str] = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
})

VIDEO_MIME_TYPES: FrozenSet[str] = frozenset({
    "video/mp4",
    "video/webm",
    "video/quicktime",
    "video/x-msvideo",
})

# Each call site has its own ceiling; they are not interchangeable
CALL_SITE_LIMITS: Dict[CallSite, Tuple[MediaKind, int]] = {
    CallSite.GENERIC_IMAGE: (MediaKind.IMAGE, 5 * MB),
    CallSite.SECTION_IMAGE: (MediaKind.IMAGE, 10 * MB),
    CallSite.SECTION_VIDEO: (MediaKind.VIDEO, 50 * MB),
    CallSite.CREATOR_APPLICATION: (MediaKind.BOTH, 50 * MB),
    CallSite.LEGACY_VIDEO: (MediaKind.VIDEO, 100 * MB),
}


class UploadRejected(Exception):
    """File refused by validation. reason is "invalid-type" or "too-large"."""

    INVALID_TYPE = "invalid-type"
    TOO_LARGE = "too-large"

    def __init__(self, reason: str, detail: str):
        super().__init__(detail)
        self.reason = reason
        self.detail = detail


def allowed_mime_types(media_kind: MediaKind) -> FrozenSet[str]:
    if media_kind == MediaKind.IMAGE:
        return IMAGE_MIME_TYPES
    if media_kind == MediaKind.VIDEO:
        return VIDEO_MIME_TYPES
    return IMAGE_MIME_TYPES | VIDEO_MIME_TYPES


def format_size(num_bytes: int) -> str:
    return f"{num_bytes / MB:g}MB"


def validate_upload(content_type: Optional[str], size: int, media_kind: MediaKind, max_bytes: int) -> None:
    """
    Raise UploadRejected unless the MIME type is allowed for media_kind and
    size does not exceed max_bytes.
    """
    if content_type not in allowed_mime_types(media_kind):
        raise UploadRejected(
            UploadRejected.INVALID_TYPE,
            f"File type '{content_type or 'unknown'}' is not allowed for {media_kind.value} uploads",
        )

    if size > max_bytes:
        raise UploadRejected(
            UploadRejected.TOO_LARGE,
            f"File is too large ({format_size(size)}). Maximum size is {format_size(max_bytes)}",
        )


def validate_for_call_site(content_type: Optional[str], size: int, call_site: CallSite) -> MediaKind:
    media_kind, max_bytes = CALL_SITE_LIMITS[call_site]
    validate_upload(content_type, size, media_kind, max_bytes)
    return media_kind


def _random_suffix(length: int = 8) -> str:
    alphabet = string.digits + string.ascii_lowercase
    return "".join(random.choice(alphabet) for _ in range(length))


def get_extension(filename: Optional[str], default: str = "bin") -> str:
    if filename and "." in filename:
        extension = filename.rsplit(".", 1)[-1].lower()
        if extension:
            return extension
    return default


def build_storage_path(folder: str, filename: Optional[str]) -> str:
    """{folder}/{millisecond timestamp}-{random base36 suffix}.{ext}"""
    timestamp = int(datetime.now().timestamp() * 1000)
    return f"{folder.strip('/')}/{timestamp}-{_random_suffix()}.{get_extension(filename)}"
