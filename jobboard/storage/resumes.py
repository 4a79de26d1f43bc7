import enum
import logging
import os
import secrets
import time
from pathlib import Path
from typing import Iterable, Optional

import aiofiles
import aiofiles.os

from jobboard.core.config import settings
from jobboard.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Extension used when the uploaded filename has none we recognise.
EXTENSION_BY_TYPE = {
    "application/pdf": ".pdf",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}


class ResumeRejectedReason(str, enum.Enum):
    EMPTY = "empty"
    TOO_LARGE = "too_large"
    BAD_TYPE = "bad_type"


class ResumeRejected(ValidationError):
    """Raised when an uploaded resume is refused before anything is written."""

    def __init__(self, reason: ResumeRejectedReason, message: str):
        self.reason = reason
        super().__init__(message)


class ResumeStore:
    """
    Disk-backed store for uploaded resumes.

    Files land in `base_dir` and are referenced by a public-relative locator
    such as "/uploads/resume-1700000000000-123456789.pdf".
    """

    PUBLIC_PREFIX = "/uploads/"

    def __init__(
        self,
        base_dir: str | os.PathLike,
        max_size: int,
        allowed_types: Iterable[str],
    ):
        self.base_dir = Path(base_dir)
        self.max_size = max_size
        self.allowed_types = frozenset(allowed_types)

    def validate(self, content: bytes, content_type: Optional[str]) -> None:
        if not content:
            raise ResumeRejected(ResumeRejectedReason.EMPTY, "Resume file is required")
        if len(content) > self.max_size:
            raise ResumeRejected(
                ResumeRejectedReason.TOO_LARGE,
                f"Resume must be at most {self.max_size // (1024 * 1024)} MB",
            )
        if content_type not in self.allowed_types:
            raise ResumeRejected(
                ResumeRejectedReason.BAD_TYPE,
                "Only PDF and Word documents are allowed",
            )

    def _generate_name(self, filename: Optional[str], content_type: str) -> str:
        ext = os.path.splitext(filename or "")[1].lower()
        if ext not in EXTENSION_BY_TYPE.values():
            ext = EXTENSION_BY_TYPE.get(content_type, "")
        return f"resume-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"

    async def store(self, content: bytes, content_type: Optional[str], filename: Optional[str] = None) -> str:
        """Validates and writes a resume, returning its locator."""
        self.validate(content, content_type)

        self.base_dir.mkdir(parents=True, exist_ok=True)
        name = self._generate_name(filename, content_type)
        path = self.base_dir / name

        async with aiofiles.open(path, 'wb') as f:
            await f.write(content)

        logger.info(f"STORAGE: Saved resume '{filename}' ({len(content)} bytes) as {name}.")
        return f"{self.PUBLIC_PREFIX}{name}"

    def resolve(self, locator: str) -> Optional[Path]:
        """Maps a locator back to a file inside base_dir, or None."""
        if not locator or not locator.startswith(self.PUBLIC_PREFIX):
            return None
        name = locator[len(self.PUBLIC_PREFIX):]
        # Locators are flat names; anything with a path component is foreign.
        if not name or os.path.basename(name) != name:
            return None
        path = self.base_dir / name
        return path if path.is_file() else None

    async def discard(self, locator: str) -> None:
        """Removes a stored resume. Missing files are ignored."""
        path = self.resolve(locator)
        if path is None:
            return
        try:
            await aiofiles.os.remove(path)
            logger.info(f"STORAGE: Discarded {locator}.")
        except FileNotFoundError:
            pass


def get_resume_store() -> ResumeStore:
    """FastAPI dependency returning the configured store."""
    return ResumeStore(
        base_dir=settings.UPLOAD_DIR,
        max_size=settings.MAX_RESUME_SIZE,
        allowed_types=settings.ALLOWED_RESUME_TYPES,
    )
