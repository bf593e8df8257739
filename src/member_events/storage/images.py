from __future__ import annotations

import base64
import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_local
from ..core.exceptions import ImageNotFound, ValidationError

logger = logging.getLogger(__name__)


class ImageStorage:
    """Stores uploaded member/event photos on local disk.

    Paths handed back to callers are relative to the upload root so they can be
    saved in the database and resolved again later.
    """

    def __init__(self, root: str | Path):
        self._root = Path(root)

    def save(self, upload: FileStorage) -> str:
        if upload is None or not upload.filename:
            raise ValidationError("No image file uploaded")

        filename = secure_filename(upload.filename)
        if not filename:
            raise ValidationError("Invalid image file name")

        data = upload.read()
        self._verify_image(data)

        stamp = int(now_local().timestamp() * 1000)
        name = f"{stamp}-{filename}"
        self._root.mkdir(parents=True, exist_ok=True)
        (self._root / name).write_bytes(data)
        logger.info("stored upload %s (%s bytes)", name, len(data))
        return name

    @contextmanager
    def staged(self, upload: Optional[FileStorage]) -> Iterator[Optional[str]]:
        """Save an optional upload for the duration of a block; delete it if the block raises."""
        name = self.save(upload) if upload is not None and upload.filename else None
        try:
            yield name
        except Exception:
            if name:
                self.discard(name)
            raise

    def discard(self, path: str) -> None:
        target = self.resolve(path)
        target.unlink(missing_ok=True)
        logger.info("discarded upload %s", path)

    def resolve(self, path: str) -> Path:
        candidate = (self._root / path).resolve()
        if self._root.resolve() not in candidate.parents:
            raise ImageNotFound("Image file not found on server")
        return candidate

    def fetch_image(self, path: Optional[str]) -> Optional[bytes]:
        """Raw bytes of a stored image, or None when the path is empty or missing."""
        if not path:
            return None
        try:
            target = self.resolve(path)
        except ImageNotFound:
            return None
        if not target.is_file():
            return None
        return target.read_bytes()

    def encode_base64(self, path: Optional[str]) -> Optional[str]:
        data = self.fetch_image(path)
        if data is None:
            return None
        return base64.b64encode(data).decode("ascii")

    @staticmethod
    def _verify_image(data: bytes) -> None:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError):
            raise ValidationError("Uploaded file is not a valid image")
