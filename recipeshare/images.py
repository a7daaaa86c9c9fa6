from __future__ import annotations

import base64
import binascii
import mimetypes
import re
import time
import uuid
from dataclasses import dataclass
from urllib.parse import urlparse

from werkzeug.utils import secure_filename

from .errors import ValidationError

_DATA_URI = re.compile(r"^data:(?P<mime>image/[\w.+-]+)?(?P<params>(;[\w-]+=[^;,]*)*)(?P<b64>;base64)?,(?P<data>.*)$", re.S)


def is_inline_image(value: str | None) -> bool:
    """Return ``True`` for any ``data:`` URI; parsing rejects non-image payloads."""

    return bool(value) and value.startswith("data:")


def is_hosted_url(value: str | None) -> bool:
    parsed = urlparse(value or "")
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass(frozen=True)
class InlineImage:
    """An image carried inside a ``data:`` URI."""

    content_type: str
    data: bytes

    @classmethod
    def parse(cls, data_uri: str) -> "InlineImage":
        match = _DATA_URI.match(data_uri or "")
        if not match or not match.group("mime"):
            raise ValidationError("Image must be a data URI with an image MIME type.")

        payload = match.group("data")
        if match.group("b64"):
            try:
                data = base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ValidationError("Image data is not valid base64.") from exc
        else:
            data = payload.encode("utf-8")

        if not data:
            raise ValidationError("Image data is empty.")
        return cls(content_type=match.group("mime"), data=data)

    @property
    def extension(self) -> str:
        return mimetypes.guess_extension(self.content_type) or ""


def build_asset_path(owner_id: str, title: str, extension: str = "") -> str:
    """Return a unique asset path namespaced by the owner."""

    owner = secure_filename(owner_id) or "anonymous"
    name = secure_filename(title) or "recipe"
    unique = f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"
    return f"recipes/{owner}/{unique}_{name}{extension}"


__all__ = ["InlineImage", "build_asset_path", "is_hosted_url", "is_inline_image"]
