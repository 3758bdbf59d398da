"""Base64url and JSON encoding for the compact token serialization."""

import base64
import binascii
import json
import re
from collections.abc import Mapping
from typing import Any

from jwtkit.core.exceptions import CannotDecodeContent, CannotEncodeContent

_BASE64URL = re.compile(r"[A-Za-z0-9_-]*={0,2}")
_INVALID_BASE64 = (
    "Error while decoding from Base64Url, invalid base64 characters detected"
)


def add_padding(encoded: str) -> str:
    """Add the padding stripped from a base64url string."""
    underflow = len(encoded) % 4
    if underflow:
        return encoded + ("=" * (4 - underflow))
    return encoded


class JoseEncoder:
    """Encodes and decodes token parts.

    Stateless, so a single instance can be shared freely.
    """

    def base64url_encode(self, data: bytes) -> str:
        """Encode bytes as unpadded base64url."""
        return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")

    def base64url_decode(self, data: str) -> bytes:
        """Decode base64url, with or without padding."""
        if not _BASE64URL.fullmatch(data):
            raise CannotDecodeContent(_INVALID_BASE64)
        try:
            return base64.urlsafe_b64decode(add_padding(data.rstrip("=")))
        except (binascii.Error, ValueError) as exc:
            raise CannotDecodeContent(_INVALID_BASE64) from exc

    def json_encode(self, data: Mapping[str, Any]) -> bytes:
        """Serialize a mapping as compact JSON, keeping key order."""
        try:
            text = json.dumps(
                data,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise CannotEncodeContent(f"Error while encoding to JSON: {exc}") from exc
        return text.encode("utf-8")

    def json_decode(self, data: bytes) -> Any:
        """Deserialize JSON bytes."""
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise CannotDecodeContent("Error while decoding from JSON") from exc
