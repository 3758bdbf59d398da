"""Key material handed to signers."""

import base64
import binascii
from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, SecretBytes, SecretStr

from jwtkit.core.exceptions import (
    CannotDecodeContent,
    FileCouldNotBeRead,
    InvalidKeyProvided,
)


class Key(BaseModel):
    """Raw key material plus where it came from.

    The contents are never interpreted here; signers decide whether the
    bytes are an HMAC secret or a PEM-encoded key.  Contents and passphrase
    are secret values so they never show up in a repr or a log line.
    """

    model_config = ConfigDict(frozen=True)

    contents: SecretBytes
    passphrase: SecretStr = SecretStr("")
    source: Literal["inline", "file"] = "inline"
    path: str | None = None

    @classmethod
    def plain_text(cls, contents: str | bytes, passphrase: str = "") -> Self:
        """Build a key from literal contents."""
        raw = contents.encode() if isinstance(contents, str) else contents
        if not raw:
            raise InvalidKeyProvided.cannot_be_empty()
        return cls(contents=SecretBytes(raw), passphrase=SecretStr(passphrase))

    @classmethod
    def base64_encoded(cls, contents: str, passphrase: str = "") -> Self:
        """Build a key from standard base64-encoded contents."""
        try:
            raw = base64.b64decode(contents, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise CannotDecodeContent(
                "Error while decoding from Base64, invalid key contents"
            ) from exc
        return cls.plain_text(raw, passphrase)

    @classmethod
    def file(cls, path: str | Path, passphrase: str = "") -> Self:
        """Build a key from the contents of a file."""
        try:
            raw = Path(path).read_bytes()
        except OSError as exc:
            raise FileCouldNotBeRead(str(path), str(exc)) from exc
        if not raw:
            raise InvalidKeyProvided.cannot_be_empty()
        return cls(
            contents=SecretBytes(raw),
            passphrase=SecretStr(passphrase),
            source="file",
            path=str(path),
        )

    def raw(self) -> bytes:
        """Return the key contents unchanged."""
        return self.contents.get_secret_value()

    def password(self) -> bytes | None:
        """Return the passphrase for encrypted private keys, if any."""
        value = self.passphrase.get_secret_value()
        return value.encode() if value else None
