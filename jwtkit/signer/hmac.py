"""HMAC-SHA2 signers (HS256, HS384, HS512)."""

from typing import ClassVar

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from jwtkit.core.exceptions import InvalidKeyProvided
from jwtkit.signer.base import Signer
from jwtkit.signer.types import Key

__all__ = ["Hmac", "HmacSha256", "HmacSha384", "HmacSha512"]


class Hmac(Signer):
    """Symmetric signer using the same secret to sign and verify.

    Secrets shorter than the hash output are rejected, following RFC 7518,
    section 3.2.
    """

    hash_algorithm: ClassVar[type[hashes.HashAlgorithm]]
    minimum_bits: ClassVar[int]

    def sign(self, payload: bytes, key: Key) -> bytes:
        return self._mac(payload, key).finalize()

    def verify(self, payload: bytes, signature: bytes, key: Key) -> bool:
        mac = self._mac(payload, key)
        try:
            mac.verify(signature)
        except InvalidSignature:
            return False
        return True

    def _mac(self, payload: bytes, key: Key) -> hmac.HMAC:
        secret = key.raw()
        if not secret:
            raise InvalidKeyProvided.cannot_be_empty()
        actual_bits = len(secret) * 8
        if actual_bits < self.minimum_bits:
            raise InvalidKeyProvided.too_short(self.minimum_bits, actual_bits)
        mac = hmac.HMAC(secret, self.hash_algorithm())
        mac.update(payload)
        return mac


class HmacSha256(Hmac):
    hash_algorithm = hashes.SHA256
    minimum_bits = 256

    def algorithm_id(self) -> str:
        return "HS256"


class HmacSha384(Hmac):
    hash_algorithm = hashes.SHA384
    minimum_bits = 384

    def algorithm_id(self) -> str:
        return "HS384"


class HmacSha512(Hmac):
    hash_algorithm = hashes.SHA512
    minimum_bits = 512

    def algorithm_id(self) -> str:
        return "HS512"
