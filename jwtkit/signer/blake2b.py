"""Keyed BLAKE2b signer."""

import hashlib
import hmac

from jwtkit.core.exceptions import InvalidKeyProvided
from jwtkit.signer.base import Signer
from jwtkit.signer.types import Key

MINIMUM_KEY_BITS = 256
MAXIMUM_KEY_BITS = hashlib.blake2b.MAX_KEY_SIZE * 8
DIGEST_SIZE = 32


class Blake2b(Signer):
    """Symmetric signer using BLAKE2b in keyed mode with a 256-bit output."""

    def algorithm_id(self) -> str:
        return "BLAKE2B"

    def sign(self, payload: bytes, key: Key) -> bytes:
        secret = key.raw()
        actual_bits = len(secret) * 8
        if actual_bits < MINIMUM_KEY_BITS:
            raise InvalidKeyProvided.too_short(MINIMUM_KEY_BITS, actual_bits)
        if actual_bits > MAXIMUM_KEY_BITS:
            raise InvalidKeyProvided.too_long(MAXIMUM_KEY_BITS, actual_bits)
        return hashlib.blake2b(payload, digest_size=DIGEST_SIZE, key=secret).digest()

    def verify(self, payload: bytes, signature: bytes, key: Key) -> bool:
        return hmac.compare_digest(signature, self.sign(payload, key))
