"""RSASSA-PKCS1-v1_5 signers (RS256, RS384, RS512)."""

from typing import ClassVar

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from jwtkit.core.exceptions import InvalidKeyProvided
from jwtkit.signer.base import AsymmetricSigner

__all__ = ["Rsa", "RsaSha256", "RsaSha384", "RsaSha512"]

MINIMUM_KEY_BITS = 2048


class Rsa(AsymmetricSigner):
    """RSA signer; keys must be at least 2048 bits long."""

    key_type = "RSA"
    hash_algorithm: ClassVar[type[hashes.HashAlgorithm]]

    def _guard_key_size(self, key: rsa.RSAPrivateKey | rsa.RSAPublicKey) -> None:
        if key.key_size < MINIMUM_KEY_BITS:
            raise InvalidKeyProvided.too_short(MINIMUM_KEY_BITS, key.key_size)

    def _create_signature(
        self, private_key: rsa.RSAPrivateKey, payload: bytes
    ) -> bytes:
        return private_key.sign(payload, padding.PKCS1v15(), self.hash_algorithm())

    def _verify_signature(
        self, public_key: rsa.RSAPublicKey, payload: bytes, signature: bytes
    ) -> bool:
        try:
            public_key.verify(
                signature, payload, padding.PKCS1v15(), self.hash_algorithm()
            )
        except InvalidSignature:
            return False
        return True


class RsaSha256(Rsa):
    hash_algorithm = hashes.SHA256

    def algorithm_id(self) -> str:
        return "RS256"


class RsaSha384(Rsa):
    hash_algorithm = hashes.SHA384

    def algorithm_id(self) -> str:
        return "RS384"


class RsaSha512(Rsa):
    hash_algorithm = hashes.SHA512

    def algorithm_id(self) -> str:
        return "RS512"
