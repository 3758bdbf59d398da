"""EdDSA signer over Ed25519."""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519

from jwtkit.signer.base import AsymmetricSigner


class Eddsa(AsymmetricSigner):
    """Ed25519 signer (RFC 8037)."""

    key_type = "Ed25519"

    def algorithm_id(self) -> str:
        return "EdDSA"

    def _create_signature(
        self, private_key: ed25519.Ed25519PrivateKey, payload: bytes
    ) -> bytes:
        return private_key.sign(payload)

    def _verify_signature(
        self,
        public_key: ed25519.Ed25519PublicKey,
        payload: bytes,
        signature: bytes,
    ) -> bool:
        try:
            public_key.verify(signature, payload)
        except InvalidSignature:
            return False
        return True
