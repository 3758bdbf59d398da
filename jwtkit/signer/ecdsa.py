"""ECDSA signers (ES256, ES384, ES512)."""

from typing import ClassVar

import structlog
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from jwtkit.core.exceptions import InvalidKeyProvided
from jwtkit.signer.base import AsymmetricSigner
from jwtkit.signer.conversion import der_to_fixed, fixed_to_der, point_length_for

__all__ = ["Ecdsa", "EcdsaSha256", "EcdsaSha384", "EcdsaSha512"]

logger = structlog.get_logger(__name__)


class Ecdsa(AsymmetricSigner):
    """ECDSA signer producing fixed-length ``r || s`` signatures.

    The key must be on the curve matching the algorithm.  Signatures whose
    length differs from ``2 * point_length`` are rejected before the
    verification primitive is called.
    """

    key_type = "EC"
    hash_algorithm: ClassVar[type[hashes.HashAlgorithm]]
    curve_bits: ClassVar[int]

    @property
    def point_length(self) -> int:
        return point_length_for(self.curve_bits)

    @property
    def signature_length(self) -> int:
        return 2 * self.point_length

    def _guard_key_size(
        self, key: ec.EllipticCurvePrivateKey | ec.EllipticCurvePublicKey
    ) -> None:
        if key.curve.key_size != self.curve_bits:
            raise InvalidKeyProvided.incompatible_key_length(
                self.curve_bits, key.curve.key_size
            )

    def _create_signature(
        self, private_key: ec.EllipticCurvePrivateKey, payload: bytes
    ) -> bytes:
        der = private_key.sign(payload, ec.ECDSA(self.hash_algorithm()))
        return der_to_fixed(der, self.point_length)

    def _verify_signature(
        self,
        public_key: ec.EllipticCurvePublicKey,
        payload: bytes,
        signature: bytes,
    ) -> bool:
        if len(signature) != self.signature_length:
            logger.debug(
                "Rejecting ECDSA signature with invalid length",
                algorithm=self.algorithm_id(),
                expected=self.signature_length,
                actual=len(signature),
            )
            return False
        der = fixed_to_der(signature, self.point_length)
        try:
            public_key.verify(der, payload, ec.ECDSA(self.hash_algorithm()))
        except InvalidSignature:
            return False
        return True


class EcdsaSha256(Ecdsa):
    hash_algorithm = hashes.SHA256
    curve_bits = 256

    def algorithm_id(self) -> str:
        return "ES256"


class EcdsaSha384(Ecdsa):
    hash_algorithm = hashes.SHA384
    curve_bits = 384

    def algorithm_id(self) -> str:
        return "ES384"


class EcdsaSha512(Ecdsa):
    hash_algorithm = hashes.SHA512
    curve_bits = 521

    def algorithm_id(self) -> str:
        return "ES512"
