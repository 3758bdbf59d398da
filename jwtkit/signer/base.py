"""Signer interface and shared key handling for asymmetric algorithms."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dh, dsa, ec, ed448, ed25519, rsa
from cryptography.hazmat.primitives.asymmetric.types import (
    PrivateKeyTypes,
    PublicKeyTypes,
)

from jwtkit.core.exceptions import InvalidKeyProvided
from jwtkit.signer.types import Key

__all__ = [
    "AsymmetricSigner",
    "Signer",
    "describe_key_type",
    "load_private_key",
    "load_public_key",
]

_KEY_TYPES: tuple[tuple[tuple[type, ...], str], ...] = (
    ((rsa.RSAPrivateKey, rsa.RSAPublicKey), "RSA"),
    ((ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey), "EC"),
    ((dsa.DSAPrivateKey, dsa.DSAPublicKey), "DSA"),
    ((dh.DHPrivateKey, dh.DHPublicKey), "DH"),
    ((ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey), "Ed25519"),
    ((ed448.Ed448PrivateKey, ed448.Ed448PublicKey), "Ed448"),
)


class Signer(ABC):
    """Creates and verifies signatures for one JWS algorithm."""

    @abstractmethod
    def algorithm_id(self) -> str:
        """Return the value written to the ``alg`` header."""

    @abstractmethod
    def sign(self, payload: bytes, key: Key) -> bytes:
        """Sign the payload, raising InvalidKeyProvided for unusable keys."""

    @abstractmethod
    def verify(self, payload: bytes, signature: bytes, key: Key) -> bool:
        """Return whether the signature matches the payload."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.algorithm_id()!r})"


def describe_key_type(key: Any) -> str:
    """Return the short family name of a parsed key."""
    for classes, name in _KEY_TYPES:
        if isinstance(key, classes):
            return name
    return "unknown"


def load_private_key(key: Key) -> PrivateKeyTypes:
    """Parse a PEM private key, decrypting it with the key passphrase."""
    try:
        return serialization.load_pem_private_key(
            key.raw(), password=key.password()
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyProvided.cannot_be_parsed(str(exc)) from exc


def load_public_key(key: Key) -> PublicKeyTypes:
    """Parse a PEM public key or X.509 certificate."""
    contents = key.raw()
    try:
        if b"-----BEGIN CERTIFICATE-----" in contents:
            return x509.load_pem_x509_certificate(contents).public_key()
        return serialization.load_pem_public_key(contents)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyProvided.cannot_be_parsed(str(exc)) from exc


class AsymmetricSigner(Signer):
    """Signer backed by a public/private key pair.

    Keys are parsed and checked against ``key_type`` before any
    cryptographic call is made.  Subclasses add size checks in
    `_guard_key_size` and do the actual work in `_create_signature` and
    `_verify_signature`.
    """

    key_type: ClassVar[str]

    def sign(self, payload: bytes, key: Key) -> bytes:
        private_key = load_private_key(key)
        self._guard_key(private_key)
        return self._create_signature(private_key, payload)

    def verify(self, payload: bytes, signature: bytes, key: Key) -> bool:
        public_key = load_public_key(key)
        self._guard_key(public_key)
        return self._verify_signature(public_key, payload, signature)

    def _guard_key(self, key: Any) -> None:
        actual = describe_key_type(key)
        if actual != self.key_type:
            raise InvalidKeyProvided.incompatible_key_type(self.key_type, actual)
        self._guard_key_size(key)

    def _guard_key_size(self, key: Any) -> None:
        """Reject keys of the right type but an unusable size."""

    @abstractmethod
    def _create_signature(self, private_key: Any, payload: bytes) -> bytes: ...

    @abstractmethod
    def _verify_signature(
        self, public_key: Any, payload: bytes, signature: bytes
    ) -> bool: ...
