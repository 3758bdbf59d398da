"""Lookup of signers by algorithm id."""

from collections.abc import Mapping
from types import MappingProxyType

from jwtkit.core.exceptions import UnknownAlgorithm
from jwtkit.signer.base import Signer
from jwtkit.signer.blake2b import Blake2b
from jwtkit.signer.ecdsa import EcdsaSha256, EcdsaSha384, EcdsaSha512
from jwtkit.signer.eddsa import Eddsa
from jwtkit.signer.hmac import HmacSha256, HmacSha384, HmacSha512
from jwtkit.signer.rsa import RsaSha256, RsaSha384, RsaSha512

__all__ = ["SIGNERS", "get_signer"]


def _build_registry(*signers: Signer) -> Mapping[str, Signer]:
    return MappingProxyType({s.algorithm_id(): s for s in signers})


SIGNERS = _build_registry(
    HmacSha256(),
    HmacSha384(),
    HmacSha512(),
    Blake2b(),
    RsaSha256(),
    RsaSha384(),
    RsaSha512(),
    EcdsaSha256(),
    EcdsaSha384(),
    EcdsaSha512(),
    Eddsa(),
)
"""Every supported signer, keyed by ``alg`` header value.  Read-only."""


def get_signer(algorithm_id: str) -> Signer:
    """Return the signer for an algorithm id."""
    try:
        return SIGNERS[algorithm_id]
    except KeyError:
        raise UnknownAlgorithm(algorithm_id) from None
