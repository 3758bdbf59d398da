"""Conversion between DER and fixed-length ECDSA signatures.

``cryptography`` produces and consumes ECDSA signatures as a DER-encoded
``SEQUENCE { INTEGER r, INTEGER s }``.  JWS (RFC 7518, section 3.4) instead
uses ``r || s``, each as an unsigned big-endian integer left-padded with
zeros to the coordinate length of the curve.
"""

from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from jwtkit.core.exceptions import ConversionFailed

__all__ = ["der_to_fixed", "fixed_to_der", "point_length_for"]


def point_length_for(curve_bits: int) -> int:
    """Return the byte length of one coordinate on a curve."""
    return (curve_bits + 7) // 8


def der_to_fixed(der: bytes, point_length: int) -> bytes:
    """Convert a DER signature to ``r || s`` of ``2 * point_length`` bytes."""
    try:
        r, s = decode_dss_signature(der)
    except ValueError as exc:
        raise ConversionFailed("Invalid DER-encoded signature") from exc
    limit = 1 << (point_length * 8)
    if not (0 <= r < limit and 0 <= s < limit):
        raise ConversionFailed(
            f"Signature integer does not fit in {point_length} bytes"
        )
    return r.to_bytes(point_length, "big") + s.to_bytes(point_length, "big")


def fixed_to_der(signature: bytes, point_length: int) -> bytes:
    """Convert an ``r || s`` signature back to DER."""
    if len(signature) != 2 * point_length:
        raise ConversionFailed(
            f"Invalid signature length: expected {2 * point_length} bytes, "
            f"got {len(signature)}"
        )
    r = int.from_bytes(signature[:point_length], "big")
    s = int.from_bytes(signature[point_length:], "big")
    return encode_dss_signature(r, s)
