"""Claim formatters applied around JSON encoding.

Formatters are pure: each takes a claims mapping and returns a new dict.
``format_claims`` runs on the way to the wire and ``parse_claims`` on the way
back.  `ChainedFormatter` fixes the order: formatters run first to last when
encoding and last to first when decoding.
"""

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Protocol, Self

from jwtkit.core.exceptions import InvalidTokenStructure
from jwtkit.token.claims import RegisteredClaims

__all__ = [
    "ChainedFormatter",
    "ClaimsFormatter",
    "MicrosecondBasedDateConversion",
    "UnifyAudience",
    "UnixTimestampDates",
    "date_from_timestamp",
]

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
MICROSECONDS_PER_SECOND = 1_000_000
_MICROSECOND = Decimal("0.000001")


class ClaimsFormatter(Protocol):
    """Transforms claims before encoding and after decoding."""

    def format_claims(self, claims: Mapping[str, Any]) -> dict[str, Any]: ...

    def parse_claims(self, claims: Mapping[str, Any]) -> dict[str, Any]: ...


def _total_microseconds(value: datetime) -> int:
    """Return the exact number of microseconds since the epoch."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    delta = value - EPOCH
    seconds = delta.days * 86400 + delta.seconds
    return seconds * MICROSECONDS_PER_SECOND + delta.microseconds


def date_from_timestamp(value: Any) -> datetime:
    """Convert a NumericDate claim value to an aware UTC datetime.

    Accepts integers, floats and numeric strings.  The value is rounded to
    the nearest microsecond, which recovers the exact value written by
    `MicrosecondBasedDateConversion`.
    """
    if isinstance(value, datetime):
        return value
    message = f"Value is not in the allowed date format: {value!r}"
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise InvalidTokenStructure(message)
    try:
        number = Decimal(repr(value) if isinstance(value, float) else value)
        if not number.is_finite():
            raise InvalidTokenStructure(message)
        micros = int(number.quantize(_MICROSECOND) * MICROSECONDS_PER_SECOND)
        return EPOCH + timedelta(microseconds=micros)
    except (InvalidOperation, OverflowError) as exc:
        raise InvalidTokenStructure(message) from exc


class UnifyAudience:
    """Keeps the audience claim as a list on both sides of the wire.

    The builder stores audiences as a list and it is emitted as a JSON array
    even with a single entry.  Other issuers may send a single string, which
    is turned into a one-element list when parsing.
    """

    def format_claims(self, claims: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(claims)
        audience = result.get(RegisteredClaims.AUDIENCE)
        if isinstance(audience, tuple | list):
            result[RegisteredClaims.AUDIENCE] = list(audience)
        return result

    def parse_claims(self, claims: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(claims)
        if RegisteredClaims.AUDIENCE not in result:
            return result
        audience = result[RegisteredClaims.AUDIENCE]
        if isinstance(audience, str):
            result[RegisteredClaims.AUDIENCE] = [audience]
        elif not (
            isinstance(audience, list) and all(isinstance(a, str) for a in audience)
        ):
            raise InvalidTokenStructure(
                "The audience must be a string or a list of strings"
            )
        return result


class MicrosecondBasedDateConversion:
    """Encodes dates as seconds since the epoch, keeping microseconds.

    Whole seconds are written as integers.  Anything else is written as a
    decimal number with six fractional digits so that parsing yields the
    same datetime.
    """

    def format_claims(self, claims: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(claims)
        for name in RegisteredClaims.DATE_CLAIMS:
            value = result.get(name)
            if isinstance(value, datetime):
                result[name] = self._convert_date(value)
        return result

    def parse_claims(self, claims: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(claims)
        for name in RegisteredClaims.DATE_CLAIMS:
            if name in result:
                result[name] = date_from_timestamp(result[name])
        return result

    @staticmethod
    def _convert_date(value: datetime) -> int | float:
        micros = _total_microseconds(value)
        if micros % MICROSECONDS_PER_SECOND == 0:
            return micros // MICROSECONDS_PER_SECOND
        return float(Decimal(micros).scaleb(-6))


class UnixTimestampDates(MicrosecondBasedDateConversion):
    """Encodes dates as whole seconds since the epoch."""

    @staticmethod
    def _convert_date(value: datetime) -> int | float:
        return _total_microseconds(value) // MICROSECONDS_PER_SECOND


class ChainedFormatter:
    """Applies a fixed sequence of formatters."""

    def __init__(self, *formatters: ClaimsFormatter) -> None:
        self._formatters = formatters

    @classmethod
    def default(cls) -> Self:
        """Audience unification followed by microsecond dates."""
        return cls(UnifyAudience(), MicrosecondBasedDateConversion())

    @classmethod
    def with_unix_timestamp_dates(cls) -> Self:
        """Audience unification followed by whole-second dates."""
        return cls(UnifyAudience(), UnixTimestampDates())

    def format_claims(self, claims: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(claims)
        for formatter in self._formatters:
            result = formatter.format_claims(result)
        return result

    def parse_claims(self, claims: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(claims)
        for formatter in reversed(self._formatters):
            result = formatter.parse_claims(result)
        return result
