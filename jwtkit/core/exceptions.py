"""Exception hierarchy for token encoding, signing, parsing and validation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jwtkit.validation.types import ConstraintViolation

__all__ = [
    "CannotDecodeContent",
    "CannotEncodeContent",
    "CannotValidateARegisteredClaim",
    "ConversionFailed",
    "FileCouldNotBeRead",
    "InvalidKeyProvided",
    "InvalidTokenStructure",
    "JWTError",
    "LeewayCannotBeNegative",
    "NoConstraintsGiven",
    "RegisteredClaimGiven",
    "RequiredConstraintsViolated",
    "StructuralParseFailure",
    "UnknownAlgorithm",
    "UnsupportedHeaderFound",
]


class JWTError(Exception):
    """Base class for every error raised by jwtkit."""


class StructuralParseFailure(JWTError):
    """A compact token or one of its parts is malformed."""


class CannotDecodeContent(StructuralParseFailure):
    """Content could not be decoded from base64url or JSON."""


class InvalidTokenStructure(StructuralParseFailure):
    """The token does not have the structure of a compact JWT."""


class UnsupportedHeaderFound(StructuralParseFailure):
    """The token uses a header this library cannot process."""


class CannotEncodeContent(JWTError):
    """Content could not be encoded as JSON."""


class ConversionFailed(JWTError):
    """An ECDSA signature could not be converted between encodings."""


class UnknownAlgorithm(JWTError):
    """No signer is registered for the requested algorithm."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"Unknown signing algorithm: {algorithm}")
        self.algorithm = algorithm


class FileCouldNotBeRead(JWTError):
    """A key file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f'The path "{path}" does not contain a valid key file')
        self.path = path
        self.reason = reason


class InvalidKeyProvided(JWTError):
    """The key cannot be used with the requested signer.

    Raised when the key material cannot be parsed, is of the wrong type or
    size for the algorithm, or is empty.  This is a caller error, never a
    token defect, so it is not folded into validation results.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual

    @classmethod
    def cannot_be_parsed(cls, reason: str) -> InvalidKeyProvided:
        return cls(f"It was not possible to parse your key, reason: {reason}")

    @classmethod
    def incompatible_key_type(
        cls, expected: str, actual: str
    ) -> InvalidKeyProvided:
        return cls(
            f'The type of the provided key is not "{expected}", '
            f'"{actual}" provided',
            expected=expected,
            actual=actual,
        )

    @classmethod
    def incompatible_key_length(
        cls, expected: int, actual: int
    ) -> InvalidKeyProvided:
        return cls(
            f"The length of the provided key is different than {expected} "
            f"bits, {actual} bits provided",
            expected=str(expected),
            actual=str(actual),
        )

    @classmethod
    def too_short(cls, expected: int, actual: int) -> InvalidKeyProvided:
        return cls(
            f"Key provided is shorter than {expected} bits, only {actual} "
            "bits provided",
            expected=str(expected),
            actual=str(actual),
        )

    @classmethod
    def too_long(cls, expected: int, actual: int) -> InvalidKeyProvided:
        return cls(
            f"Key provided is longer than {expected} bits, {actual} bits "
            "provided",
            expected=str(expected),
            actual=str(actual),
        )

    @classmethod
    def cannot_be_empty(cls) -> InvalidKeyProvided:
        return cls("Key cannot be empty")


class RegisteredClaimGiven(JWTError):
    """A registered claim was passed to the generic claim setter."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f'Builder.with_claim() is meant to be used for non-registered '
            f'claims, check the documentation on how to set claim "{name}"'
        )
        self.name = name


class CannotValidateARegisteredClaim(JWTError):
    """A generic claim constraint was given a registered claim name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f'The claim "{name}" is a registered claim, another constraint '
            "must be used to validate its value"
        )
        self.name = name


class LeewayCannotBeNegative(JWTError):
    """A timing constraint was created with a negative leeway."""

    def __init__(self) -> None:
        super().__init__("Leeway cannot be negative")


class NoConstraintsGiven(JWTError):
    """Validation was requested without any constraint."""

    def __init__(self) -> None:
        super().__init__("No constraint given.")


class RequiredConstraintsViolated(JWTError):
    """One or more constraints failed during assertive validation."""

    def __init__(self, violations: Sequence[ConstraintViolation]) -> None:
        details = "\n".join(f"- {v.message}" for v in violations)
        super().__init__(
            "The token violates some mandatory constraints, details:\n"
            + details
        )
        self.violations = tuple(violations)
