"""Built-in validation constraints."""

from datetime import datetime, timedelta
from typing import Any

from jwtkit.core.clock import Clock
from jwtkit.core.exceptions import (
    CannotValidateARegisteredClaim,
    LeewayCannotBeNegative,
    RequiredConstraintsViolated,
)
from jwtkit.signer.base import Signer
from jwtkit.signer.types import Key
from jwtkit.token.claims import RegisteredClaims, RegisteredHeaders
from jwtkit.token.types import Token
from jwtkit.validation.types import Constraint, ConstraintViolation

__all__ = [
    "HasClaim",
    "HasClaimWithValue",
    "IdentifiedBy",
    "IssuedBy",
    "LooseValidAt",
    "PermittedFor",
    "RelatedTo",
    "SignedWith",
    "SignedWithOneInSet",
    "StrictValidAt",
]


class IdentifiedBy(Constraint):
    """The ``jti`` claim equals the expected id."""

    def __init__(self, id: str) -> None:
        self._id = id

    def check(self, token: Token) -> ConstraintViolation | None:
        if not token.is_identified_by(self._id):
            return self.violation("The token is not identified with the expected ID")
        return None


class IssuedBy(Constraint):
    """The ``iss`` claim is one of the accepted issuers."""

    def __init__(self, *issuers: str) -> None:
        self._issuers = issuers

    def check(self, token: Token) -> ConstraintViolation | None:
        if not token.has_been_issued_by(*self._issuers):
            return self.violation("The token was not issued by the given issuers")
        return None


class PermittedFor(Constraint):
    """The audience list contains the expected audience.

    A token without an ``aud`` claim fails.
    """

    def __init__(self, audience: str) -> None:
        self._audience = audience

    def check(self, token: Token) -> ConstraintViolation | None:
        if not token.is_permitted_for(self._audience):
            return self.violation(
                "The token is not allowed to be used by this audience"
            )
        return None


class RelatedTo(Constraint):
    """The ``sub`` claim equals the expected subject."""

    def __init__(self, subject: str) -> None:
        self._subject = subject

    def check(self, token: Token) -> ConstraintViolation | None:
        if not token.is_related_to(self._subject):
            return self.violation("The token is not related to the expected subject")
        return None


class HasClaim(Constraint):
    """A custom claim is present, whatever its value."""

    def __init__(self, claim: str) -> None:
        if claim in RegisteredClaims.ALL:
            raise CannotValidateARegisteredClaim(claim)
        self._claim = claim

    def check(self, token: Token) -> ConstraintViolation | None:
        if not token.claims().has(self._claim):
            return self.violation(f'The token does not have the claim "{self._claim}"')
        return None


class HasClaimWithValue(Constraint):
    """A custom claim is present and equals the expected value."""

    def __init__(self, claim: str, expected: Any) -> None:
        if claim in RegisteredClaims.ALL:
            raise CannotValidateARegisteredClaim(claim)
        self._claim = claim
        self._expected = expected

    def check(self, token: Token) -> ConstraintViolation | None:
        claims = token.claims()
        if not claims.has(self._claim):
            return self.violation(f'The token does not have the claim "{self._claim}"')
        if claims[self._claim] != self._expected:
            return self.violation(
                f'The claim "{self._claim}" does not have the expected value'
            )
        return None


class SignedWith(Constraint):
    """The token was signed by the given algorithm and key.

    The ``alg`` header must match the signer before the signature is
    checked.  InvalidKeyProvided from the signer is not caught: a key of the
    wrong type is a configuration error, not a token defect.
    """

    def __init__(self, signer: Signer, key: Key) -> None:
        self._signer = signer
        self._key = key

    def check(self, token: Token) -> ConstraintViolation | None:
        algorithm = token.headers().get(RegisteredHeaders.ALGORITHM)
        if algorithm != self._signer.algorithm_id():
            return self.violation("Token signer mismatch")
        signature = token.signature()
        if signature is None:
            return self.violation("Token signature mismatch")
        valid = self._signer.verify(
            token.payload().encode(), signature.raw, self._key
        )
        if not valid:
            return self.violation("Token signature mismatch")
        return None


class SignedWithOneInSet(Constraint):
    """The token satisfies at least one of several `SignedWith` constraints.

    Used while rotating keys, where tokens signed with the previous key
    should still verify.
    """

    def __init__(self, *constraints: SignedWith) -> None:
        self._constraints = constraints

    def check(self, token: Token) -> ConstraintViolation | None:
        violations = []
        for constraint in self._constraints:
            violation = constraint.check(token)
            if violation is None:
                return None
            violations.append(violation)
        details = "\n".join(f"- {v.message}" for v in violations)
        return self.violation(
            "It was not possible to verify the signature of the token, "
            f"reasons:\n{details}",
            cause=RequiredConstraintsViolated(violations),
        )


class _ValidAt(Constraint):
    """Shared timing checks for `LooseValidAt` and `StrictValidAt`."""

    def __init__(self, clock: Clock, leeway: timedelta | None = None) -> None:
        leeway = leeway or timedelta(0)
        if leeway < timedelta(0):
            raise LeewayCannotBeNegative()
        self._clock = clock
        self._leeway = leeway

    def _check_times(
        self, token: Token, now: datetime
    ) -> ConstraintViolation | None:
        if not token.has_been_issued_before(now + self._leeway):
            return self.violation("The token was issued in the future")
        if not token.is_minimum_time_before(now + self._leeway):
            return self.violation("The token cannot be used yet")
        if token.is_expired(now - self._leeway):
            return self.violation("The token is expired")
        return None


class LooseValidAt(_ValidAt):
    """Time claims, where present, allow use at the current time.

    Missing ``exp``, ``nbf`` or ``iat`` claims impose no restriction.
    """

    def check(self, token: Token) -> ConstraintViolation | None:
        return self._check_times(token, self._clock.now())


class StrictValidAt(_ValidAt):
    """Like `LooseValidAt`, but ``exp``, ``nbf`` and ``iat`` are required."""

    _REQUIRED = (
        (RegisteredClaims.EXPIRATION_TIME, '"Expiration Time" claim missing'),
        (RegisteredClaims.NOT_BEFORE, '"Not Before" claim missing'),
        (RegisteredClaims.ISSUED_AT, '"Issued At" claim missing'),
    )

    def check(self, token: Token) -> ConstraintViolation | None:
        claims = token.claims()
        for name, message in self._REQUIRED:
            if not claims.has(name):
                return self.violation(message)
        return self._check_times(token, self._clock.now())
