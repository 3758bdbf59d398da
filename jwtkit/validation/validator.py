"""Evaluation of constraints against a token."""

import structlog

from jwtkit.core.exceptions import NoConstraintsGiven, RequiredConstraintsViolated
from jwtkit.token.types import Token
from jwtkit.validation.types import Constraint, ConstraintViolation

__all__ = ["Validator"]

logger = structlog.get_logger(__name__)


class Validator:
    """Checks tokens against constraints.

    Errors raised by a constraint itself, such as InvalidKeyProvided from
    `~jwtkit.validation.constraints.SignedWith`, propagate immediately
    from both entry points.
    """

    def validate(self, token: Token, *constraints: Constraint) -> bool:
        """Return whether the token satisfies every constraint.

        Stops at the first failing constraint.
        """
        if not constraints:
            raise NoConstraintsGiven()
        for constraint in constraints:
            violation = constraint.check(token)
            if violation is not None:
                logger.debug(
                    "Token failed validation",
                    constraint=violation.constraint,
                    reason=violation.message,
                )
                return False
        return True

    def assert_valid(self, token: Token, *constraints: Constraint) -> None:
        """Raise unless the token satisfies every constraint.

        Every constraint is evaluated and all failures are reported together
        in a single RequiredConstraintsViolated.
        """
        if not constraints:
            raise NoConstraintsGiven()
        violations: list[ConstraintViolation] = []
        for constraint in constraints:
            violation = constraint.check(token)
            if violation is not None:
                violations.append(violation)
        if violations:
            logger.debug(
                "Token violates required constraints",
                constraints=[v.constraint for v in violations],
            )
            raise RequiredConstraintsViolated(violations)
