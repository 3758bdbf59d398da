"""Constraint interface and violation value object."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from jwtkit.token.types import Token


class ConstraintViolation(BaseModel):
    """One failed constraint.  Collected by the validator, never raised."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message: str
    constraint: str | None = None
    cause: BaseException | None = None


class Constraint(ABC):
    """A rule a token must satisfy.

    Constraints hold only the parameters they were built with and never
    modify the token, so one instance can be shared between threads.
    """

    @abstractmethod
    def check(self, token: Token) -> ConstraintViolation | None:
        """Return a violation if the token fails this constraint."""

    def violation(
        self, message: str, cause: BaseException | None = None
    ) -> ConstraintViolation:
        return ConstraintViolation(
            message=message, constraint=type(self).__name__, cause=cause
        )
