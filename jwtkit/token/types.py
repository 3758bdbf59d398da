"""Immutable token value objects."""

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from jwtkit.token.claims import RegisteredClaims

__all__ = ["DataSet", "Plain", "Signature", "Token"]


class DataSet(Mapping[str, Any]):
    """Decoded headers or claims together with their encoded form.

    Keys keep insertion order.  Two data sets are equal when both the
    decoded values and the encoded string are equal.
    """

    __slots__ = ("_data", "_encoded")

    def __init__(self, data: Mapping[str, Any], encoded: str) -> None:
        self._data = copy.deepcopy(dict(data))
        self._encoded = encoded

    def __getitem__(self, name: str) -> Any:
        return copy.deepcopy(self._data[name])

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataSet):
            return NotImplemented
        return self._data == other._data and self._encoded == other._encoded

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DataSet({self._data!r}, {self._encoded!r})"

    def has(self, name: str) -> bool:
        return name in self._data

    def all(self) -> dict[str, Any]:
        """Return a copy of every entry."""
        return copy.deepcopy(self._data)

    def to_string(self) -> str:
        """Return the base64url-encoded form sent on the wire."""
        return self._encoded


class Signature(BaseModel):
    """Raw signature bytes and their base64url encoding."""

    model_config = ConfigDict(frozen=True)

    raw: bytes
    encoded: str


class Token(ABC):
    """A parsed or freshly built token."""

    @abstractmethod
    def headers(self) -> DataSet: ...

    @abstractmethod
    def claims(self) -> DataSet: ...

    @abstractmethod
    def signature(self) -> Signature | None: ...

    def payload(self) -> str:
        """Return the signing input: encoded headers and claims joined by a dot.

        Always derived from the encoded parts held by the token, so
        verification checks exactly what was transmitted.
        """
        return f"{self.headers().to_string()}.{self.claims().to_string()}"

    def to_string(self) -> str:
        """Return the compact serialization."""
        signature = self.signature()
        if signature is None:
            return self.payload()
        return f"{self.payload()}.{signature.encoded}"

    def __str__(self) -> str:
        return self.to_string()

    def is_permitted_for(self, audience: str) -> bool:
        permitted = self.claims().get(RegisteredClaims.AUDIENCE, [])
        if isinstance(permitted, str):
            return permitted == audience
        return isinstance(permitted, list) and audience in permitted

    def is_identified_by(self, id: str) -> bool:
        return self.claims().get(RegisteredClaims.ID) == id

    def is_related_to(self, subject: str) -> bool:
        return self.claims().get(RegisteredClaims.SUBJECT) == subject

    def has_been_issued_by(self, *issuers: str) -> bool:
        return self.claims().get(RegisteredClaims.ISSUER) in issuers

    def has_been_issued_before(self, now: datetime) -> bool:
        return now >= self.claims().get(RegisteredClaims.ISSUED_AT, now)

    def is_minimum_time_before(self, now: datetime) -> bool:
        return now >= self.claims().get(RegisteredClaims.NOT_BEFORE, now)

    def is_expired(self, now: datetime) -> bool:
        if not self.claims().has(RegisteredClaims.EXPIRATION_TIME):
            return False
        return now >= self.claims()[RegisteredClaims.EXPIRATION_TIME]


class Plain(Token):
    """Concrete token.

    ``signature`` is None only for tokens explicitly built or sent with
    ``alg: none``; those serialize as two parts.
    """

    __slots__ = ("_claims", "_headers", "_signature")

    def __init__(
        self,
        headers: DataSet,
        claims: DataSet,
        signature: Signature | None,
    ) -> None:
        self._headers = headers
        self._claims = claims
        self._signature = signature

    def headers(self) -> DataSet:
        return self._headers

    def claims(self) -> DataSet:
        return self._claims

    def signature(self) -> Signature | None:
        return self._signature

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plain):
            return NotImplemented
        return (
            self._headers == other._headers
            and self._claims == other._claims
            and self._signature == other._signature
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Plain({self.to_string()!r})"
