"""Fluent construction of signed tokens."""

import copy
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Self

from jwtkit.core.exceptions import RegisteredClaimGiven
from jwtkit.encoding.formatters import ChainedFormatter, ClaimsFormatter
from jwtkit.encoding.jose import JoseEncoder
from jwtkit.signer.base import Signer
from jwtkit.signer.types import Key
from jwtkit.token.claims import (
    TOKEN_TYPE,
    UNSIGNED_ALGORITHM,
    RegisteredClaims,
    RegisteredHeaders,
)
from jwtkit.token.types import DataSet, Plain, Signature

__all__ = ["Builder"]


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Builder:
    """Accumulates headers and claims, then signs them into a token.

    Every method returns a new builder, so a partially configured builder
    can be reused as a template without leaking state between tokens.
    """

    def __init__(
        self,
        encoder: JoseEncoder | None = None,
        formatter: ClaimsFormatter | None = None,
    ) -> None:
        self._encoder = encoder or JoseEncoder()
        self._formatter = formatter or ChainedFormatter.default()
        self._headers: dict[str, Any] = {
            RegisteredHeaders.TYPE: TOKEN_TYPE,
            RegisteredHeaders.ALGORITHM: None,
        }
        self._claims: dict[str, Any] = {}

    def permitted_for(self, *audiences: str) -> Self:
        """Append audiences, skipping ones already present."""
        configured = list(self._claims.get(RegisteredClaims.AUDIENCE, []))
        for audience in audiences:
            if audience not in configured:
                configured.append(audience)
        return self._set_claim(RegisteredClaims.AUDIENCE, configured)

    def expires_at(self, expiration: datetime) -> Self:
        return self._set_claim(
            RegisteredClaims.EXPIRATION_TIME, _as_utc(expiration)
        )

    def identified_by(self, id: str) -> Self:
        return self._set_claim(RegisteredClaims.ID, id)

    def issued_at(self, issued_at: datetime) -> Self:
        return self._set_claim(RegisteredClaims.ISSUED_AT, _as_utc(issued_at))

    def issued_by(self, issuer: str) -> Self:
        return self._set_claim(RegisteredClaims.ISSUER, issuer)

    def can_only_be_used_after(self, not_before: datetime) -> Self:
        return self._set_claim(RegisteredClaims.NOT_BEFORE, _as_utc(not_before))

    def related_to(self, subject: str) -> Self:
        return self._set_claim(RegisteredClaims.SUBJECT, subject)

    def with_header(self, name: str, value: Any) -> Self:
        new = self._copy()
        new._headers[name] = copy.deepcopy(value)
        return new

    def with_claim(self, name: str, value: Any) -> Self:
        """Set a custom claim.

        Registered claims have dedicated methods that enforce their types,
        so passing one of their names here raises RegisteredClaimGiven.
        """
        if name in RegisteredClaims.ALL:
            raise RegisteredClaimGiven(name)
        return self._set_claim(name, value)

    def get_token(self, signer: Signer, key: Key) -> Plain:
        """Encode, sign and return the token.

        InvalidKeyProvided from the signer propagates unchanged.
        """
        headers = dict(self._headers)
        headers[RegisteredHeaders.ALGORITHM] = signer.algorithm_id()
        encoded_headers = self._encode(headers)
        encoded_claims = self._encode(self._formatter.format_claims(self._claims))

        raw = signer.sign(f"{encoded_headers}.{encoded_claims}".encode(), key)
        signature = Signature(raw=raw, encoded=self._encoder.base64url_encode(raw))
        return Plain(
            DataSet(headers, encoded_headers),
            DataSet(self._claims, encoded_claims),
            signature,
        )

    def get_unsigned_token(self) -> Plain:
        """Return an unsecured token with ``alg: none`` and no signature.

        Only for contexts where integrity is guaranteed by other means.
        Parsers accept such tokens, but no validation constraint treats them
        as signed.
        """
        headers = dict(self._headers)
        headers[RegisteredHeaders.ALGORITHM] = UNSIGNED_ALGORITHM
        encoded_headers = self._encode(headers)
        encoded_claims = self._encode(self._formatter.format_claims(self._claims))
        return Plain(
            DataSet(headers, encoded_headers),
            DataSet(self._claims, encoded_claims),
            None,
        )

    def _encode(self, data: Mapping[str, Any]) -> str:
        return self._encoder.base64url_encode(self._encoder.json_encode(data))

    def _set_claim(self, name: str, value: Any) -> Self:
        new = self._copy()
        new._claims[name] = copy.deepcopy(value)
        return new

    def _copy(self) -> Self:
        new = copy.copy(self)
        new._headers = dict(self._headers)
        new._claims = dict(self._claims)
        return new
