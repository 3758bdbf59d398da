"""Parsing of compact token strings."""

from typing import Any

from jwtkit.core.exceptions import InvalidTokenStructure, UnsupportedHeaderFound
from jwtkit.encoding.formatters import ChainedFormatter, ClaimsFormatter
from jwtkit.encoding.jose import JoseEncoder
from jwtkit.token.claims import TOKEN_TYPE, UNSIGNED_ALGORITHM, RegisteredHeaders
from jwtkit.token.types import DataSet, Plain, Signature

__all__ = ["Parser"]

SIGNED_PARTS = 3
UNSIGNED_PARTS = 2


class Parser:
    """Turns a compact serialization into a `Plain` token.

    Parsing checks structure only.  Signatures and claims are checked
    afterwards by a `~jwtkit.validation.validator.Validator`.
    """

    def __init__(
        self,
        decoder: JoseEncoder | None = None,
        formatter: ClaimsFormatter | None = None,
    ) -> None:
        self._decoder = decoder or JoseEncoder()
        self._formatter = formatter or ChainedFormatter.default()

    def parse(self, jwt: str) -> Plain:
        """Parse a token.

        Raises
        ------
        jwtkit.core.exceptions.StructuralParseFailure
            The string is not a well-formed token.
        """
        parts = jwt.split(".")
        if len(parts) not in (SIGNED_PARTS, UNSIGNED_PARTS):
            raise InvalidTokenStructure("The JWT string must have one or two dots")
        encoded_headers, encoded_claims = parts[0], parts[1]

        headers = self._parse_headers(encoded_headers)
        unsigned = headers.get(RegisteredHeaders.ALGORITHM) == UNSIGNED_ALGORITHM
        if len(parts) == UNSIGNED_PARTS and not unsigned:
            raise InvalidTokenStructure(
                "Only tokens with the \"none\" algorithm may omit the signature"
            )
        claims = self._parse_claims(encoded_claims)

        signature = None
        if len(parts) == SIGNED_PARTS:
            raw = self._decoder.base64url_decode(parts[2])
            signature = Signature(
                raw=raw, encoded=self._decoder.base64url_encode(raw)
            )

        return Plain(
            DataSet(headers, encoded_headers),
            DataSet(claims, encoded_claims),
            signature,
        )

    def _parse_headers(self, data: str) -> dict[str, Any]:
        headers = self._decode_object(data, "headers")
        if RegisteredHeaders.ENCRYPTION in headers:
            raise UnsupportedHeaderFound("Encryption is not supported yet")
        headers.setdefault(RegisteredHeaders.TYPE, TOKEN_TYPE)
        return headers

    def _parse_claims(self, data: str) -> dict[str, Any]:
        claims = self._decode_object(data, "claims")
        return self._formatter.parse_claims(claims)

    def _decode_object(self, data: str, part: str) -> dict[str, Any]:
        decoded = self._decoder.json_decode(self._decoder.base64url_decode(data))
        if not isinstance(decoded, dict):
            raise InvalidTokenStructure(f"{part} must be a JSON object")
        return decoded
