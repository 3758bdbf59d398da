"""Names of registered claims and headers."""

from typing import Final


class RegisteredClaims:
    """Claim names defined by RFC 7519, section 4.1."""

    AUDIENCE: Final = "aud"
    EXPIRATION_TIME: Final = "exp"
    ID: Final = "jti"
    ISSUED_AT: Final = "iat"
    ISSUER: Final = "iss"
    NOT_BEFORE: Final = "nbf"
    SUBJECT: Final = "sub"

    ALL: Final = frozenset({"aud", "exp", "jti", "iat", "iss", "nbf", "sub"})
    DATE_CLAIMS: Final = ("iat", "nbf", "exp")


class RegisteredHeaders:
    """Header names used by the compact serialization."""

    ALGORITHM: Final = "alg"
    TYPE: Final = "typ"
    CONTENT_TYPE: Final = "cty"
    KEY_ID: Final = "kid"
    ENCRYPTION: Final = "enc"


TOKEN_TYPE = "JWT"
UNSIGNED_ALGORITHM = "none"
