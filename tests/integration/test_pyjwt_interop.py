"""Interoperability tests against PyJWT."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from jwtkit.core.clock import SystemClock
from jwtkit.core.exceptions import RequiredConstraintsViolated
from jwtkit.signer.registry import get_signer
from jwtkit.signer.types import Key
from jwtkit.token.builder import Builder
from jwtkit.token.parser import Parser
from jwtkit.validation.constraints import (
    IssuedBy,
    LooseValidAt,
    PermittedFor,
    RelatedTo,
    SignedWith,
)
from jwtkit.validation.validator import Validator
from tests.keys import (
    EC256_PRIVATE,
    EC256_PUBLIC,
    EC384_PRIVATE,
    EC384_PUBLIC,
    EC521_PRIVATE,
    EC521_PUBLIC,
    ED25519_PRIVATE,
    ED25519_PUBLIC,
    HMAC_SECRET,
    RSA_PRIVATE,
    RSA_PUBLIC,
)

ISSUER = "https://api.abc.com"
AUDIENCE = "https://client.abc.com"

HS512_SECRET = HMAC_SECRET * 2

ALGORITHMS = [
    ("HS256", HMAC_SECRET, HMAC_SECRET),
    ("HS512", HS512_SECRET, HS512_SECRET),
    ("RS256", RSA_PRIVATE, RSA_PUBLIC),
    ("RS512", RSA_PRIVATE, RSA_PUBLIC),
    ("ES256", EC256_PRIVATE, EC256_PUBLIC),
    ("ES384", EC384_PRIVATE, EC384_PUBLIC),
    ("ES512", EC521_PRIVATE, EC521_PUBLIC),
    ("EdDSA", ED25519_PRIVATE, ED25519_PUBLIC),
]


@pytest.mark.parametrize(("algorithm", "private", "public"), ALGORITHMS)
class TestPyJWTReadsOurTokens:
    """Tokens issued here decode with PyJWT."""

    def test_decode(self, algorithm: str, private: str, public: str) -> None:
        now = (datetime.now(UTC) - timedelta(seconds=5)).replace(microsecond=654321)
        token = (
            Builder()
            .issued_by(ISSUER)
            .permitted_for(AUDIENCE)
            .related_to("alice")
            .issued_at(now)
            .expires_at(now + timedelta(minutes=5))
            .with_claim("user", {"name": "testing"})
            .get_token(get_signer(algorithm), Key.plain_text(private))
        )
        claims = jwt.decode(
            token.to_string(),
            public,
            algorithms=[algorithm],
            audience=AUDIENCE,
            issuer=ISSUER,
        )
        assert claims["sub"] == "alice"
        assert claims["aud"] == [AUDIENCE]
        assert claims["user"] == {"name": "testing"}
        assert claims["exp"] == pytest.approx((now + timedelta(minutes=5)).timestamp())

    def test_header(self, algorithm: str, private: str, public: str) -> None:
        token = Builder().with_header("kid", "k1").get_token(
            get_signer(algorithm), Key.plain_text(private)
        )
        header = jwt.get_unverified_header(token.to_string())
        assert header == {"typ": "JWT", "alg": algorithm, "kid": "k1"}


@pytest.mark.parametrize(("algorithm", "private", "public"), ALGORITHMS)
class TestWeReadPyJWTTokens:
    """Tokens issued by PyJWT parse and validate here."""

    def test_validate(self, algorithm: str, private: str, public: str) -> None:
        now = datetime.now(UTC)
        encoded = jwt.encode(
            {
                "iss": ISSUER,
                "aud": AUDIENCE,
                "sub": "alice",
                "iat": now,
                "nbf": now,
                "exp": now + timedelta(minutes=5),
            },
            private,
            algorithm=algorithm,
        )
        token = Parser().parse(encoded)
        assert token.claims()["aud"] == [AUDIENCE]
        assert isinstance(token.claims()["exp"], datetime)

        Validator().assert_valid(
            token,
            SignedWith(get_signer(algorithm), Key.plain_text(public)),
            IssuedBy(ISSUER),
            PermittedFor(AUDIENCE),
            RelatedTo("alice"),
            LooseValidAt(SystemClock(), timedelta(seconds=5)),
        )

    def test_expired(self, algorithm: str, private: str, public: str) -> None:
        past = datetime.now(UTC) - timedelta(hours=1)
        encoded = jwt.encode({"exp": past}, private, algorithm=algorithm)
        token = Parser().parse(encoded)
        with pytest.raises(RequiredConstraintsViolated, match="expired"):
            Validator().assert_valid(
                token,
                SignedWith(get_signer(algorithm), Key.plain_text(public)),
                LooseValidAt(SystemClock()),
            )
