"""End-to-end tests for ECDSA-signed tokens."""

from dataclasses import dataclass

import pytest

from jwtkit.core.configuration import Configuration
from jwtkit.core.exceptions import InvalidKeyProvided, RequiredConstraintsViolated
from jwtkit.signer.ecdsa import Ecdsa, EcdsaSha256, EcdsaSha512
from jwtkit.signer.types import Key
from jwtkit.token.types import Plain
from jwtkit.validation.constraints import SignedWith
from tests.keys import (
    EC256_OTHER_PUBLIC,
    EC256_PRIVATE,
    EC256_PUBLIC,
    EC256_WITH_PARAMS_PRIVATE,
    EC256_WITH_PARAMS_PUBLIC,
    EC521_EXTERNAL_PUBLIC,
    EC521_OTHER_PUBLIC,
    EC521_PRIVATE,
    EC521_PUBLIC,
    RSA_PRIVATE,
    RSA_PUBLIC,
)

USER = {"name": "testing", "email": "testing@abc.com"}

EXTERNAL_ES512_TOKEN = (
    "eyJhbGciOiJFUzUxMiIsInR5cCI6IkpXVCJ9.eyJoZWxsbyI6IndvcmxkIn0."
    "AQx1MqdTni6KuzfOoedg2-7NUiwe-b88SWbdmviz40GTwrM0Mybp1i1tVtmTSQ91oEXGXBdtwsN6"
    "yalzP9J-sp2YATX_Tv4h-BednbdSvYxZsYnUoZ--ZUdL10t7g8Yt3y9hdY_diOjIptcha6ajX8yz"
    "kDGYG42iSe3f5LywSuD6FO5c"
)


@dataclass(frozen=True)
class Scenario:
    signer: Ecdsa
    other_signer: Ecdsa
    private: str
    public: str
    other_public: str


SCENARIOS = {
    "ES256": Scenario(
        EcdsaSha256(), EcdsaSha512(), EC256_PRIVATE, EC256_PUBLIC, EC256_OTHER_PUBLIC
    ),
    "ES512": Scenario(
        EcdsaSha512(), EcdsaSha256(), EC521_PRIVATE, EC521_PUBLIC, EC521_OTHER_PUBLIC
    ),
}


@pytest.fixture(params=sorted(SCENARIOS))
def scenario(request: pytest.FixtureRequest) -> Scenario:
    return SCENARIOS[request.param]


@pytest.fixture
def config(scenario: Scenario) -> Configuration:
    return Configuration.for_asymmetric_signer(
        scenario.signer,
        Key.plain_text(scenario.private),
        Key.plain_text(scenario.public),
    )


@pytest.fixture
def token(config: Configuration) -> Plain:
    return (
        config.builder()
        .identified_by("1")
        .permitted_for("https://client.abc.com")
        .permitted_for("https://client2.abc.com")
        .issued_by("https://api.abc.com")
        .with_claim("user", USER)
        .with_header("jki", "1234")
        .get_token(config.signer(), config.signing_key())
    )


class TestEcdsaBuilder:
    """Tests for issuing ECDSA tokens."""

    def test_invalid_key(self, config: Configuration) -> None:
        builder = config.builder().identified_by("1").issued_by("https://api.abc.com")
        with pytest.raises(
            InvalidKeyProvided, match="It was not possible to parse your key, reason:"
        ):
            builder.get_token(config.signer(), Key.plain_text("testing"))

    def test_rsa_key(self, config: Configuration) -> None:
        builder = config.builder().with_claim("user", USER)
        with pytest.raises(InvalidKeyProvided) as exc_info:
            builder.get_token(config.signer(), Key.plain_text(RSA_PRIVATE))
        assert str(exc_info.value) == (
            'The type of the provided key is not "EC", "RSA" provided'
        )

    def test_generates_token(self, token: Plain) -> None:
        assert token.headers()["jki"] == "1234"
        assert token.claims()["iss"] == "https://api.abc.com"
        assert token.claims()["user"] == USER
        assert token.claims()["aud"] == [
            "https://client.abc.com",
            "https://client2.abc.com",
        ]

    def test_signature_length(self, scenario: Scenario, token: Plain) -> None:
        assert len(token.signature().raw) == scenario.signer.signature_length


class TestEcdsaParseAndValidate:
    """Tests for reading back and verifying ECDSA tokens."""

    def test_parser_reads_token(self, config: Configuration, token: Plain) -> None:
        read = config.parser().parse(token.to_string())
        assert read == token
        assert read.claims()["user"]["name"] == "testing"

    def test_wrong_key(
        self, config: Configuration, scenario: Scenario, token: Plain
    ) -> None:
        constraint = SignedWith(config.signer(), Key.plain_text(scenario.other_public))
        with pytest.raises(
            RequiredConstraintsViolated,
            match="The token violates some mandatory constraints",
        ):
            config.validator().assert_valid(token, constraint)

    def test_different_algorithm(
        self, config: Configuration, scenario: Scenario, token: Plain
    ) -> None:
        constraint = SignedWith(scenario.other_signer, Key.plain_text(scenario.public))
        with pytest.raises(RequiredConstraintsViolated) as exc_info:
            config.validator().assert_valid(token, constraint)
        assert exc_info.value.violations[0].message == "Token signer mismatch"

    def test_rsa_public_key(self, config: Configuration, token: Plain) -> None:
        constraint = SignedWith(config.signer(), Key.plain_text(RSA_PUBLIC))
        with pytest.raises(InvalidKeyProvided, match='not "EC", "RSA" provided'):
            config.validator().assert_valid(token, constraint)

    def test_right_key(self, config: Configuration, token: Plain) -> None:
        constraint = SignedWith(config.signer(), config.verification_key())
        parsed = config.parser().parse(token.to_string())
        assert config.validator().validate(parsed, constraint)


class TestEcdsaKeyVariants:
    """Tests for keys and tokens from other sources."""

    def test_key_with_params(self) -> None:
        config = Configuration.for_asymmetric_signer(
            EcdsaSha256(),
            Key.plain_text(EC256_WITH_PARAMS_PRIVATE),
            Key.plain_text(EC256_WITH_PARAMS_PUBLIC),
        )
        token = (
            config.builder()
            .identified_by("1")
            .permitted_for("https://client.abc.com")
            .issued_by("https://api.abc.com")
            .with_claim("user", USER)
            .with_header("jki", "1234")
            .get_token(config.signer(), config.signing_key())
        )
        constraint = SignedWith(config.signer(), config.verification_key())
        assert config.validator().validate(token, constraint)

    def test_token_generated_elsewhere(self) -> None:
        config = Configuration.for_asymmetric_signer(
            EcdsaSha512(),
            Key.plain_text(EC521_PRIVATE),
            Key.plain_text(EC521_PUBLIC),
        )
        token = config.parser().parse(EXTERNAL_ES512_TOKEN)
        constraint = SignedWith(EcdsaSha512(), Key.plain_text(EC521_EXTERNAL_PUBLIC))
        assert config.validator().validate(token, constraint)
        assert token.claims()["hello"] == "world"
        assert len(token.signature().raw) == 132
