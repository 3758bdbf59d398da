"""Tests for signer lookup."""

import pytest

from jwtkit.core.exceptions import UnknownAlgorithm
from jwtkit.signer.ecdsa import EcdsaSha512
from jwtkit.signer.registry import SIGNERS, get_signer


class TestRegistry:
    """Tests for the algorithm registry."""

    def test_every_algorithm_is_registered(self) -> None:
        assert set(SIGNERS) == {
            "HS256",
            "HS384",
            "HS512",
            "BLAKE2B",
            "RS256",
            "RS384",
            "RS512",
            "ES256",
            "ES384",
            "ES512",
            "EdDSA",
        }

    def test_keys_match_algorithm_ids(self) -> None:
        for algorithm, signer in SIGNERS.items():
            assert signer.algorithm_id() == algorithm

    def test_get_signer(self) -> None:
        assert isinstance(get_signer("ES512"), EcdsaSha512)

    @pytest.mark.parametrize("algorithm", ["none", "PS256", "es256", ""])
    def test_unknown_algorithm(self, algorithm: str) -> None:
        with pytest.raises(UnknownAlgorithm) as exc_info:
            get_signer(algorithm)
        assert exc_info.value.algorithm == algorithm

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            SIGNERS["HS256"] = SIGNERS["HS512"]  # type: ignore[index]

    def test_repr(self) -> None:
        assert repr(get_signer("RS256")) == "RsaSha256('RS256')"
