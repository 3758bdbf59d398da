"""Single entry point bundling a signer, its keys and the token services."""

import copy
from datetime import timedelta
from typing import Self

from jwtkit.core.clock import SystemClock
from jwtkit.core.settings import JWTSettings
from jwtkit.encoding.formatters import ChainedFormatter, ClaimsFormatter
from jwtkit.encoding.jose import JoseEncoder
from jwtkit.signer.base import AsymmetricSigner, Signer
from jwtkit.signer.registry import get_signer
from jwtkit.signer.types import Key
from jwtkit.token.builder import Builder
from jwtkit.token.parser import Parser
from jwtkit.validation.constraints import (
    IssuedBy,
    LooseValidAt,
    PermittedFor,
    SignedWith,
)
from jwtkit.validation.types import Constraint
from jwtkit.validation.validator import Validator

__all__ = ["Configuration"]


class Configuration:
    """Signer, keys and token services configured together.

    Use `for_symmetric_signer` when the same secret signs and verifies and
    `for_asymmetric_signer` for a key pair.  `from_settings` builds one from
    `JWTSettings`, including default validation constraints.
    """

    def __init__(
        self,
        signer: Signer,
        signing_key: Key,
        verification_key: Key,
        encoder: JoseEncoder | None = None,
        formatter: ClaimsFormatter | None = None,
    ) -> None:
        self._signer = signer
        self._signing_key = signing_key
        self._verification_key = verification_key
        self._encoder = encoder or JoseEncoder()
        self._formatter = formatter or ChainedFormatter.default()
        self._validator = Validator()
        self._constraints: tuple[Constraint, ...] = ()

    @classmethod
    def for_symmetric_signer(
        cls,
        signer: Signer,
        key: Key,
        encoder: JoseEncoder | None = None,
        formatter: ClaimsFormatter | None = None,
    ) -> Self:
        return cls(signer, key, key, encoder, formatter)

    @classmethod
    def for_asymmetric_signer(
        cls,
        signer: Signer,
        signing_key: Key,
        verification_key: Key,
        encoder: JoseEncoder | None = None,
        formatter: ClaimsFormatter | None = None,
    ) -> Self:
        return cls(signer, signing_key, verification_key, encoder, formatter)

    @classmethod
    def from_settings(cls, settings: JWTSettings | None = None) -> Self:
        """Build a configuration from environment-driven settings.

        The validation constraints always check the signature and the token
        lifetime.  Issuer and audience checks are added when the settings
        name them.
        """
        settings = settings or JWTSettings()
        signer = get_signer(settings.algorithm)
        signing_key = _load_key(
            settings.signing_key_path, settings.signing_key, settings.passphrase
        )
        if isinstance(signer, AsymmetricSigner):
            verification_key = _load_key(
                settings.verification_key_path, settings.verification_key
            )
            config = cls.for_asymmetric_signer(signer, signing_key, verification_key)
        else:
            config = cls.for_symmetric_signer(signer, signing_key)

        constraints: list[Constraint] = [
            SignedWith(signer, config.verification_key()),
            LooseValidAt(
                SystemClock(), timedelta(seconds=settings.leeway_seconds)
            ),
        ]
        if settings.issuer:
            constraints.append(IssuedBy(settings.issuer))
        if settings.audience:
            constraints.append(PermittedFor(settings.audience))
        return config.with_validation_constraints(*constraints)

    def builder(self) -> Builder:
        """Return a fresh builder sharing this configuration's codec."""
        return Builder(self._encoder, self._formatter)

    def parser(self) -> Parser:
        return Parser(self._encoder, self._formatter)

    def validator(self) -> Validator:
        return self._validator

    def signer(self) -> Signer:
        return self._signer

    def signing_key(self) -> Key:
        return self._signing_key

    def verification_key(self) -> Key:
        return self._verification_key

    def validation_constraints(self) -> tuple[Constraint, ...]:
        return self._constraints

    def with_validation_constraints(self, *constraints: Constraint) -> Self:
        """Return a copy using the given constraints."""
        new = copy.copy(self)
        new._constraints = constraints
        return new


def _load_key(path: str, contents: str, passphrase: str = "") -> Key:
    if path:
        return Key.file(path, passphrase)
    return Key.plain_text(contents, passphrase)
