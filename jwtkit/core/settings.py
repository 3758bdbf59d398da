"""Token settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALGORITHM = "ES256"
DEFAULT_LEEWAY_SECONDS = 0


class JWTSettings(BaseSettings):
    """Signing algorithm, key material and validation defaults.

    Keys may be given inline or as file paths; a path wins when both are
    set.  Symmetric algorithms only need the signing key.
    """

    model_config = SettingsConfigDict(env_prefix="JWT_")

    algorithm: str = DEFAULT_ALGORITHM
    signing_key: str = ""
    signing_key_path: str = ""
    verification_key: str = ""
    verification_key_path: str = ""
    passphrase: str = ""
    issuer: str = ""
    audience: str = ""
    leeway_seconds: int = DEFAULT_LEEWAY_SECONDS
    log_level: str = "INFO"
