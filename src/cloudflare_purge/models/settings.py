from __future__ import annotations

import logging

import dotenv
import keyring.errors
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudflare_purge.models.keyring_config import ConfigKey, KeyringConfig
from cloudflare_purge.models.purge import PurgeConfig, PurgeMethod


logger = logging.getLogger(__name__)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=dotenv.find_dotenv(usecwd=True) or None,
        env_prefix="cf_purge_",
        extra="ignore",
    )

    zone_id: str | None = None

    # credentials, token takes precedence over the email/key pair
    token: str | None = None
    auth_email: str | None = None
    auth_key: str | None = None

    strict: bool = True
    method: PurgeMethod = PurgeMethod.POST
    timeout: float = 10.0

    # canonical page urls
    wiki_server: str | None = None
    article_path: str = "/wiki/$1"

    # debug
    verbose: bool = False

    def with_keyring(self, config: KeyringConfig) -> EnvSettings:
        """Fill unset secrets from keyring values."""
        return self.model_copy(
            update={
                "zone_id": self.zone_id or config.get(ConfigKey.ZONE_ID),
                "token": self.token or config.get(ConfigKey.TOKEN),
                "auth_email": self.auth_email or config.get(ConfigKey.AUTH_EMAIL),
                "auth_key": self.auth_key or config.get(ConfigKey.AUTH_KEY),
            }
        )

    def purge_config(self) -> PurgeConfig:
        return PurgeConfig.from_values(
            zone_id=self.zone_id,
            bearer_token=self.token,
            auth_email=self.auth_email,
            auth_key=self.auth_key,
            strict=self.strict,
            method=self.method,
            timeout=self.timeout,
        )


def load_settings(use_keyring: bool = True) -> EnvSettings:
    """Load settings from the environment, then the keyring."""
    settings = EnvSettings()
    if use_keyring:
        try:
            stored = KeyringConfig.load_from_keyring()
        except keyring.errors.KeyringError as e:
            logger.debug("Keyring unavailable, using environment only: %s", e)
        else:
            settings = settings.with_keyring(stored)
    return settings


def load_purge_config(use_keyring: bool = True) -> PurgeConfig:
    return load_settings(use_keyring).purge_config()
