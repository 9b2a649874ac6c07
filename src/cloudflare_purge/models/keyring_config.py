from __future__ import annotations

import enum
import json
import keyring


class ConfigKey(enum.StrEnum):
    ZONE_ID = "ZONE_ID"
    TOKEN = "TOKEN"
    AUTH_EMAIL = "AUTH_EMAIL"
    AUTH_KEY = "AUTH_KEY"


SECRET_KEYS = frozenset({ConfigKey.TOKEN, ConfigKey.AUTH_KEY})


class KeyringConfig(dict[ConfigKey, str]):
    """Purge secrets kept in the OS keyring as one json blob."""

    KR_SERVICE_NAME: str = "cf-purge"
    KR_USERNAME: str = "config"

    def __enter__(self) -> KeyringConfig:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.save()

    @classmethod
    def load_from_keyring(cls) -> KeyringConfig:
        """Load the configuration from the keyring."""
        json_str = keyring.get_password(cls.KR_SERVICE_NAME, cls.KR_USERNAME)
        if json_str is None:
            return cls()
        data = json.loads(json_str)
        return cls({ConfigKey(k): v for k, v in data.items() if k in ConfigKey.__members__})

    def save(self):
        """Save the configuration to the keyring."""
        json_str = json.dumps(self)
        keyring.set_password(self.KR_SERVICE_NAME, self.KR_USERNAME, json_str)

    def to_keys_json(self) -> str:
        """
        Stored keys as json. Zone id and email are shown as is,
        the token and api key only by their last 4 characters.
        """
        result = {}
        for key in ConfigKey:
            value = self.get(key)
            if value is None:
                result[key] = "(not set)"
            elif key in SECRET_KEYS and value:
                result[key] = f"****{value[-4:]}" if len(value) > 8 else "********"
            else:
                result[key] = value

        return json.dumps(result, indent=2)
