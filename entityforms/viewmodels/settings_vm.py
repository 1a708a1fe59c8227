from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from ..utils.logging import env_truthy

ENV_PREFIX = "ENTITYFORMS_"


@dataclass
class ServiceConfig:
    """Typed connection settings that persist via StorageLocal."""

    instance_url: str = ""
    access_token: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    contact_resource: str = "contacts"
    expense_resource: str = "expenses"
    greeting_resource: str = "hello"


_INT_KEYS = ("request_timeout_s", "retries")
_RESOURCE_KEYS = ("contact_resource", "expense_resource", "greeting_resource")

_ENV_KEYS: Dict[str, str] = {
    "INSTANCE_URL": "instance_url",
    "ACCESS_TOKEN": "access_token",
    "REQUEST_TIMEOUT_S": "request_timeout_s",
    "RETRIES": "retries",
}


class SettingsVM:
    """Keeps connection settings state and validation, no I/O here."""

    def __init__(self, *, config: Optional[ServiceConfig] = None) -> None:
        self.config = config or ServiceConfig()
        self.use_mock: bool = False

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def instance_url(self) -> str:
        return self.config.instance_url

    @instance_url.setter
    def instance_url(self, value: str) -> None:
        self.config = replace(self.config, instance_url=self._coerce_url(value))

    @property
    def access_token(self) -> str:
        return self.config.access_token

    @access_token.setter
    def access_token(self, value: str) -> None:
        self.config = replace(self.config, access_token=self._coerce_optional_str(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: int) -> None:
        coerced = self._coerce_int("request_timeout_s", value)
        self.config = replace(self.config, request_timeout_s=coerced)

    @property
    def retries(self) -> int:
        return self.config.retries

    @retries.setter
    def retries(self, value: int) -> None:
        self.config = replace(self.config, retries=self._coerce_int("retries", value))

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        if self.use_mock:
            return True
        parsed = urlparse(self.instance_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return False
        if self.request_timeout_s <= 0:
            return False
        return all(getattr(self.config, key) for key in _RESOURCE_KEYS)

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {*ServiceConfig.__annotations__.keys(), "use_mock"}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates: Dict[str, Any] = {}
        for cfg_key in ServiceConfig.__annotations__.keys():
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])
        if updates:
            self.config = replace(self.config, **updates)

        if "use_mock" in payload:
            self.use_mock = self._coerce_bool(payload["use_mock"])

    def apply_env(self, environ: Mapping[str, str]) -> None:
        """Override settings from ``ENTITYFORMS_*`` environment variables."""
        updates: Dict[str, Any] = {}
        for suffix, cfg_key in _ENV_KEYS.items():
            value = environ.get(f"{ENV_PREFIX}{suffix}")
            if value is None or not value.strip():
                continue
            updates[cfg_key] = value
        if env_truthy(environ.get(f"{ENV_PREFIX}MOCK")):
            updates["use_mock"] = True
        if updates:
            self.apply_dict(updates)

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["use_mock"] = bool(self.use_mock)
        return snapshot

    # ------------------------------------------------------------------
    # Coercion helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, value: Any) -> Any:
        if key == "instance_url":
            return self._coerce_url(value)
        if key in _INT_KEYS:
            return self._coerce_int(key, value)
        if key in _RESOURCE_KEYS:
            text = self._coerce_optional_str(value).strip("/")
            if not text:
                raise ValueError(f"{key} must not be empty.")
            return text
        return self._coerce_optional_str(value)

    @staticmethod
    def _coerce_url(value: Any) -> str:
        return SettingsVM._coerce_optional_str(value).rstrip("/")

    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_int(key: str, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{key} must be an integer.")
        try:
            number = int(str(value).strip())
        except (TypeError, ValueError):
            raise ValueError(f"{key} must be an integer.") from None
        if number < 0:
            raise ValueError(f"{key} must be >= 0.")
        return number

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, str):
            return env_truthy(value)
        return bool(value)
