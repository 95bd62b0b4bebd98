"""Persistent user configuration and the chat session it carries."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

VERSION = "1.0.0"
CONFIG_DIR_NAME = ".codeagent"
CONFIG_FILE_NAME = "config.json"

OPENAI_MODELS = ("o4-mini", "o3", "o3-mini", "o1")
ANTHROPIC_MODELS = ("claude-2",)

MODEL_PROVIDERS: dict[str, tuple[str, ...]] = {
    "openai": OPENAI_MODELS,
    "anthropic": ANTHROPIC_MODELS,
}

AVAILABLE_MODELS: tuple[str, ...] = OPENAI_MODELS + ANTHROPIC_MODELS

DEFAULT_PROVIDER = "openai"

# Top-level string settings, stored under their own names.
_STRING_FIELDS = ("name", "version", "api_key")


class SessionInvalidated(Exception):
    """Raised once the stored credentials were discarded and the app must restart."""


@dataclass(frozen=True)
class ConfigPaths:
    """Where the configuration lives on disk."""

    config_dir: str = ""
    config_file: str = ""


@dataclass(frozen=True)
class APIEndpoint:
    """Base URL and completion path of a provider's chat API."""

    base_url: str = ""
    completion_path: str = ""


CHAT_COMPLETIONS_ENDPOINT = APIEndpoint(
    base_url="https://api.openai.com/v1",
    completion_path="/chat/completions",
)

PROVIDER_ENDPOINTS: dict[str, APIEndpoint] = {
    "openai": CHAT_COMPLETIONS_ENDPOINT,
    "anthropic": CHAT_COMPLETIONS_ENDPOINT,
}


def _field(data: dict[str, Any], key: str, kinds: tuple[type, ...], default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) and bool not in kinds:
        raise ValueError(f"invalid value for {key!r}: {value!r}")
    if not isinstance(value, kinds):
        raise ValueError(f"invalid value for {key!r}: {value!r}")
    return value


def _text(data: dict[str, Any], key: str) -> str:
    return _field(data, key, (str,), "")


def _object(data: Any, what: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object")
    return data


@dataclass
class Session:
    """The model, provider and working directory of the current user."""

    model: str = ""
    work_dir: str = ""
    provider: str = ""
    api: APIEndpoint = field(default_factory=APIEndpoint)

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "work_dir": self.work_dir,
            "provider": self.provider,
            "api": {
                "BaseURL": self.api.base_url,
                "CompletionPath": self.api.completion_path,
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> Session:
        data = _object(data, "session")
        api = _object(data.get("api"), "api")
        return cls(
            model=_text(data, "model"),
            work_dir=_text(data, "work_dir"),
            provider=_text(data, "provider"),
            api=APIEndpoint(
                base_url=_text(api, "BaseURL"),
                completion_path=_text(api, "CompletionPath"),
            ),
        )


def _timedelta_to_ns(value: timedelta) -> int:
    return (value.days * 86_400 + value.seconds) * 1_000_000_000 + value.microseconds * 1_000


def _ns_to_timedelta(value: Any) -> timedelta:
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"invalid value for 'api_timeout': {value!r}")
        value = int(value)
    return timedelta(microseconds=value // 1_000)


@dataclass
class Config:
    """User settings, stored as JSON in the configuration file."""

    name: str = field(default_factory=str)
    version: str = field(default_factory=str)
    api_key: str = field(default_factory=str)
    api_timeout: timedelta = timedelta(0)
    max_context_size: int = 0
    max_request_retries: int = 0
    temperature: float = 0.0
    enable_history: bool = False
    config_paths: ConfigPaths = field(default_factory=ConfigPaths)
    session: Session = field(default_factory=Session)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {key: getattr(self, key) for key in _STRING_FIELDS}
        data.update(
            {
                "api_timeout": _timedelta_to_ns(self.api_timeout),
                "max_context_size": self.max_context_size,
                "max_request_retries": self.max_request_retries,
                "temperature": self.temperature,
                "enable_history": self.enable_history,
                "config_paths": {
                    "ConfigDir": self.config_paths.config_dir,
                    "ConfigFile": self.config_paths.config_file,
                },
                "session": self.session.to_dict(),
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Any, paths: ConfigPaths) -> Config:
        """Build a config from decoded JSON; the stored paths are replaced by ``paths``."""
        if not isinstance(data, dict):
            raise ValueError("config must be a JSON object")
        timeout = _field(data, "api_timeout", (int, float), 0)
        return cls(
            **{key: _text(data, key) for key in _STRING_FIELDS},
            api_timeout=_ns_to_timedelta(timeout),
            max_context_size=_field(data, "max_context_size", (int,), 0),
            max_request_retries=_field(data, "max_request_retries", (int,), 0),
            temperature=float(_field(data, "temperature", (int, float), 0.0)),
            enable_history=_field(data, "enable_history", (bool,), False),
            config_paths=paths,
            session=Session.from_dict(data.get("session")),
        )

    def update_config(self) -> None:
        """Write this config back to its file."""
        save_config(self)


def build_paths(home: str | os.PathLike[str] | None = None) -> ConfigPaths:
    """Return the configuration paths under ``home`` and create the directory."""
    if home is None:
        home = os.environ.get("HOME", "")
    config_dir = os.path.join(os.fspath(home), CONFIG_DIR_NAME)
    config_file = os.path.join(config_dir, CONFIG_FILE_NAME)
    try:
        os.makedirs(config_dir, mode=0o755, exist_ok=True)
    except OSError:
        pass
    return ConfigPaths(config_dir=config_dir, config_file=config_file)


def default_config(paths: ConfigPaths) -> Config:
    return Config(
        version=VERSION,
        api_timeout=timedelta(minutes=5),
        max_context_size=4000,
        max_request_retries=3,
        temperature=0.7,
        enable_history=True,
        config_paths=paths,
    )


def save_config(config: Config) -> None:
    text = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    with open(config.config_paths.config_file, "w", encoding="utf-8") as handle:
        handle.write(text)


def load_config(paths: ConfigPaths) -> Config:
    """Read the config file; raises OSError or ValueError if it is missing or malformed."""
    with open(paths.config_file, encoding="utf-8") as handle:
        data = json.load(handle)
    return Config.from_dict(data, paths)


def init_config(home: str | os.PathLike[str] | None = None) -> Config:
    """Load the stored config, or create and save the default one."""
    paths = build_paths(home)
    try:
        return load_config(paths)
    except (OSError, ValueError):
        config = default_config(paths)
        try:
            save_config(config)
        except OSError as exc:
            raise RuntimeError(f"Failed to save config: {exc}") from exc
        return config


def get_provider(model: str) -> str:
    for provider, models in MODEL_PROVIDERS.items():
        if model in models:
            return provider
    print("Model not found. Defaulting to OpenAI")
    return DEFAULT_PROVIDER


def init_session(name: str, model: str) -> Session:
    if not name or not model:
        return Session()
    provider = get_provider(model)
    return Session(model=model, provider=provider, api=PROVIDER_ENDPOINTS[provider])


def invalidate_session(cfg: Config) -> None:
    """Delete the stored config and signal that the app has to be restarted."""
    os.remove(cfg.config_paths.config_file)
    print("Restart the app to login again")
    raise SessionInvalidated("Restart the app to login again")