"""Global configuration — XDG paths, optional YAML file, env vars, defaults."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

_TRUTHY = {"1", "true", "yes", "on"}


def _default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "sbomfix"
    return Path.home() / ".local" / "share" / "sbomfix"


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sbomfix"
    return Path.home() / ".config" / "sbomfix"


@dataclass
class SbomFixConfig:
    """Application-wide configuration."""

    data_dir: Path = field(default_factory=_default_data_dir)
    config_dir: Path = field(default_factory=_default_config_dir)
    static_dir: Path = Path("static")
    clone_dir: Path = Path("/tmp/git-sbom")

    semantic_endpoint: str = "http://localhost:8000/analyze"
    ollama_host: str = "http://host.docker.internal:11434"
    ollama_model: str = "mistral"
    stream: bool = False

    web_host: str = "127.0.0.1"
    web_port: int = 3000

    # Seconds. Every external call is bounded.
    health_timeout: float = 10.0
    generate_timeout: float = 120.0
    semantic_timeout: float = 120.0
    quality_timeout: float = 30.0
    scan_timeout: float = 300.0
    sbom_timeout: float = 600.0
    clone_timeout: float = 300.0

    verbose: bool = False

    @property
    def log_file(self) -> Path:
        return self.data_dir / "output.log"

    @property
    def sbom_dir(self) -> Path:
        return self.data_dir / "sboms"

    @classmethod
    def load(cls) -> SbomFixConfig:
        """Load config from ``config.yaml`` and environment variables."""
        config = cls()

        config_file = config.config_dir / "config.yaml"
        if config_file.is_file():
            config.apply_file(config_file)

        env_data_dir = os.environ.get("SBOMFIX_DATA_DIR")
        if env_data_dir:
            config.data_dir = Path(env_data_dir)

        env_semantic = os.environ.get("LLAMAINDEX_API")
        if env_semantic:
            config.semantic_endpoint = env_semantic

        env_host = os.environ.get("OLLAMA_HOST")
        if env_host:
            config.ollama_host = env_host

        env_model = os.environ.get("OLLAMA_MODEL")
        if env_model:
            config.ollama_model = env_model

        env_port = os.environ.get("PORT")
        if env_port:
            config.web_port = int(env_port)

        env_stream = os.environ.get("SBOMFIX_STREAM")
        if env_stream:
            config.stream = env_stream.strip().lower() in _TRUTHY

        return config

    def apply_file(self, path: str | Path) -> None:
        """Overlay values from a YAML mapping. Unknown keys are ignored."""
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError("Config YAML must be a mapping")

        for f in dataclasses.fields(self):
            if f.name not in data:
                continue
            setattr(self, f.name, _coerce(f.name, getattr(self, f.name), data[f.name]))


def _coerce(name: str, current: object, value: object) -> object:
    """Convert a YAML value to the type of the field's current value."""
    if value is None:
        raise ValueError(f"Config value for '{name}' must not be null")
    if isinstance(value, (dict, list)):
        raise ValueError(f"Config value for '{name}' must be a scalar")

    if isinstance(current, bool):
        return str(value).strip().lower() in _TRUTHY
    if isinstance(current, (int, float)):
        if isinstance(value, bool):
            raise ValueError(f"Config value for '{name}' must be a number")
        try:
            return type(current)(value)
        except ValueError as exc:
            raise ValueError(
                f"Config value for '{name}' must be a number, got {value!r}"
            ) from exc
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config value for '{name}' must be a non-empty string")
    if isinstance(current, Path):
        return Path(value)
    return value
