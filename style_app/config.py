"""Configuration helpers for the Style Matcher service."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_VERSION = "1.0.0"
DEFAULT_MAX_CONTENT_LENGTH = 16 * 1024 * 1024
GENERATOR_MODES = ("deterministic", "mock")


@dataclass
class StyleMatcherConfig:
    """Configuration values for the Style Matcher app.

    Defaults keep a local run self-contained: uploads land in ``uploads/``
    next to the working directory and the deterministic scorer is used.
    """

    upload_dir: str = "uploads"
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    color_count: int = 5
    colors_per_image: int = 2
    max_images: int = 12
    processing_delay_seconds: float = 0.0
    generator_mode: str = "deterministic"
    version: str = DEFAULT_VERSION
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str | None = None

    def __post_init__(self) -> None:
        if self.generator_mode not in GENERATOR_MODES:
            raise ValueError(
                f"Unsupported generator_mode '{self.generator_mode}'. Allowed: {list(GENERATOR_MODES)}"
            )
        if self.color_count < 1:
            raise ValueError("color_count must be at least 1")

    @classmethod
    def from_env(cls) -> "StyleMatcherConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables, which take precedence.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STYLE_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        return cls(
            upload_dir=str(get_value("upload_dir", "uploads") or "uploads"),
            max_content_length=int(get_value("max_content_length", str(DEFAULT_MAX_CONTENT_LENGTH))),
            color_count=int(get_value("color_count", "5")),
            colors_per_image=int(get_value("colors_per_image", "2")),
            max_images=int(get_value("max_images", "12")),
            processing_delay_seconds=float(get_value("processing_delay_seconds", "0")),
            generator_mode=str(get_value("generator_mode", "deterministic")).strip().lower(),
            version=str(get_value("app_version", DEFAULT_VERSION) or DEFAULT_VERSION),
            host=str(get_value("host", "0.0.0.0")),
            port=int(get_value("port", "5000")),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
