"""Configuration helpers for the Wardrobe Coordinator app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_IMAGE_BUCKET = "clothing-images"


@dataclass
class WardrobeConfig:
    """Configuration values for the wardrobe app.

    A missing ``gemini_api_key`` is a supported setup: recommendations are
    then always produced by the local outfit selector.
    """

    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_endpoint: str = DEFAULT_GEMINI_ENDPOINT
    request_timeout_seconds: float = 15.0
    wardrobe_backend: str = "sqlite"
    wardrobe_db_path: Optional[str] = None
    image_store_path: Optional[str] = None
    image_base_url: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    image_bucket: str = DEFAULT_IMAGE_BUCKET
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "WardrobeConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that secrets such
        as the Gemini and Supabase keys never need to be written to disk.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("WARDROBE_CONFIG_DIR", "config/environments"))
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

        timeout = get_value("request_timeout_seconds", "15")

        return cls(
            gemini_api_key=get_value("gemini_api_key") or None,
            gemini_model=str(get_value("gemini_model", DEFAULT_GEMINI_MODEL) or DEFAULT_GEMINI_MODEL),
            gemini_endpoint=str(
                get_value("gemini_endpoint", DEFAULT_GEMINI_ENDPOINT) or DEFAULT_GEMINI_ENDPOINT
            ).rstrip("/"),
            request_timeout_seconds=float(timeout or 15),
            wardrobe_backend=str(get_value("wardrobe_backend", "sqlite") or "sqlite").lower(),
            wardrobe_db_path=get_value("wardrobe_db_path"),
            image_store_path=get_value("image_store_path"),
            image_base_url=get_value("image_base_url"),
            supabase_url=get_value("supabase_url"),
            supabase_key=get_value("supabase_key"),
            image_bucket=str(get_value("image_bucket", DEFAULT_IMAGE_BUCKET) or DEFAULT_IMAGE_BUCKET),
            environment=env_name,
        )

    @property
    def has_model_credentials(self) -> bool:
        return bool(self.gemini_api_key)

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal ``key: value`` YAML file without external dependencies."""

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
