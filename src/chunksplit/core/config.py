from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Dict, Any
from pathlib import Path


class Settings(BaseSettings):
    # Chunk splitting
    SPLIT_MAX_MODULES_PER_CHUNK: int = 100
    SPLIT_MAX_MODULES_PER_ENTRY: int = 1  # 0 extracts everything past the head
    SPLIT_PART_NAME_TEMPLATE: str = "{name}-part-{index}"  # index is 1-based
    SPLIT_ALLOW_PARENT_OVERWRITE: bool = False

    # Build pipeline
    PIPELINE_MAX_OPTIMIZE_PASSES: int = 10  # Cap on re-runs of an optimize phase

    # Workspace paths
    CHUNKSPLIT_WORKDIR: str = "var"  # Tool-managed artifacts

    # Observability
    LOG_FORMAT: str = "auto"  # json|plain|auto
    LOG_LEVEL: str = "info"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        if config_file:
            config_path: Optional[Path] = Path(config_file)
        else:
            # Auto-discover .chunksplit.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".chunksplit.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        # Load config file if found
        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Environment variables override file values
        env_settings = cls()
        for key in env_settings.model_fields_set:
            config_data.pop(key, None)

        return cls(**config_data)


# Default settings - will be replaced by load_config() during CLI startup
SETTINGS = Settings()
