"""Project configuration loaded from a JSON file."""

from pathlib import Path

from pydantic import ValidationError

from litreader.core.toc_generator import InvalidConfiguration
from litreader.models.config import AppConfig


class ConfigurationStore:
    """Reads and writes litreader.json in a project directory."""

    CONFIG_FILE = "litreader.json"

    def __init__(self, project_dir: Path):
        self.config_path = project_dir / self.CONFIG_FILE
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """Load configuration, falling back to defaults if no file exists.

        Raises:
            InvalidConfiguration: If the file exists but cannot be parsed
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            self._config = AppConfig()
            return self._config

        try:
            self._config = AppConfig.model_validate_json(self.config_path.read_text())
        except (OSError, ValidationError) as e:
            raise InvalidConfiguration(f"Invalid config {self.config_path}: {e}") from e

        return self._config

    def save(self, config: AppConfig) -> None:
        """Write configuration to disk."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(config.model_dump_json(indent=2))
        self._config = config
