"""Persistence of the rendering configuration between runs.

Settings are stored as a JSON object using the camelCase keys of
``TreeConfig.to_mapping``. Saved values are merged over the defaults on load, so
settings written by an older version that lacks a field still load.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from treegenius.config import TreeConfig
from treegenius.types import PathType

logger = logging.getLogger(__name__)

SETTINGS_DIR_NAME = "treegenius"
SETTINGS_FILE_NAME = "config.json"


def default_settings_path() -> Path:
    """Return ``$XDG_CONFIG_HOME/treegenius/config.json`` (``~/.config`` when unset)."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(Path.home(), ".config")
    return Path(config_home) / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


class SettingsStore:
    """Loads, saves and resets a TreeConfig stored in a JSON file.

    Attributes:
        path (Path): Location of the settings file.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     store = SettingsStore(Path(tmpdir) / "config.json")
        ...     store.save(TreeConfig(style="ascii"))
        ...     store.load().style
        'ascii'
    """

    def __init__(self, path: Optional[PathType] = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()

    def load(self) -> TreeConfig:
        """Load the saved config, falling back to the defaults.

        A missing file yields the defaults silently. An unreadable file, malformed
        JSON or invalid values are logged and also yield the defaults.
        """
        if not self.path.exists():
            return TreeConfig()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            return TreeConfig.from_mapping(data)
        except (OSError, ValueError, TypeError) as e:
            logger.error("Failed to load settings from %s: %s", self.path, e)
            return TreeConfig()

    def save(self, config: TreeConfig) -> None:
        """Write the config, creating the parent directory if needed.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(config.to_mapping(), f, indent=2, ensure_ascii=False)
            f.write("\n")
        logger.debug("Saved settings to %s", self.path)

    def reset(self) -> TreeConfig:
        """Delete the saved settings and return the defaults."""
        try:
            self.path.unlink()
            logger.info("Removed settings file %s", self.path)
        except FileNotFoundError:
            pass
        return TreeConfig()
