"""
Config Manager

Loads buttons.yaml and converts it into typed AppConfig.
Falls back to factory defaults when the file is missing or unreadable;
invalid values are reported as ValueError.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

import yaml

from models.config import AppConfig, ButtonsConfig, LoggingConfig, TimingConfig
from models.enums import GPIOPullMode, LogLevel, PinNumbering
from utils.enum_helper import E, EnumHelper
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

# Shipped inside the package so non-editable installs find it
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "buttons.yaml"


class ConfigManager:
    """
    Configuration manager for the button service

    Example:
        config = ConfigManager().load()
        config.buttons.pins        # [17, 27]
        config.buttons.timing      # TimingConfig(debounce_ms=30, ...)

    Args:
        config_path: Path to buttons.yaml (default: the bundled file).
                     Relative paths are resolved against the working
                     directory.
    """

    def __init__(self, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[AppConfig] = None

    @property
    def full_path(self) -> Path:
        return self.config_path.expanduser().resolve()

    def load(self) -> AppConfig:
        """
        Load and validate the YAML file

        Returns:
            AppConfig (factory defaults if the file could not be read)

        Raises:
            ValueError: The file was read but contains invalid values
        """
        try:
            with open(self.full_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config", path=str(self.full_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = {}

        if not isinstance(self.data, dict):
            raise ValueError(f"Config root must be a mapping (got {type(self.data).__name__})")

        self.config = self.parse(self.data)
        log.info("Config loaded", **self.config.buttons.as_dict())
        return self.config

    # ------------------------------------------------------
    # PARSING
    # ------------------------------------------------------

    @classmethod
    def parse(cls, data: Dict[str, Any]) -> AppConfig:
        return AppConfig(
            buttons=cls._parse_buttons(_section(data, "buttons")),
            logging=cls._parse_logging(_section(data, "logging")),
        )

    @staticmethod
    def _parse_buttons(section: Dict[str, Any]) -> ButtonsConfig:
        timing = _section(section, "timing", parent="buttons.")
        unknown = set(timing) - {"debounce_ms", "pressed_ms", "clicked_ms"}
        if unknown:
            raise ValueError(f"Unknown timing keys: {sorted(unknown)}")

        return ButtonsConfig(
            pins=_pins(section.get("pins")),
            pull_mode=_enum(GPIOPullMode, section.get("pull_mode", "PULL_UP"), "buttons.pull_mode"),
            numbering=_enum(PinNumbering, section.get("numbering", "BCM"), "buttons.numbering"),
            timing=TimingConfig(**timing),
        )

    @staticmethod
    def _parse_logging(section: Dict[str, Any]) -> LoggingConfig:
        return LoggingConfig(
            level=_enum(LogLevel, section.get("level", "INFO"), "logging.level"),
            colors=bool(section.get("colors", True)),
        )


# ------------------------------------------------------
# HELPERS
# ------------------------------------------------------

def _section(data: Dict[str, Any], key: str, parent: str = "") -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{parent}{key}' must be a mapping (got {type(value).__name__})")
    return value


def _pins(value: Any) -> List[int]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'buttons.pins' must be a list (got {type(value).__name__})")
    return list(value)


def _enum(enum_class: Type[E], value: Any, key: str) -> E:
    try:
        return EnumHelper.to_enum(enum_class, value)
    except TypeError as ex:
        raise ValueError(f"'{key}': {ex}") from ex
