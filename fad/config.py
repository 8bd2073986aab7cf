"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables (FAD_CASE, FAD_NORMALIZATION, FAD_SYMBOLS, FAD_LOG_LEVEL)
  2. Project config (<repo>/.git/fad/config.yaml)
  3. User config (~/.fad/config.yaml)
  4. Defaults

The project config lives inside the git dir so it never shows up as an
untracked file to match against.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from loguru import logger

from .core.fuzzy import CaseMatching, Normalization


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

ENV_OVERRIDES = {
    "FAD_CASE": ("matching", "case"),
    "FAD_NORMALIZATION": ("matching", "normalization"),
    "FAD_SYMBOLS": ("display", "symbols"),
    "FAD_LOG_LEVEL": ("logging", "level"),
}


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """A config section as a dict (non-mapping values are ignored)."""
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning("Ignoring {} config: expected a mapping", name)
        return {}
    return value


@dataclass
class MatchingConfig:
    """Fuzzy matching preferences."""
    case: str = "ignore"           # "ignore" | "smart" | "respect"
    normalization: str = "smart"   # "smart" | "never"

    @property
    def case_matching(self) -> CaseMatching:
        return CaseMatching(self.case)

    @property
    def normalization_mode(self) -> Normalization:
        return Normalization(self.normalization)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        valid_cases = tuple(mode.value for mode in CaseMatching)
        if self.case not in valid_cases:
            return f"Unknown case setting '{self.case}'. Valid: {', '.join(valid_cases)}"

        valid_normalizations = tuple(mode.value for mode in Normalization)
        if self.normalization not in valid_normalizations:
            return f"Unknown normalization setting '{self.normalization}'. Valid: {', '.join(valid_normalizations)}"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"
        return None


@dataclass
class LoggingConfig:
    """Diagnostic logging preferences."""
    level: str = "WARNING"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if str(self.level).upper() not in LOG_LEVELS:
            return f"Unknown log level '{self.level}'. Valid: {', '.join(LOG_LEVELS)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "matching": {
                "case": self.matching.case,
                "normalization": self.matching.normalization
            },
            "display": {
                "symbols": self.display.symbols
            },
            "logging": {
                "level": self.logging.level
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """
        Create from dictionary.

        A section holding an invalid value falls back to its defaults.
        """
        matching_data = _section(data, "matching")
        display_data = _section(data, "display")
        logging_data = _section(data, "logging")

        matching = MatchingConfig(
            case=str(matching_data.get("case", "ignore")).lower(),
            normalization=str(matching_data.get("normalization", "smart")).lower()
        )
        display = DisplayConfig(
            symbols=str(display_data.get("symbols", "auto")).lower()
        )
        logging = LoggingConfig(
            level=str(logging_data.get("level", "WARNING")).upper()
        )

        sections = {"matching": matching, "display": display, "logging": logging}
        for name, section in list(sections.items()):
            error = section.validate()
            if error:
                logger.warning("Ignoring {} config: {}", name, error)
                sections[name] = type(section)()

        return cls(**sections)


class ConfigManager:
    """
    Manages configuration loading.

    Hierarchy:
      1. Environment variables
      2. Project config (<repo>/.git/fad/config.yaml)
      3. User config (~/.fad/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".fad"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = Path(".git") / "fad"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read one YAML layer. Unreadable or malformed files are skipped."""
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Skipping config file {}: {}", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Skipping config file {}: expected a mapping", path)
            return {}
        return data

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        for env_var, (section, setting) in ENV_OVERRIDES.items():
            if os.environ.get(env_var):
                if not isinstance(config_data.get(section), dict):
                    config_data[section] = {}
                config_data[section][setting] = os.environ[env_var]

        self._config = Config.from_dict(config_data)
        logger.debug("Loaded config: {}", self._config.to_dict())
        return self._config

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
