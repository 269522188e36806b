"""Viewer settings, stored as JSON."""

from dataclasses import dataclass
import json
import logging
import os

from mdlayout.layout_settings import CodeOverflow, LayoutSettings


DEFAULT_SETTINGS_PATH = os.path.expanduser("~/.mdview/settings.json")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ViewerSettings:
    """
    User-specific viewer settings.
    """
    code_overflow: CodeOverflow = CodeOverflow.OVERFLOW
    table_min_column_width: int = 1
    tab_width: int = 4
    poll_interval_ms: int = 200
    log_level: str = "INFO"

    @classmethod
    def create_default(cls) -> "ViewerSettings":
        """Create a new ViewerSettings object with default values."""
        return cls()

    @classmethod
    def load(cls, path: str) -> "ViewerSettings":
        """
        Load settings from file.

        Keys that are missing or hold unusable values keep their defaults.

        Args:
            path: Path to the settings file

        Returns:
            ViewerSettings object with loaded values

        Raises:
            OSError: If the file cannot be read
            json.JSONDecodeError: If file contains invalid JSON
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        logger = logging.getLogger("ViewerSettings")
        settings = cls.create_default()

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.warning("settings file %s does not hold an object, using defaults", path)
            return settings

        overflow = data.get("codeOverflow", settings.code_overflow.value)
        try:
            settings.code_overflow = CodeOverflow(overflow)

        except ValueError:
            logger.warning("invalid codeOverflow value %r", overflow)

        settings.table_min_column_width = cls._read_int(data, "tableMinColumnWidth", settings.table_min_column_width, 1)
        settings.tab_width = cls._read_int(data, "tabWidth", settings.tab_width, 1)
        settings.poll_interval_ms = cls._read_int(data, "pollIntervalMs", settings.poll_interval_ms, 10)

        log_level = str(data.get("logLevel", settings.log_level)).upper()
        if log_level in _LOG_LEVELS:
            settings.log_level = log_level

        else:
            logger.warning("invalid logLevel value %r", log_level)

        return settings

    @staticmethod
    def _read_int(data: dict, key: str, default: int, minimum: int) -> int:
        value = data.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
            logging.getLogger("ViewerSettings").warning("invalid %s value %r", key, value)
            return default

        return value

    def layout_settings(self) -> LayoutSettings:
        """Get the subset of settings that drives layout."""
        return LayoutSettings(
            code_overflow=self.code_overflow,
            table_min_column_width=self.table_min_column_width
        )
