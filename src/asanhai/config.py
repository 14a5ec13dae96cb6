"""Configuration management for asanhai."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.tasks import Bucket

logger = logging.getLogger(__name__)

ASANHAI_HOME = Path(os.environ.get("ASANHAI_HOME", Path.home() / "asanhai"))
CONFIG_FILE = ASANHAI_HOME / "config" / "asanhai.conf"
DATA_DIR = ASANHAI_HOME / "data"


@dataclass
class Config:
    """asanhai configuration."""

    data_dir: str = ""
    default_filter: str = Bucket.ALL.value
    date_format: str = "%d/%m/%Y"
    timestamp_format: str = "%d/%m/%Y %H:%M"


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from asanhai.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "default_filter":
                try:
                    config.default_filter = Bucket(value.lower()).value
                except ValueError:
                    logger.warning(f"Ignoring unknown DEFAULT_FILTER: {value}")
            case "date_format":
                config.date_format = value
            case "timestamp_format":
                config.timestamp_format = value

    return config
