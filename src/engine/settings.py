"""
Scheduling settings: day intervals and defaults used when generating matches.
"""
import logging
import os
from dataclasses import asdict, dataclass, fields

import yaml

logger = logging.getLogger(__name__)

SETTINGS_FILE_ENV = 'SCHEDULE_SETTINGS_FILE'


@dataclass(frozen=True)
class ScheduleSettings:
    match_interval_days: int = 2
    round_interval_days: int = 7
    matches_per_day: int = 2
    default_qualifiers_per_group: int = 2

    @classmethod
    def from_dict(cls, data):
        """Build settings from a mapping, keeping defaults for missing keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown schedule setting '{key}'")
                continue
            try:
                values[key] = int(value)
            except (TypeError, ValueError):
                raise ValueError(f"Setting '{key}' must be an integer, got {value!r}")
            if values[key] < 1:
                raise ValueError(f"Setting '{key}' must be at least 1")
        return cls(**values)


DEFAULT_SETTINGS = ScheduleSettings()


def get_default_settings():
    """Return default settings as a plain dict."""
    return asdict(DEFAULT_SETTINGS)


def load_settings(file_path=None) -> ScheduleSettings:
    """Load settings from YAML; falls back to SCHEDULE_SETTINGS_FILE, then defaults."""
    file_path = file_path or os.environ.get(SETTINGS_FILE_ENV)
    if not file_path:
        return DEFAULT_SETTINGS
    with open(file_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"{file_path} must contain a mapping of settings")
    logger.debug(f"Loaded schedule settings from {file_path}")
    return ScheduleSettings.from_dict(data)
