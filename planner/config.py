"""
Configuration parser for Monthly Planner.

Handles TOML file parsing. Every section is optional; missing values fall
back to the dataclass defaults.
"""

import tomllib
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .date_utils import MONTH_NAMES, WEEK_DAY_NAMES
from .event_model import DEFAULT_CATEGORIES
from .event_storage import get_default_storage_path


@dataclass
class LayoutConfig:
    """Configuration for the time grid."""
    day_start_hour: int = 6    # First hour shown in day/week view
    day_end_hour: int = 22     # Events may not end after this hour
    max_columns: int = 3       # Side-by-side columns for overlapping events
    drag_snap_minutes: int = 15
    min_height_fraction: float = 0.02

    def __post_init__(self):
        if not 0 <= self.day_start_hour < self.day_end_hour <= 24:
            raise ValueError(
                f"Invalid day window: {self.day_start_hour}-{self.day_end_hour}"
            )
        if self.max_columns < 1:
            raise ValueError("max_columns must be at least 1")
        if self.drag_snap_minutes < 1:
            raise ValueError("drag_snap_minutes must be at least 1")

    @property
    def day_end_minutes(self) -> int:
        return self.day_end_hour * 60

    @property
    def window_hours(self) -> int:
        return self.day_end_hour - self.day_start_hour


@dataclass
class LocalizationConfig:
    """Configuration for localized day and month names."""
    day_names: list[str] = None  # Mon Tue Wed Thu Fri Sat Sun
    month_names: list[str] = None  # January February ... December

    def __post_init__(self):
        if self.day_names is None:
            self.day_names = list(WEEK_DAY_NAMES)
        if self.month_names is None:
            self.month_names = list(MONTH_NAMES)

    def get_day_name(self, weekday: int) -> str:
        """Get localized day name for weekday (0=Monday, 6=Sunday)."""
        return self.day_names[weekday] if 0 <= weekday < len(self.day_names) else ""

    def get_month_name(self, month: int) -> str:
        """Get localized month name (1=January, 12=December)."""
        return self.month_names[month - 1] if 1 <= month <= len(self.month_names) else ""


@dataclass
class CategoriesConfig:
    """Event categories offered by the planner."""
    names: list[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))


@dataclass
class HolidaysConfig:
    """Holidays to mark in the grids."""
    include_defaults: bool = True
    # date key -> holiday name, added on top of (or instead of) the defaults
    extra: dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Main configuration container for Monthly Planner."""

    storage_file: Path
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    localization: LocalizationConfig = field(default_factory=LocalizationConfig)
    categories: CategoriesConfig = field(default_factory=CategoriesConfig)
    holidays: HolidaysConfig = field(default_factory=HolidaysConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'monthly-planner' / 'monthly-planner.toml'

    @classmethod
    def get_default_storage_path(cls) -> Path:
        """Get the default event storage file path."""
        return get_default_storage_path()

    @classmethod
    def default(cls) -> 'Config':
        """Configuration used when no file is given."""
        return cls(storage_file=cls.get_default_storage_path())

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        general = data.get('General', {})
        storage_file_str = general.get('storage_file', str(cls.get_default_storage_path()))
        storage_file = Path(os.path.expanduser(storage_file_str))

        layout_data = data.get('Layout', {})
        layout = LayoutConfig(
            day_start_hour=layout_data.get('day_start_hour', LayoutConfig.day_start_hour),
            day_end_hour=layout_data.get('day_end_hour', LayoutConfig.day_end_hour),
            max_columns=layout_data.get('max_columns', LayoutConfig.max_columns),
            drag_snap_minutes=layout_data.get('drag_snap_minutes', LayoutConfig.drag_snap_minutes),
            min_height_fraction=layout_data.get('min_height_fraction', LayoutConfig.min_height_fraction),
        )

        localization_data = data.get('Localization', {})
        day_names_str = localization_data.get('day_names', '')
        month_names_str = localization_data.get('month_names', '')

        localization = LocalizationConfig(
            day_names=day_names_str.split() if day_names_str else None,
            month_names=month_names_str.split() if month_names_str else None,
        )

        categories_data = data.get('Categories', {})
        category_names = categories_data.get('names')
        categories = CategoriesConfig(names=list(category_names)) if category_names else CategoriesConfig()

        holidays_data = data.get('Holidays', {})
        holidays = HolidaysConfig(
            include_defaults=holidays_data.get('include_defaults', True),
            extra={
                str(key): str(value)
                for key, value in holidays_data.items()
                if key != 'include_defaults'
            },
        )

        return cls(
            storage_file=storage_file,
            layout=layout,
            localization=localization,
            categories=categories,
            holidays=holidays,
        )
