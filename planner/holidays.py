"""
Holiday lookup for the month and week grids.
"""

from datetime import date
from typing import Mapping, Optional, Union

from .config import HolidaysConfig
from .date_utils import format_date


# Public holidays for 2026 (Peru)
DEFAULT_HOLIDAYS: dict[str, str] = {
    "2026-01-01": "Año Nuevo",
    "2026-04-02": "Semana Santa",
    "2026-04-03": "Semana Santa",
    "2026-05-01": "Día del Trabajo",
    "2026-06-07": "Batalla de Arica y Día de la Bandera",
    "2026-06-29": "Día de San Pedro y San Pablo",
    "2026-07-23": "Día de la Fuerza Aérea del Perú",
    "2026-07-28": "Fiestas Patrias",
    "2026-07-29": "Fiestas Patrias",
    "2026-08-06": "Batalla de Junín",
    "2026-08-30": "Santa Rosa de Lima",
    "2026-10-08": "Combate de Angamos",
    "2026-11-01": "Día de Todos los Santos",
    "2026-12-08": "Inmaculada Concepción",
    "2026-12-09": "Batalla de Ayacucho",
    "2026-12-25": "Navidad",
}


class HolidayCalendar:
    """Maps date keys to holiday names."""

    def __init__(self, holidays: Optional[Mapping[str, str]] = None):
        self._holidays = dict(DEFAULT_HOLIDAYS if holidays is None else holidays)

    @classmethod
    def from_config(cls, config: HolidaysConfig) -> 'HolidayCalendar':
        holidays = dict(DEFAULT_HOLIDAYS) if config.include_defaults else {}
        holidays.update(config.extra)
        return cls(holidays)

    @staticmethod
    def _key(day: Union[date, str]) -> str:
        return day if isinstance(day, str) else format_date(day)

    def is_holiday(self, day: Union[date, str]) -> bool:
        return self._key(day) in self._holidays

    def holiday_name(self, day: Union[date, str]) -> Optional[str]:
        """Holiday name for a date or date key, or None."""
        return self._holidays.get(self._key(day))

    def __len__(self) -> int:
        return len(self._holidays)
