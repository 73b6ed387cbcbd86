"""
City reference data and air quality record types.
"""
import json
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Dict, List, Optional

from ..config.settings import AQI_MAX, AQI_MIN, CITIES, POLLUTION_SOURCES, WEATHER_CONDITIONS


class ConfigurationError(ValueError):
    """Raised at startup when the reference data is unusable."""


class UnknownCityError(ConfigurationError):
    """Raised when a city name is not part of the configured city set."""

    def __init__(self, city_name: str):
        super().__init__(f"City '{city_name}' is not configured")
        self.city_name = city_name


class ReadingUnavailableError(Exception):
    """Raised by a reading source that cannot produce a reading."""


@dataclass(frozen=True)
class City:
    """
    A city the dashboard can display, centred on a fixed baseline AQI.
    """
    name: str
    latitude: float
    longitude: float
    baseline_aqi: int

    def is_valid(self) -> bool:
        """Check if the city is valid."""
        return (
            len(self.name) > 0 and
            -90.0 <= self.latitude <= 90.0 and
            -180.0 <= self.longitude <= 180.0 and
            AQI_MIN <= self.baseline_aqi <= AQI_MAX
        )

    def to_json(self) -> str:
        """Convert to JSON representation."""
        return json.dumps(asdict(self), sort_keys=True, indent=2)


@dataclass(frozen=True)
class Reading:
    """A single current reading for a city."""
    city_name: str
    aqi: float
    pm25: float
    pm10: float
    no2: float
    o3: float
    timestamp: datetime


@dataclass(frozen=True)
class PollutantLevel:
    name: str
    value: float
    unit: str


@dataclass(frozen=True)
class HistoricalPoint:
    label: str
    aqi: int
    pm25: int
    pm10: int


@dataclass(frozen=True)
class ForecastPoint:
    """
    One forecast day. The confidence is a synthetic placeholder and carries
    no predictive meaning.
    """
    date: date
    label: str
    aqi: int
    confidence: int


@dataclass(frozen=True)
class Alert:
    severity: str
    message: str
    raised_at: datetime


@dataclass(frozen=True)
class PollutionSource:
    name: str
    percentage: int
    color: str


@dataclass(frozen=True)
class WeatherConditions:
    """Static weather panel. Not derived from readings."""
    temperature_c: float
    humidity_pct: float
    wind_speed_kmh: float


def _build_city(name, row) -> City:
    try:
        latitude, longitude, baseline = row
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Malformed city entry for '{name}': {row!r}") from e

    # Baselines are whole AQI values
    if isinstance(baseline, bool) or not isinstance(baseline, int):
        raise ConfigurationError(f"Baseline AQI for '{name}' must be an integer: {baseline!r}")

    try:
        city = City(
            name=str(name),
            latitude=float(latitude),
            longitude=float(longitude),
            baseline_aqi=baseline
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Malformed city entry for '{name}': {row!r}") from e

    if not city.is_valid():
        raise ConfigurationError(f"Invalid city entry for '{name}': {row!r}")
    return city


def load_cities(table: Optional[Dict[str, tuple]] = None) -> Dict[str, City]:
    """
    Build the configured cities from a name => (lat, lng, baseline) table.

    Args:
        table: City table, defaults to the CITIES setting

    Returns:
        Dictionary of City objects keyed by name, in table order

    Raises:
        ConfigurationError: If an entry is malformed or a name is repeated
    """
    if table is None:
        table = CITIES

    cities = {}
    for name, row in table.items():
        city = _build_city(name, row)
        if city.name in cities:
            raise ConfigurationError(f"Duplicate city name: {city.name}")
        cities[city.name] = city

    if not cities:
        raise ConfigurationError("No cities configured")
    return cities


def get_pollution_sources() -> List[PollutionSource]:
    """
    Get the static pollution source breakdown.

    This data is not derived from readings.
    """
    sources = [
        PollutionSource(name=name, percentage=percentage, color=color)
        for name, percentage, color in POLLUTION_SOURCES
    ]
    total = sum(source.percentage for source in sources)
    if total != 100:
        raise ConfigurationError(f"Pollution source percentages sum to {total}, expected 100")
    return sources


def get_weather_conditions() -> WeatherConditions:
    """Get the static weather panel values."""
    return WeatherConditions(**WEATHER_CONDITIONS)
