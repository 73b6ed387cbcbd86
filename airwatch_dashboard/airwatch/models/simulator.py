"""
Simulated air quality readings.

Generates per-city readings around a fixed baseline AQI, plus a weekly trend
and a short forecast. All randomness comes from the injected random source
so a seeded random.Random gives reproducible output.

The values are noise, not a model:
- Pollutant levels are drawn independently of the current AQI
- Consecutive historical days are not correlated
- Forecast confidence is unrelated to the forecast AQI
"""
import logging
import random
from dataclasses import asdict
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from .air_quality import (
    City,
    ForecastPoint,
    HistoricalPoint,
    PollutantLevel,
    Reading,
    UnknownCityError,
    load_cities
)
from ..config.settings import (
    AQI_MAX,
    AQI_MIN,
    CURRENT_AQI_VARIATION,
    FORECAST_AQI_RANGE,
    FORECAST_CONFIDENCE_RANGE,
    FORECAST_DAYS,
    HISTORICAL_DAYS,
    HISTORICAL_RANGES,
    POLLUTANT_LABELS,
    POLLUTANT_RANGES
)

logger = logging.getLogger(__name__)


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def format_forecast_label(day: date) -> str:
    """Short weekday, month and day, e.g. 'Sun, Oct 18'."""
    return f"{day:%a}, {day:%b} {day.day}"


class ReadingSimulator:
    """
    Produces synthetic readings for the configured cities.
    """

    def __init__(
        self,
        cities: Optional[Dict[str, City]] = None,
        rng: Optional[random.Random] = None,
        *,
        seed: Optional[int] = None
    ):
        """
        Initialize the simulator.

        Args:
            cities: Cities keyed by name, defaults to the configured cities
            rng: Random source exposing uniform() and randrange()
            seed: Seed for a new random.Random, used when rng is not given
        """
        self.cities = cities if cities is not None else load_cities()
        self._rng = rng if rng is not None else random.Random(seed)

    def get_city(self, city_name: str) -> City:
        if city_name not in self.cities:
            raise UnknownCityError(city_name)
        return self.cities[city_name]

    def _draw(self, bounds) -> int:
        low, high = bounds[0], bounds[1]
        return self._rng.randrange(low, high)

    def current_reading(self, city_name: str, now: Optional[datetime] = None) -> Reading:
        """
        Produce the current reading for a city.

        AQI is the city baseline plus a uniform variation, clamped to the
        AQI scale.

        Args:
            city_name: Configured city name
            now: Reading timestamp, defaults to the current time

        Returns:
            Reading for the city
        """
        city = self.get_city(city_name)
        if now is None:
            now = datetime.now()

        variation = self._rng.uniform(-CURRENT_AQI_VARIATION, CURRENT_AQI_VARIATION)
        aqi = _clamp(city.baseline_aqi + variation, AQI_MIN, AQI_MAX)

        levels = {name: float(self._draw(bounds)) for name, bounds in POLLUTANT_RANGES.items()}

        logger.debug(f"Simulated reading for {city.name}: AQI {aqi:.1f}")
        return Reading(
            city_name=city.name,
            aqi=aqi,
            pm25=levels["pm25"],
            pm10=levels["pm10"],
            no2=levels["no2"],
            o3=levels["o3"],
            timestamp=now
        )

    def historical_series(self) -> List[HistoricalPoint]:
        """
        Generate the weekly trend, one point per weekday from Monday.

        Returns:
            List of 7 HistoricalPoint objects
        """
        return [
            HistoricalPoint(
                label=day,
                aqi=self._draw(HISTORICAL_RANGES["aqi"]),
                pm25=self._draw(HISTORICAL_RANGES["pm25"]),
                pm10=self._draw(HISTORICAL_RANGES["pm10"])
            )
            for day in HISTORICAL_DAYS
        ]

    def forecast_series(self, today: Optional[date] = None) -> List[ForecastPoint]:
        """
        Generate the forecast for today and the following days.

        Args:
            today: First forecast day, defaults to today's date

        Returns:
            List of FORECAST_DAYS ForecastPoint objects
        """
        if today is None:
            today = date.today()

        forecast = []
        for i in range(FORECAST_DAYS):
            day = today + timedelta(days=i)
            forecast.append(
                ForecastPoint(
                    date=day,
                    label=format_forecast_label(day),
                    aqi=self._draw(FORECAST_AQI_RANGE),
                    confidence=self._draw(FORECAST_CONFIDENCE_RANGE)
                )
            )
        return forecast


def pollutant_levels(reading: Reading) -> List[PollutantLevel]:
    """Get the pollutant levels of a reading in display order."""
    return [
        PollutantLevel(name=POLLUTANT_LABELS[name], value=getattr(reading, name), unit=unit)
        for name, (_, _, unit) in POLLUTANT_RANGES.items()
    ]


def series_to_frame(points: Sequence[Union[HistoricalPoint, ForecastPoint]]) -> pd.DataFrame:
    """
    Convert a historical or forecast series to a DataFrame for charting.

    Args:
        points: Series points

    Returns:
        DataFrame with one row per point
    """
    return pd.DataFrame([asdict(point) for point in points])
