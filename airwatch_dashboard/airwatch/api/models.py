"""
Data models published to the dashboard view layer.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
import datetime as dt
from datetime import datetime


class CityModel(BaseModel):
    """City reference data."""
    name: str
    latitude: float
    longitude: float
    baseline_aqi: int


class PollutantLevelModel(BaseModel):
    """Pollutant level shown next to the current AQI."""
    name: str
    value: float
    unit: str


class ReadingModel(BaseModel):
    """Current reading for the selected city."""
    city_name: str
    aqi: float = Field(..., ge=0, le=500)
    pm25: float = Field(..., ge=0)
    pm10: float = Field(..., ge=0)
    no2: float = Field(..., ge=0)
    o3: float = Field(..., ge=0)
    timestamp: datetime
    pollutants: List[PollutantLevelModel] = []


class ClassificationModel(BaseModel):
    """AQI category information."""
    category: str
    severity: int
    color: str
    background: str


class HistoricalPointModel(BaseModel):
    """One day of the weekly trend."""
    label: str
    aqi: int
    pm25: int
    pm10: int


class ForecastPointModel(BaseModel):
    """One forecast day. Confidence is synthetic."""
    date: dt.date
    label: str
    aqi: int
    confidence: int = Field(..., ge=70, lt=100)


class AlertModel(BaseModel):
    """Active pollution alert."""
    severity: str
    message: str
    raised_at: datetime


class WeatherModel(BaseModel):
    """Static weather panel."""
    temperature_c: float
    humidity_pct: float
    wind_speed_kmh: float


class PollutionSourceModel(BaseModel):
    """Static pollution source share."""
    name: str
    percentage: int
    color: str


class DashboardSnapshot(BaseModel):
    """Everything the view layer renders for one update."""
    selected_city: str
    loading: bool
    data_unavailable: bool = False
    current_reading: Optional[ReadingModel] = None
    classification: Optional[ClassificationModel] = None
    historical_series: List[HistoricalPointModel] = []
    forecast_series: List[ForecastPointModel] = []
    advisories: List[str] = []
    vulnerable_group_risks: Dict[str, str] = {}
    active_alert: Optional[AlertModel] = None
    pollution_sources: List[PollutionSourceModel] = []
    weather: Optional[WeatherModel] = None
    cities: List[CityModel] = []
    updated_at: datetime = Field(default_factory=datetime.now)
