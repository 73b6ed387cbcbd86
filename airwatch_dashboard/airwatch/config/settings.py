"""
Configuration settings for the AirWatch dashboard engine.
"""
import os
from typing import Any, Dict


# Dashboard settings
DEFAULT_CITY = "Delhi"
DEFAULT_FETCH_DELAY_SECS = 1.0  # Simulated network latency
DEFAULT_FETCH_TIMEOUT_SECS = None  # No timeout for the simulator
DEFAULT_LOG_LEVEL = "INFO"

# Environment variable names read by the entry points
ENV_DEFAULT_CITY = "AIRWATCH_DEFAULT_CITY"
ENV_FETCH_DELAY_SECS = "AIRWATCH_FETCH_DELAY_SECS"
ENV_FETCH_TIMEOUT_SECS = "AIRWATCH_FETCH_TIMEOUT_SECS"
ENV_RANDOM_SEED = "AIRWATCH_RANDOM_SEED"
ENV_LOG_LEVEL = "AIRWATCH_LOG_LEVEL"

# AQI bounds
AQI_MIN = 0
AQI_MAX = 500

# Alerts are raised strictly above this value
ALERT_AQI_THRESHOLD = 150
ALERT_SEVERITY = "warning"

# AQI categories - upper bound (inclusive) => category information.
# The last tier has no upper bound.
AQI_CATEGORIES = [
    (50, {
        "name": "Good",
        "range": "0-50",
        "color": "#00e400",
        "background": "bg-green-100",
        "health_implications": "Air quality is considered satisfactory, and air pollution poses little or no risk.",
        "cautionary_statement": "None"
    }),
    (100, {
        "name": "Moderate",
        "range": "51-100",
        "color": "#ffff00",
        "background": "bg-yellow-100",
        "health_implications": "Air quality is acceptable; however, for some pollutants there may be a moderate health concern for a very small number of people who are unusually sensitive to air pollution.",
        "cautionary_statement": "Active children and adults, and people with respiratory disease, such as asthma, should limit prolonged outdoor exertion."
    }),
    (150, {
        "name": "Unhealthy for Sensitive Groups",
        "range": "101-150",
        "color": "#ff7e00",
        "background": "bg-orange-100",
        "health_implications": "Members of sensitive groups may experience health effects. The general public is not likely to be affected.",
        "cautionary_statement": "Active children and adults, and people with respiratory disease, such as asthma, should limit prolonged outdoor exertion."
    }),
    (200, {
        "name": "Unhealthy",
        "range": "151-200",
        "color": "#ff0000",
        "background": "bg-red-100",
        "health_implications": "Everyone may begin to experience health effects; members of sensitive groups may experience more serious health effects.",
        "cautionary_statement": "Active children and adults, and people with respiratory disease, such as asthma, should avoid prolonged outdoor exertion; everyone else, especially children, should limit prolonged outdoor exertion."
    }),
    (300, {
        "name": "Very Unhealthy",
        "range": "201-300",
        "color": "#8f3f97",
        "background": "bg-purple-100",
        "health_implications": "Health warnings of emergency conditions. The entire population is more likely to be affected.",
        "cautionary_statement": "Active children and adults, and people with respiratory disease, such as asthma, should avoid all outdoor exertion; everyone else, especially children, should limit outdoor exertion."
    }),
    (None, {
        "name": "Hazardous",
        "range": "301-500",
        "color": "#7e0023",
        "background": "bg-red-200",
        "health_implications": "Health alert: everyone may experience more serious health effects.",
        "cautionary_statement": "Everyone should avoid all outdoor exertion."
    }),
]

# Recommended actions per category, most urgent first
HEALTH_ADVICE = {
    "Good": [
        "Perfect day for outdoor activities!",
        "Great air quality for jogging and sports",
        "Windows can be kept open for fresh air"
    ],
    "Moderate": [
        "Sensitive individuals should limit prolonged outdoor activities",
        "Generally acceptable air quality",
        "Good day for most outdoor activities"
    ],
    "Unhealthy for Sensitive Groups": [
        "Sensitive groups should reduce outdoor activities",
        "Consider wearing masks during outdoor activities",
        "Keep windows closed during peak hours"
    ],
    "Unhealthy": [
        "Avoid outdoor activities, especially jogging",
        "Keep children indoors during peak hours",
        "Wear N95 masks when going outside",
        "Use air purifiers if available"
    ],
    "Very Unhealthy": [
        "Seek medical attention if experiencing symptoms",
        "Stay indoors as much as possible",
        "Avoid all outdoor physical activities",
        "Use air purifiers and keep windows closed"
    ],
    "Hazardous": [
        "Emergency conditions - stay indoors!",
        "Consult healthcare provider if experiencing symptoms",
        "Avoid all outdoor activities",
        "Use air purifiers and seal windows"
    ]
}

# Vulnerable group => (AQI threshold, risk above threshold, risk at or below)
VULNERABLE_GROUP_THRESHOLDS = {
    "Children": (100, "High", "Moderate"),
    "Elderly": (150, "High", "Moderate"),
    "Heart Disease": (100, "High", "Low"),
    "Respiratory Issues": (100, "High", "Moderate"),
}

# Per-city reference data: name => (latitude, longitude, baseline AQI)
CITIES = {
    "Delhi": (28.6139, 77.2090, 180),
    "Mumbai": (19.0760, 72.8777, 120),
    "Bangalore": (12.9716, 77.5946, 95),
    "Chennai": (13.0827, 80.2707, 110),
    "Kolkata": (22.5726, 88.3639, 155),
    "Hyderabad": (17.3850, 78.4867, 85),
}

# Simulation settings
CURRENT_AQI_VARIATION = 20.0  # Current AQI = baseline +/- variation

# Pollutants shown next to the current AQI: name => (low, high, unit).
# Drawn independently of the AQI value.
POLLUTANT_RANGES = {
    "pm25": (20, 120, "μg/m³"),
    "pm10": (30, 180, "μg/m³"),
    "no2": (10, 90, "μg/m³"),
    "o3": (20, 140, "μg/m³"),
}

POLLUTANT_LABELS = {
    "pm25": "PM2.5",
    "pm10": "PM10",
    "no2": "NO2",
    "o3": "O3",
}

# Weekly trend ranges, upper bound exclusive
HISTORICAL_DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
HISTORICAL_RANGES = {
    "aqi": (50, 250),
    "pm25": (20, 120),
    "pm10": (30, 180),
}

# Forecast ranges, upper bound exclusive
FORECAST_DAYS = 3
FORECAST_AQI_RANGE = (70, 250)
FORECAST_CONFIDENCE_RANGE = (70, 100)

# Static pollution source breakdown (percentages sum to 100)
POLLUTION_SOURCES = [
    ("Vehicle Emissions", 35, "#ff6b6b"),
    ("Industrial Activity", 25, "#4ecdc4"),
    ("Construction Dust", 20, "#45b7d1"),
    ("Crop Burning", 15, "#f9ca24"),
    ("Other Sources", 5, "#6c5ce7"),
]

# Static weather panel shown next to the pollutant levels
WEATHER_CONDITIONS = {
    "temperature_c": 28,
    "humidity_pct": 65,
    "wind_speed_kmh": 12,
}


def _optional_float(value):
    if value is None or value.strip() == "":
        return None
    return float(value)


def load_runtime_settings() -> Dict[str, Any]:
    """
    Read the runtime settings from the environment.

    Call load_dotenv() first to pick up a .env file.

    Returns:
        Dictionary with city, fetch_delay, fetch_timeout, seed and log_level
    """
    seed = os.environ.get(ENV_RANDOM_SEED)
    return {
        "city": os.environ.get(ENV_DEFAULT_CITY, DEFAULT_CITY),
        "fetch_delay": float(os.environ.get(ENV_FETCH_DELAY_SECS, DEFAULT_FETCH_DELAY_SECS)),
        "fetch_timeout": _optional_float(os.environ.get(ENV_FETCH_TIMEOUT_SECS)),
        "seed": int(seed) if seed else None,
        "log_level": os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
    }
