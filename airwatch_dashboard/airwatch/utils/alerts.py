"""
Pollution alert evaluation.
"""
import logging
import math
from datetime import datetime
from typing import Optional

from ..config.settings import ALERT_AQI_THRESHOLD, ALERT_SEVERITY
from ..models.air_quality import Alert, Reading
from .aqi_calculator import classify

logger = logging.getLogger(__name__)


def evaluate(
    reading: Reading,
    category: Optional[str] = None,
    now: Optional[datetime] = None,
    threshold: float = ALERT_AQI_THRESHOLD
) -> Optional[Alert]:
    """
    Decide whether a reading raises an alert.

    Every call re-evaluates from scratch: a reading above the threshold
    gives exactly one alert, anything else clears it.

    Args:
        reading: Current reading
        category: Category name for the reading, classified when omitted
        now: Time the alert is raised, defaults to the current time
        threshold: Alerts are raised strictly above this AQI

    Returns:
        Alert, or None when the AQI is at or below the threshold
    """
    if reading.aqi <= threshold:
        return None

    if category is None:
        category = classify(reading.aqi).category
    if now is None:
        now = datetime.now()

    message = (
        f"High pollution alert in {reading.city_name}! "
        f"AQI is {math.floor(reading.aqi)} - {category}"
    )
    logger.info(message)
    return Alert(severity=ALERT_SEVERITY, message=message, raised_at=now)
