"""
Utility functions for classifying AQI values into health categories.
"""
from dataclasses import dataclass
from typing import Any, Dict

from ..config.settings import AQI_CATEGORIES


# Category names in severity order
CATEGORY_ORDER = [cat_info["name"] for _, cat_info in AQI_CATEGORIES]


@dataclass(frozen=True)
class Classification:
    """Category, severity rank and display colors for an AQI value."""
    category: str
    severity: int
    color: str
    background: str


def _find_category(aqi: float):
    # Upper bounds are inclusive, so each tier is open below and closed above
    for severity, (upper, cat_info) in enumerate(AQI_CATEGORIES):
        if upper is None or aqi <= upper:
            return severity, cat_info
    # Unreachable while the last tier is unbounded
    return len(AQI_CATEGORIES) - 1, AQI_CATEGORIES[-1][1]


def classify(aqi: float) -> Classification:
    """
    Classify an AQI value.

    Defined over all reals: values below 0 are Good and values above 500
    are Hazardous.

    Args:
        aqi: AQI value

    Returns:
        Classification for the value
    """
    severity, cat_info = _find_category(aqi)
    return Classification(
        category=cat_info["name"],
        severity=severity,
        color=cat_info["color"],
        background=cat_info["background"]
    )


def get_category_from_aqi(aqi: float) -> Dict[str, Any]:
    """
    Get category information from AQI value.

    Args:
        aqi: AQI value

    Returns:
        Category information dictionary
    """
    _, cat_info = _find_category(aqi)
    return dict(cat_info)


def is_unhealthy(aqi: float) -> bool:
    """
    Determine if AQI is in the unhealthy range.

    Args:
        aqi: AQI value

    Returns:
        True if AQI is greater than 100 (Unhealthy for Sensitive Groups or worse)
    """
    return aqi > 100
