"""
Health advice and vulnerable group risk levels.
"""
from typing import Dict, List, Optional, Tuple

from ..config.settings import HEALTH_ADVICE, VULNERABLE_GROUP_THRESHOLDS
from .aqi_calculator import classify


RISK_LEVELS = ["Low", "Moderate", "High"]


def advice_for(category: str) -> List[str]:
    """
    Get the recommended actions for a category, most urgent first.

    Args:
        category: Category name as produced by classify()

    Returns:
        List of advisory strings, empty for an unknown category
    """
    return list(HEALTH_ADVICE.get(category, []))


def health_advice_for_aqi(aqi: float) -> List[str]:
    """Get the recommended actions for an AQI value."""
    return advice_for(classify(aqi).category)


def vulnerable_group_risk(
    aqi: float,
    group: str,
    thresholds: Optional[Dict[str, Tuple[float, str, str]]] = None
) -> str:
    """
    Get the risk level for a vulnerable group.

    Each group has its own threshold: above it the group gets its high
    risk level, at or below it the group's baseline level.

    Args:
        aqi: AQI value
        group: Vulnerable group name (e.g., 'Children')
        thresholds: Threshold table, defaults to VULNERABLE_GROUP_THRESHOLDS

    Returns:
        One of 'Low', 'Moderate' or 'High'
    """
    if thresholds is None:
        thresholds = VULNERABLE_GROUP_THRESHOLDS

    if group not in thresholds:
        raise ValueError(f"Unsupported vulnerable group: {group}")

    threshold, risk_above, risk_at_or_below = thresholds[group]
    if risk_above not in RISK_LEVELS or risk_at_or_below not in RISK_LEVELS:
        raise ValueError(f"Unsupported risk level for {group}: {risk_above}, {risk_at_or_below}")
    return risk_above if aqi > threshold else risk_at_or_below


def vulnerable_group_risks(
    aqi: float,
    thresholds: Optional[Dict[str, Tuple[float, str, str]]] = None
) -> Dict[str, str]:
    """Get the risk level of every vulnerable group, in table order."""
    if thresholds is None:
        thresholds = VULNERABLE_GROUP_THRESHOLDS
    return {group: vulnerable_group_risk(aqi, group, thresholds) for group in thresholds}
