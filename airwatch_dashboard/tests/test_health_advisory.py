"""
Tests for health advice and vulnerable group risks.
"""
import sys
import unittest
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from airwatch.utils.aqi_calculator import CATEGORY_ORDER
from airwatch.utils.health_advisory import (
    RISK_LEVELS,
    advice_for,
    health_advice_for_aqi,
    vulnerable_group_risk,
    vulnerable_group_risks
)


class TestAdviceFor(unittest.TestCase):
    """Tests for advice_for."""

    def test_every_category_has_advice(self):
        for category in CATEGORY_ORDER:
            advice = advice_for(category)
            self.assertGreaterEqual(len(advice), 3)
            self.assertLessEqual(len(advice), 4)

    def test_unknown_category(self):
        self.assertEqual(advice_for("Unknown"), [])

    def test_advice_order(self):
        advice = advice_for("Hazardous")
        self.assertEqual(advice[0], "Emergency conditions - stay indoors!")

    def test_advice_returns_copy(self):
        advice = advice_for("Good")
        advice.clear()
        self.assertEqual(len(advice_for("Good")), 3)

    def test_health_advice_for_aqi(self):
        self.assertEqual(health_advice_for_aqi(195), advice_for("Unhealthy"))
        self.assertEqual(health_advice_for_aqi(95), advice_for("Moderate"))


class TestVulnerableGroupRisk(unittest.TestCase):
    """Tests for vulnerable_group_risk."""

    def test_children(self):
        self.assertEqual(vulnerable_group_risk(100, "Children"), "Moderate")
        self.assertEqual(vulnerable_group_risk(101, "Children"), "High")

    def test_elderly(self):
        self.assertEqual(vulnerable_group_risk(150, "Elderly"), "Moderate")
        self.assertEqual(vulnerable_group_risk(150.5, "Elderly"), "High")

    def test_heart_disease(self):
        self.assertEqual(vulnerable_group_risk(40, "Heart Disease"), "Low")
        self.assertEqual(vulnerable_group_risk(120, "Heart Disease"), "High")

    def test_respiratory_issues(self):
        self.assertEqual(vulnerable_group_risk(100, "Respiratory Issues"), "Moderate")
        self.assertEqual(vulnerable_group_risk(130, "Respiratory Issues"), "High")

    def test_unknown_group(self):
        with self.assertRaises(ValueError):
            vulnerable_group_risk(100, "Athletes")

    def test_custom_thresholds(self):
        thresholds = {"Children": (50, "High", "Low")}
        self.assertEqual(vulnerable_group_risk(60, "Children", thresholds), "High")
        self.assertEqual(vulnerable_group_risk(50, "Children", thresholds), "Low")

    def test_unsupported_risk_level(self):
        thresholds = {"Children": (50, "Severe", "Low")}
        with self.assertRaises(ValueError):
            vulnerable_group_risk(60, "Children", thresholds)

    def test_all_groups(self):
        risks = vulnerable_group_risks(120)
        self.assertEqual(
            risks,
            {
                "Children": "High",
                "Elderly": "Moderate",
                "Heart Disease": "High",
                "Respiratory Issues": "High"
            }
        )
        self.assertEqual(list(risks), ["Children", "Elderly", "Heart Disease", "Respiratory Issues"])
        for risk in vulnerable_group_risks(300).values():
            self.assertIn(risk, RISK_LEVELS)


if __name__ == "__main__":
    unittest.main()
