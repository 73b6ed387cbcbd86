#!/usr/bin/env python
"""
Script to classify an AQI value and show the health advice for it.
Usage: python calculate_aqi.py --aqi 165
"""
import sys
import argparse
import logging
import json
from pathlib import Path
from datetime import date

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

# Import application modules
from airwatch.utils.aqi_calculator import classify, get_category_from_aqi, is_unhealthy
from airwatch.utils.health_advisory import health_advice_for_aqi, vulnerable_group_risks

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Classify an AQI value")
    parser.add_argument(
        "--aqi",
        type=float,
        required=True,
        help="AQI value"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format"
    )
    return parser.parse_args()


def main():
    """Main function to classify an AQI value."""
    args = parse_args()

    try:
        classification = classify(args.aqi)
        category = get_category_from_aqi(args.aqi)
        advice = health_advice_for_aqi(args.aqi)
        risks = vulnerable_group_risks(args.aqi)

        if args.json:
            result = {
                "aqi": args.aqi,
                "category": classification.category,
                "severity": classification.severity,
                "color": classification.color,
                "range": category["range"],
                "unhealthy": is_unhealthy(args.aqi),
                "health_implications": category["health_implications"],
                "advice": advice,
                "vulnerable_groups": risks,
                "date": date.today().isoformat()
            }
            print(json.dumps(result, indent=2))
        else:
            print(f"\nAQI Classification Results:")
            print(f"----------------------------")
            print(f"AQI Value: {args.aqi}")
            print(f"Category: {classification.category} ({category['range']})")
            print(f"Color Code: {classification.color}")
            print(f"Unhealthy: {'Yes' if is_unhealthy(args.aqi) else 'No'}")
            print(f"Health Implications: {category['health_implications']}")
            print(f"Advice:")
            for item in advice:
                print(f"  - {item}")
            print(f"Vulnerable Groups:")
            for group, risk in risks.items():
                print(f"  {group}: {risk} Risk")
            print(f"----------------------------\n")

        return 0

    except Exception as e:
        logger.error(f"Error classifying AQI: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
