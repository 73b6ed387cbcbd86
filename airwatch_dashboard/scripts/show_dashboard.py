#!/usr/bin/env python
"""
Script to load a city and print the dashboard snapshot.
Usage: python show_dashboard.py --city Mumbai --seed 7
"""
import sys
import asyncio
import argparse
import logging
from pathlib import Path
from dotenv import load_dotenv

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

# Import application modules
from airwatch.config.settings import CITIES, load_runtime_settings
from airwatch.models.dashboard import DashboardController
from airwatch.models.simulator import ReadingSimulator, series_to_frame

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    """Parse command line arguments."""
    settings = load_runtime_settings()
    parser = argparse.ArgumentParser(description="Show the air quality dashboard for a city")
    parser.add_argument(
        "--city",
        type=str,
        choices=list(CITIES.keys()),
        default=settings["city"],
        help="City to display"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings["seed"],
        help="Random seed for the simulator"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=settings["fetch_delay"],
        help="Simulated fetch latency in seconds"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format"
    )
    return parser.parse_args()


async def load(args):
    controller = DashboardController(
        ReadingSimulator(seed=args.seed),
        initial_city=args.city,
        fetch_delay=args.delay,
    )
    try:
        snapshot = await controller.load_city(args.city)
        return controller.state, snapshot
    finally:
        controller.close()


def main():
    """Main function to show the dashboard."""
    args = parse_args()

    try:
        state, snapshot = asyncio.run(load(args))

        if args.json:
            print(snapshot.model_dump_json(indent=2))
            return 0

        if snapshot.data_unavailable:
            print(f"\nData unavailable for {snapshot.selected_city}\n")
            return 0

        reading = snapshot.current_reading
        print(f"\nAir Quality in {snapshot.selected_city}:")
        print(f"-------------------------")
        print(f"AQI: {int(reading.aqi)} - {snapshot.classification.category}")
        print(f"Last updated: {reading.timestamp:%H:%M:%S}")
        for pollutant in reading.pollutants:
            print(f"  {pollutant.name}: {pollutant.value:.0f} {pollutant.unit}")
        if snapshot.active_alert:
            print(f"ALERT: {snapshot.active_alert.message}")
        if snapshot.weather:
            print(f"Temperature: {snapshot.weather.temperature_c:.0f}°C")
            print(f"Humidity: {snapshot.weather.humidity_pct:.0f}%")
            print(f"Wind Speed: {snapshot.weather.wind_speed_kmh:.0f} km/h")
        print(f"\nHealth Advice:")
        for advice in snapshot.advisories:
            print(f"  - {advice}")
        print(f"\nVulnerable Groups:")
        for group, risk in snapshot.vulnerable_group_risks.items():
            print(f"  {group}: {risk} Risk")
        print(f"\nWeekly Trend:")
        print(series_to_frame(state.historical_series).to_string(index=False))
        print(f"\nForecast:")
        print(series_to_frame(state.forecast_series)[["label", "aqi", "confidence"]].to_string(index=False))
        print(f"\nPollution Sources:")
        for source in snapshot.pollution_sources:
            print(f"  {source.name}: {source.percentage}%")
        print(f"-------------------------\n")
        return 0

    except Exception as e:
        logger.error(f"Error loading dashboard: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
