"""
Main entry point for the AirWatch dashboard engine.

Loads the configured default city once and prints the published snapshot.
"""
import asyncio
import logging
import sys
from dotenv import load_dotenv

from airwatch.config.settings import load_runtime_settings
from airwatch.models.air_quality import ConfigurationError
from airwatch.models.dashboard import DashboardController
from airwatch.models.simulator import ReadingSimulator

# Load environment variables
load_dotenv()

settings = load_runtime_settings()

# Configure logging
logging.basicConfig(
    level=settings["log_level"],
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def run(city: str) -> str:
    """Load one city and return the snapshot as JSON."""
    controller = DashboardController(
        ReadingSimulator(seed=settings["seed"]),
        initial_city=city,
        fetch_delay=settings["fetch_delay"],
        fetch_timeout=settings["fetch_timeout"],
    )
    try:
        snapshot = await controller.load_city(city)
    finally:
        controller.close()
    return snapshot.model_dump_json(indent=2)


def main():
    """Run the dashboard engine for the default city."""
    logger.info(f"Starting AirWatch dashboard for {settings['city']}")
    try:
        print(asyncio.run(run(settings["city"])))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {str(e)}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
