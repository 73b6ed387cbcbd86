"""
Tests for the dashboard controller and its reducers.
"""
import asyncio
import sys
import unittest
from dataclasses import replace
from datetime import datetime
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from airwatch.models.air_quality import ReadingUnavailableError, UnknownCityError
from airwatch.models.dashboard import (
    DashboardController,
    DashboardState,
    reading_failed,
    reading_received,
    select_city
)
from airwatch.models.simulator import ReadingSimulator
from airwatch.utils.aqi_calculator import classify


NOW = datetime(2026, 10, 18, 9, 30, 0)


class FixedRandom:
    """Random source with a fixed variation; ranges give their lower bound."""

    def __init__(self, variation):
        self.variation = variation

    def uniform(self, a, b):
        return self.variation

    def randrange(self, start, stop):
        return start


class UnavailableSimulator(ReadingSimulator):
    """Reading source that always fails."""

    def current_reading(self, city_name, now=None):
        raise ReadingUnavailableError("sensor offline")


class MumbaiOfflineSimulator(ReadingSimulator):
    """Reading source that fails for Mumbai only."""

    def current_reading(self, city_name, now=None):
        if city_name == "Mumbai":
            raise ReadingUnavailableError("Mumbai sensors offline")
        return super().current_reading(city_name, now=now)


def make_controller(variation=0, **kwargs):
    kwargs.setdefault("fetch_delay", 0)
    return DashboardController(
        ReadingSimulator(rng=FixedRandom(variation)),
        clock=lambda: NOW,
        **kwargs
    )


class TestReducers(unittest.TestCase):
    """Tests for the pure state transitions."""

    def setUp(self):
        self.simulator = ReadingSimulator(rng=FixedRandom(15))
        self.reading = self.simulator.current_reading("Delhi", now=NOW)

    def _received(self, state, request_id):
        classification = classify(self.reading.aqi)
        return reading_received(
            state, request_id, self.reading, classification,
            ["advice"], {"Children": "High"}, None, [], []
        )

    def test_select_city(self):
        state = DashboardState(selected_city="Mumbai")
        new_state = select_city(state, "Delhi", 1)
        self.assertIsNot(new_state, state)
        self.assertEqual(state.selected_city, "Mumbai")
        self.assertFalse(state.loading)
        self.assertEqual(new_state.selected_city, "Delhi")
        self.assertTrue(new_state.loading)
        self.assertEqual(new_state.request_id, 1)
        self.assertIsNone(new_state.current_reading)

    def test_select_city_drops_previous_series(self):
        state = select_city(DashboardState(selected_city="Delhi"), "Delhi", 1)
        loaded = self._received(state, 1)
        loaded = replace(
            loaded,
            historical_series=tuple(self.simulator.historical_series()),
            forecast_series=tuple(self.simulator.forecast_series(today=NOW.date()))
        )
        switched = select_city(loaded, "Mumbai", 2)
        self.assertEqual(switched.historical_series, ())
        self.assertEqual(switched.forecast_series, ())
        self.assertIsNone(switched.classification)

    def test_reading_received(self):
        state = select_city(DashboardState(selected_city="Mumbai"), "Delhi", 1)
        new_state = self._received(state, 1)
        self.assertFalse(new_state.loading)
        self.assertEqual(new_state.current_reading, self.reading)
        self.assertEqual(new_state.classification.category, "Unhealthy")
        self.assertEqual(new_state.advisories, ("advice",))

    def test_stale_request_ignored(self):
        state = select_city(DashboardState(selected_city="Delhi"), "Delhi", 2)
        self.assertIs(self._received(state, 1), state)

    def test_other_city_ignored(self):
        state = select_city(DashboardState(selected_city="Delhi"), "Mumbai", 1)
        self.assertIs(self._received(state, 1), state)

    def test_reading_failed(self):
        state = select_city(DashboardState(selected_city="Delhi"), "Delhi", 3)
        failed = reading_failed(state, 3)
        self.assertTrue(failed.data_unavailable)
        self.assertFalse(failed.loading)
        self.assertIs(reading_failed(state, 2), state)

    def test_select_city_without_event_loop(self):
        controller = make_controller()
        with self.assertRaises(RuntimeError):
            controller.select_city("Mumbai")
        self.assertEqual(controller.state.selected_city, "Delhi")
        self.assertFalse(controller.state.loading)
        self.assertEqual(controller.state.request_id, 0)


class TestDashboardController(unittest.IsolatedAsyncioTestCase):
    """Tests for DashboardController."""

    async def test_delhi_alert(self):
        controller = make_controller(variation=15)
        snapshot = await controller.load_city("Delhi")

        self.assertFalse(snapshot.loading)
        self.assertEqual(snapshot.current_reading.aqi, 195)
        self.assertEqual(snapshot.classification.category, "Unhealthy")
        self.assertIsNotNone(snapshot.active_alert)
        self.assertIn("AQI is 195", snapshot.active_alert.message)
        self.assertEqual(snapshot.active_alert.raised_at, NOW)
        self.assertEqual(snapshot.vulnerable_group_risks["Elderly"], "High")
        self.assertEqual(snapshot.advisories[0], "Avoid outdoor activities, especially jogging")

    async def test_hyderabad_no_alert(self):
        controller = make_controller(variation=10)
        snapshot = await controller.load_city("Hyderabad")

        self.assertEqual(snapshot.current_reading.aqi, 95)
        self.assertEqual(snapshot.classification.category, "Moderate")
        self.assertIsNone(snapshot.active_alert)
        self.assertEqual(snapshot.vulnerable_group_risks["Heart Disease"], "Low")

    async def test_snapshot_contents(self):
        controller = make_controller()
        snapshot = await controller.load_city("Chennai")

        self.assertEqual(len(snapshot.historical_series), 7)
        self.assertEqual(len(snapshot.forecast_series), 3)
        self.assertEqual(snapshot.forecast_series[0].date, NOW.date())
        self.assertEqual(len(snapshot.pollution_sources), 5)
        self.assertEqual(len(snapshot.cities), 6)
        self.assertEqual(len(snapshot.current_reading.pollutants), 4)
        self.assertEqual(snapshot.updated_at, NOW)
        self.assertEqual(snapshot.weather.temperature_c, 28)
        self.assertEqual(snapshot.weather.humidity_pct, 65)
        self.assertEqual(snapshot.weather.wind_speed_kmh, 12)

        data = snapshot.model_dump(mode="json")
        for key in (
            "current_reading", "classification", "historical_series", "forecast_series",
            "advisories", "vulnerable_group_risks", "active_alert", "loading"
        ):
            self.assertIn(key, data)

    async def test_loading_published(self):
        controller = make_controller(variation=15)
        published = []
        controller.subscribe(published.append)

        task = controller.select_city("Delhi")
        self.assertTrue(controller.state.loading)
        await task

        self.assertEqual(len(published), 2)
        self.assertTrue(published[0].loading)
        self.assertFalse(published[1].loading)

    async def test_alert_cleared_on_new_city(self):
        controller = make_controller(variation=15)
        await controller.load_city("Delhi")
        self.assertIsNotNone(controller.state.active_alert)

        snapshot = await controller.load_city("Hyderabad")
        self.assertIsNone(snapshot.active_alert)

    async def test_rapid_reselection(self):
        controller = make_controller(variation=15, fetch_delay=0.05)
        published = []
        controller.subscribe(published.append)

        first = controller.select_city("Delhi")
        controller.select_city("Mumbai")
        await controller.wait_settled()

        self.assertTrue(first.cancelled())
        self.assertEqual(controller.state.selected_city, "Mumbai")
        self.assertEqual(controller.state.current_reading.city_name, "Mumbai")
        self.assertEqual(controller.state.current_reading.aqi, 135)
        for state in published:
            if state.current_reading is not None:
                self.assertEqual(state.current_reading.city_name, "Mumbai")
        await asyncio.sleep(0.1)
        self.assertEqual(controller.state.selected_city, "Mumbai")

    async def test_refresh(self):
        controller = make_controller(variation=-5, initial_city="Kolkata")
        await controller.refresh()
        self.assertEqual(controller.state.selected_city, "Kolkata")
        self.assertEqual(controller.state.current_reading.aqi, 150)
        self.assertIsNone(controller.state.active_alert)

    async def test_unknown_city(self):
        controller = make_controller()
        with self.assertRaises(UnknownCityError):
            controller.select_city("Atlantis")
        self.assertEqual(controller.state.selected_city, "Delhi")
        self.assertFalse(controller.state.loading)

    async def test_unknown_initial_city(self):
        with self.assertRaises(UnknownCityError):
            make_controller(initial_city="Atlantis")

    async def test_data_unavailable(self):
        controller = DashboardController(UnavailableSimulator(seed=1), fetch_delay=0)
        snapshot = await controller.load_city("Delhi")
        self.assertTrue(snapshot.data_unavailable)
        self.assertFalse(snapshot.loading)
        self.assertIsNone(snapshot.current_reading)
        self.assertIsNone(snapshot.classification)

    async def test_unavailable_city_shows_no_previous_data(self):
        controller = DashboardController(
            MumbaiOfflineSimulator(rng=FixedRandom(15)),
            fetch_delay=0,
            clock=lambda: NOW
        )
        delhi = await controller.load_city("Delhi")
        self.assertEqual(len(delhi.historical_series), 7)
        self.assertEqual(len(delhi.forecast_series), 3)

        mumbai = await controller.load_city("Mumbai")
        self.assertEqual(mumbai.selected_city, "Mumbai")
        self.assertTrue(mumbai.data_unavailable)
        self.assertEqual(mumbai.historical_series, [])
        self.assertEqual(mumbai.forecast_series, [])
        self.assertIsNone(mumbai.current_reading)
        self.assertIsNone(mumbai.active_alert)
        self.assertEqual(mumbai.advisories, [])

    async def test_timeout(self):
        controller = make_controller(fetch_delay=1.0, fetch_timeout=0.01)
        snapshot = await controller.load_city("Delhi")
        self.assertTrue(snapshot.data_unavailable)
        self.assertIsNone(snapshot.current_reading)

    async def test_unsubscribe(self):
        controller = make_controller()
        published = []
        controller.subscribe(published.append)
        controller.unsubscribe(published.append)
        await controller.load_city("Delhi")
        self.assertEqual(published, [])

    async def test_close_cancels_pending(self):
        controller = make_controller(fetch_delay=1.0)
        task = controller.select_city("Delhi")
        controller.close()
        await asyncio.wait([task])
        self.assertTrue(task.cancelled())
        self.assertTrue(controller.state.loading)


if __name__ == "__main__":
    unittest.main()
