"""
Dashboard controller.

Runs the simulator, classifier, health advice and alert evaluation whenever
the selected city changes, and publishes an immutable DashboardState to the
view layer. State transitions are pure reducer functions; the controller
only schedules the fetch and swaps in the reducer results.

Each fetch is tagged with a request id. Selecting another city cancels the
pending fetch and bumps the id, so a late result for an earlier selection
is discarded instead of overwriting the newer one.
"""
import asyncio
import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from .air_quality import (
    Alert,
    ForecastPoint,
    HistoricalPoint,
    PollutionSource,
    Reading,
    ReadingUnavailableError,
    WeatherConditions,
    get_pollution_sources,
    get_weather_conditions
)
from .simulator import ReadingSimulator, pollutant_levels
from ..api.models import (
    AlertModel,
    CityModel,
    ClassificationModel,
    DashboardSnapshot,
    ForecastPointModel,
    HistoricalPointModel,
    PollutantLevelModel,
    PollutionSourceModel,
    ReadingModel,
    WeatherModel
)
from ..config.settings import DEFAULT_CITY, DEFAULT_FETCH_DELAY_SECS, DEFAULT_FETCH_TIMEOUT_SECS
from ..utils.alerts import evaluate
from ..utils.aqi_calculator import Classification, classify
from ..utils.health_advisory import advice_for, vulnerable_group_risks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    """Per-session dashboard state. Never mutated, only replaced."""
    selected_city: str
    loading: bool = False
    request_id: int = 0
    current_reading: Optional[Reading] = None
    classification: Optional[Classification] = None
    advisories: Tuple[str, ...] = ()
    vulnerable_group_risks: Dict[str, str] = field(default_factory=dict)
    active_alert: Optional[Alert] = None
    historical_series: Tuple[HistoricalPoint, ...] = ()
    forecast_series: Tuple[ForecastPoint, ...] = ()
    pollution_sources: Tuple[PollutionSource, ...] = ()
    weather: Optional[WeatherConditions] = None
    data_unavailable: bool = False


def select_city(state: DashboardState, city_name: str, request_id: int) -> DashboardState:
    """Start loading a city; everything derived from the previous reading is dropped."""
    return replace(
        state,
        selected_city=city_name,
        loading=True,
        request_id=request_id,
        current_reading=None,
        classification=None,
        advisories=(),
        vulnerable_group_risks={},
        active_alert=None,
        historical_series=(),
        forecast_series=(),
        data_unavailable=False
    )


def reading_received(
    state: DashboardState,
    request_id: int,
    reading: Reading,
    classification: Classification,
    advisories: List[str],
    risks: Dict[str, str],
    alert: Optional[Alert],
    historical_series: List[HistoricalPoint],
    forecast_series: List[ForecastPoint]
) -> DashboardState:
    """
    Apply a completed fetch.

    Returns the state unchanged when request_id is not the active request
    or the reading belongs to another city.
    """
    if request_id != state.request_id or reading.city_name != state.selected_city:
        return state

    return replace(
        state,
        loading=False,
        current_reading=reading,
        classification=classification,
        advisories=tuple(advisories),
        vulnerable_group_risks=dict(risks),
        active_alert=alert,
        historical_series=tuple(historical_series),
        forecast_series=tuple(forecast_series),
        data_unavailable=False
    )


def reading_failed(state: DashboardState, request_id: int) -> DashboardState:
    """Show the data unavailable state. Ignored for a stale request."""
    if request_id != state.request_id:
        return state
    return replace(
        state,
        loading=False,
        current_reading=None,
        classification=None,
        advisories=(),
        vulnerable_group_risks={},
        active_alert=None,
        historical_series=(),
        forecast_series=(),
        data_unavailable=True
    )


def to_snapshot(
    state: DashboardState,
    cities=(),
    now: Optional[datetime] = None
) -> DashboardSnapshot:
    """
    Convert a dashboard state into the published data model.

    Args:
        state: Dashboard state
        cities: City objects offered for selection
        now: Snapshot time, defaults to the current time

    Returns:
        DashboardSnapshot for the view layer
    """
    reading = None
    if state.current_reading is not None:
        reading = ReadingModel(
            **asdict(state.current_reading),
            pollutants=[
                PollutantLevelModel(**asdict(level))
                for level in pollutant_levels(state.current_reading)
            ]
        )

    classification = None
    if state.classification is not None:
        classification = ClassificationModel(**asdict(state.classification))

    if now is None:
        now = datetime.now()

    alert = None
    if state.active_alert is not None:
        alert = AlertModel(**asdict(state.active_alert))

    return DashboardSnapshot(
        selected_city=state.selected_city,
        loading=state.loading,
        data_unavailable=state.data_unavailable,
        current_reading=reading,
        classification=classification,
        historical_series=[HistoricalPointModel(**asdict(p)) for p in state.historical_series],
        forecast_series=[ForecastPointModel(**asdict(p)) for p in state.forecast_series],
        advisories=list(state.advisories),
        vulnerable_group_risks=dict(state.vulnerable_group_risks),
        active_alert=alert,
        pollution_sources=[PollutionSourceModel(**asdict(s)) for s in state.pollution_sources],
        weather=WeatherModel(**asdict(state.weather)) if state.weather is not None else None,
        cities=[CityModel(**asdict(city)) for city in cities],
        updated_at=now
    )


class DashboardController:
    """
    Orchestrates one dashboard session on the running asyncio event loop.
    """

    def __init__(
        self,
        simulator: Optional[ReadingSimulator] = None,
        *,
        initial_city: str = DEFAULT_CITY,
        fetch_delay: float = DEFAULT_FETCH_DELAY_SECS,
        fetch_timeout: Optional[float] = DEFAULT_FETCH_TIMEOUT_SECS,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize the controller.

        Args:
            simulator: Reading source, defaults to an unseeded ReadingSimulator
            initial_city: City shown before the first selection
            fetch_delay: Simulated latency of a fetch in seconds
            fetch_timeout: Seconds before a fetch is reported unavailable, None to wait forever
            clock: Source of the current time for readings and alerts

        Raises:
            UnknownCityError: If initial_city is not configured
        """
        self.simulator = simulator if simulator is not None else ReadingSimulator()
        self.simulator.get_city(initial_city)

        self.fetch_delay = fetch_delay
        self.fetch_timeout = fetch_timeout
        self._clock = clock

        self._state = DashboardState(
            selected_city=initial_city,
            pollution_sources=tuple(get_pollution_sources()),
            weather=get_weather_conditions()
        )
        self._request_counter = 0
        self._pending: Optional[asyncio.Task] = None
        self._subscribers: List[Callable[[DashboardState], None]] = []

    @property
    def state(self) -> DashboardState:
        return self._state

    def subscribe(self, callback: Callable[[DashboardState], None]) -> None:
        """Register a callback that receives every published state."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[DashboardState], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def snapshot(self) -> DashboardSnapshot:
        """Get the current state as the published data model."""
        return to_snapshot(self._state, self.simulator.cities.values(), now=self._clock())

    def _publish(self, new_state: DashboardState) -> None:
        if new_state is self._state:
            return
        self._state = new_state
        for callback in list(self._subscribers):
            callback(new_state)

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def select_city(self, city_name: str) -> asyncio.Task:
        """
        Select a city and start fetching its reading.

        Must be called from a running event loop. Any fetch still pending
        for an earlier selection is cancelled.

        Args:
            city_name: Configured city name

        Returns:
            Task running the fetch

        Raises:
            UnknownCityError: If the city is not configured
            RuntimeError: If no event loop is running
        """
        self.simulator.get_city(city_name)
        loop = asyncio.get_running_loop()
        self._cancel_pending()

        self._request_counter += 1
        request_id = self._request_counter
        logger.info(f"Selected city {city_name} (request {request_id})")

        self._publish(select_city(self._state, city_name, request_id))
        self._pending = loop.create_task(self._fetch(city_name, request_id))
        return self._pending

    def refresh(self) -> asyncio.Task:
        """Fetch a new reading for the selected city."""
        return self.select_city(self._state.selected_city)

    async def load_city(self, city_name: str) -> DashboardSnapshot:
        """Select a city, wait for the fetch to settle and return the snapshot."""
        self.select_city(city_name)
        await self.wait_settled()
        return self.snapshot()

    async def wait_settled(self) -> None:
        """Wait until no fetch is pending, following any re-selection."""
        while self._pending is not None and not self._pending.done():
            await asyncio.wait([self._pending])

    def close(self) -> None:
        """Cancel any pending fetch."""
        self._cancel_pending()

    async def _read(self, city_name: str) -> Reading:
        await asyncio.sleep(self.fetch_delay)
        return self.simulator.current_reading(city_name, now=self._clock())

    async def _fetch(self, city_name: str, request_id: int) -> None:
        try:
            if self.fetch_timeout is None:
                reading = await self._read(city_name)
            else:
                reading = await asyncio.wait_for(self._read(city_name), timeout=self.fetch_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Reading for {city_name} timed out after {self.fetch_timeout}s")
            self._publish(reading_failed(self._state, request_id))
            return
        except ReadingUnavailableError as e:
            logger.warning(f"Reading for {city_name} unavailable: {str(e)}")
            self._publish(reading_failed(self._state, request_id))
            return

        if request_id != self._state.request_id:
            logger.debug(f"Discarding stale reading for {city_name} (request {request_id})")
            return

        now = self._clock()
        classification = classify(reading.aqi)
        self._publish(
            reading_received(
                self._state,
                request_id,
                reading,
                classification,
                advice_for(classification.category),
                vulnerable_group_risks(reading.aqi),
                evaluate(reading, classification.category, now=now),
                self.simulator.historical_series(),
                self.simulator.forecast_series(today=now.date())
            )
        )
