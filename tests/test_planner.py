"""
Tests for the geocode -> route -> score pipeline, using offline providers.
"""

import pytest

from safe_route.core.engine import run_engine
from safe_route.core.models import Coordinate
from safe_route.errors import (
    DestinationNotFoundError,
    MissingDestinationError,
    RoutingError,
    StartNotFoundError,
    StartUnavailableError,
)
from safe_route.planner import CURRENT_LOCATION, PlanState, RoutePlanner
from safe_route.providers.mock import StaticGeocoder, StraightLineRouter

from conftest import END, LAT, MID, START

PLACES = {"Main St": START, "Stadium": END}


@pytest.fixture
def router():
    return StraightLineRouter()


@pytest.fixture
def geocoder():
    return StaticGeocoder(PLACES)


@pytest.fixture
def planner(midpoint_index, router, geocoder):
    return RoutePlanner(midpoint_index, router, geocoder)


class TestEngine:
    def test_waypoints_are_spliced_between_start_and_end(self, midpoint_index, router):
        route = run_engine(START, END, midpoint_index, router)

        sent = router.calls[0]
        assert sent[0] == START
        assert sent[-1] == END
        assert len(sent) == 2 + len(route.waypoints) == 3
        assert sent[1] == route.waypoints[0].location

    def test_detour_avoids_hazard_centre(self, midpoint_index, router):
        route = run_engine(START, END, midpoint_index, router)
        # detoured polyline never enters the 250 m hazard
        assert route.assessment.score == 100
        assert route.distance_m > 0
        assert route.duration_s > 0

    def test_router_failure_propagates(self, midpoint_index):
        with pytest.raises(RoutingError):
            run_engine(START, END, midpoint_index, StraightLineRouter(fail=True))


class TestPlanner:
    def test_current_position_and_destination_text(self, planner, geocoder):
        outcome = planner.plan("Stadium", current_position=START)

        assert outcome.route.start == START
        assert outcome.route.end == END
        assert geocoder.queries == ["Stadium"]
        assert outcome.history == [PlanState.IDLE, PlanState.GEOCODING_END, PlanState.ROUTING, PlanState.DONE]
        assert outcome.message == f"Safest route found! Safety score: {outcome.route.assessment.score}/100"
        assert planner.state is PlanState.DONE

    def test_start_text_is_geocoded_after_destination(self, planner, geocoder):
        outcome = planner.plan("Stadium", start="Main St")

        assert geocoder.queries == ["Stadium", "Main St"]
        assert PlanState.GEOCODING_START in outcome.history
        assert outcome.route.start == START

    def test_current_position_wins_over_start_text(self, planner, geocoder):
        here = Coordinate(lat=LAT, lng=-83.76)
        outcome = planner.plan("Stadium", start="Main St", current_position=here)
        assert outcome.route.start == here
        assert geocoder.queries == ["Stadium"]

    def test_coordinates_skip_geocoding(self, planner, geocoder):
        outcome = planner.plan(END, start=START)
        assert geocoder.queries == []
        assert len(outcome.route.waypoints) == 1

    def test_missing_destination(self, planner):
        with pytest.raises(MissingDestinationError) as exc:
            planner.plan("   ", current_position=START)
        assert exc.value.user_message == "Please enter a destination"
        assert planner.state is PlanState.FAILED

    def test_destination_not_found(self, planner):
        with pytest.raises(DestinationNotFoundError) as exc:
            planner.plan("Atlantis", current_position=START)
        assert exc.value.user_message == "Destination not found. Please try a different address."
        assert planner.history == [PlanState.IDLE, PlanState.GEOCODING_END, PlanState.FAILED]

    def test_start_not_found(self, planner):
        with pytest.raises(StartNotFoundError):
            planner.plan("Stadium", start="Nowhere")
        assert planner.history[-2] is PlanState.GEOCODING_START

    def test_current_location_placeholder_without_position(self, planner, geocoder):
        with pytest.raises(StartUnavailableError):
            planner.plan("Stadium", start=CURRENT_LOCATION)
        assert geocoder.queries == ["Stadium"]

    def test_no_start_at_all(self, planner):
        with pytest.raises(StartUnavailableError) as exc:
            planner.plan("Stadium")
        assert "location services" in exc.value.user_message

    def test_routing_failure(self, midpoint_index, geocoder):
        planner = RoutePlanner(midpoint_index, StraightLineRouter(fail=True), geocoder)
        with pytest.raises(RoutingError) as exc:
            planner.plan("Stadium", current_position=START)
        assert exc.value.user_message == "Unable to calculate route. Please try different locations."
        assert planner.history[-2:] == [PlanState.ROUTING, PlanState.FAILED]

    def test_planner_is_reusable(self, planner):
        with pytest.raises(DestinationNotFoundError):
            planner.plan("Atlantis", current_position=START)
        outcome = planner.plan("Stadium", current_position=START)
        assert outcome.history[0] is PlanState.IDLE
        assert PlanState.FAILED not in outcome.history

    def test_route_summary_units(self, planner):
        route = planner.plan(MID, start=START).route
        assert route.distance_km == round(route.distance_m / 1000, 1)
        assert route.duration_min == round(route.duration_s / 60)
