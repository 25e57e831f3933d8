# flightplayback/scheduler/tests/test_flight_properties.py
import pytest
import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(PROJECT_ROOT))

from flightplayback.demo import build_demo_planning_state
from flightplayback.phases.data_models import FlightPhase
from flightplayback.scheduler.core import SimulationEngine
from flightplayback.snapshot.core import create_simulation_snapshot

MAX_STEPS = 20000


def _engine(**planning_kwargs):
    engine = SimulationEngine()
    engine.load_snapshot(create_simulation_snapshot(build_demo_planning_state(**planning_kwargs)))
    engine.play()
    return engine


def _fly(engine, dt=1.0):
    """Advances in fixed simulated steps until COMPLETE, returning every state seen."""
    states = [engine.state]
    for _ in range(MAX_STEPS):
        engine.advance(dt)
        states.append(engine.state)
        if engine.state.phase == FlightPhase.COMPLETE:
            break
    return states


@pytest.fixture(scope="module")
def equator_flight():
    """The reference 500 nm flight: 9000 ft runway heading 090, FL330, 450 kt."""
    engine = _engine()
    return engine, _fly(engine)


@pytest.fixture(scope="module")
def oblique_flight():
    engine = _engine(origin_lat=47.0, origin_lon=8.0, heading_deg=137.0, elevation_ft=1400.0)
    return engine, _fly(engine)


def _deduplicated_phases(states):
    phases = []
    for state in states:
        if not phases or phases[-1] != state.phase:
            phases.append(state.phase)
    return phases


@pytest.mark.parametrize("flight", ["equator_flight", "oblique_flight"])
def test_every_phase_visited_once_in_order(flight, request):
    engine, states = request.getfixturevalue(flight)
    assert states[-1].phase == FlightPhase.COMPLETE
    assert _deduplicated_phases(states) == list(FlightPhase)[1:]
    assert [t.phase for t in engine.phase_history] == list(FlightPhase)


def test_reference_flight_ends_parked(equator_flight):
    engine, states = equator_flight
    output = engine.output()
    assert output.phase == FlightPhase.COMPLETE
    assert output.distance_remaining_nm == 0
    assert output.ground_speed_kts == 0
    assert output.progress == 1.0
    assert output.time_remaining_min == 0
    assert not output.is_playing
    assert output.distance_flown_nm == pytest.approx(500.0, abs=10.0)


def test_phases_only_move_forward(equator_flight):
    _, states = equator_flight
    for before, after in zip(states, states[1:]):
        assert after.phase >= before.phase


def test_clock_only_moves_forward(equator_flight):
    _, states = equator_flight
    for before, after in zip(states, states[1:]):
        assert after.total_elapsed_sec >= before.total_elapsed_sec
        assert after.distance_along_route_nm >= before.distance_along_route_nm


def test_heading_locked_on_departure_runway(oblique_flight):
    engine, states = oblique_flight
    runway_heading = engine.snapshot.departure.runway_heading_true
    ground_states = [s for s in states if s.phase <= FlightPhase.ROTATE]
    assert ground_states
    for state in ground_states:
        assert state.heading_true == runway_heading


@pytest.mark.parametrize("flight", ["equator_flight", "oblique_flight"])
def test_touchdown_snaps_to_threshold(flight, request):
    engine, states = request.getfixturevalue(flight)
    arrival = engine.snapshot.arrival
    touchdown = next(s for s in states if s.phase == FlightPhase.LANDING)
    assert touchdown.position == arrival.threshold
    assert touchdown.heading_true == arrival.runway_heading_true
    assert touchdown.altitude_ft == arrival.elevation_ft
    assert touchdown.distance_along_runway_ft == 0.0


def test_speed_envelope(equator_flight):
    _, states = equator_flight
    takeoff = [s.indicated_airspeed_kts for s in states
               if FlightPhase.TAKEOFF_ROLL <= s.phase <= FlightPhase.LIFTOFF]
    assert takeoff == sorted(takeoff)

    first_landing = next(i for i, s in enumerate(states) if s.phase == FlightPhase.LANDING)
    arrival = [s.indicated_airspeed_kts for s in states[:first_landing + 1] if s.phase >= FlightPhase.FINAL]
    assert arrival == sorted(arrival, reverse=True)


def test_cruise_altitude_held_exactly(equator_flight):
    engine, states = equator_flight
    cruise_altitude = engine.snapshot.aircraft.cruise_altitude_ft
    cruise_states = [s for s in states if s.phase == FlightPhase.CRUISE]
    assert cruise_states
    assert all(s.altitude_ft == cruise_altitude for s in cruise_states)


def test_altitude_never_below_field(equator_flight):
    engine, states = equator_flight
    field = engine.snapshot.departure.elevation_ft
    assert all(s.altitude_ft >= field for s in states)


def test_progress_is_bounded(equator_flight):
    engine, states = equator_flight
    from flightplayback.scheduler.data_models import to_simulation_output
    for state in states[::50]:
        output = to_simulation_output(state, engine.snapshot)
        assert 0.0 <= output.progress <= 1.0
        assert output.distance_remaining_nm >= 0.0


def test_identical_tick_sequences_are_bit_identical():
    frame_deltas = [0.016, 0.033, 0.2, 0.0, 0.05, -0.01, 0.1]

    def run():
        engine = _engine()
        engine.set_speed(4.0)
        trace = []
        for i in range(3000):
            engine.tick(frame_deltas[i % len(frame_deltas)])
            trace.append(engine.state)
        return trace

    assert run() == run()


def test_frame_driven_flight_reaches_complete():
    engine = _engine()
    for _ in range(MAX_STEPS):
        engine.tick(1.0)
        if engine.state.phase == FlightPhase.COMPLETE:
            break
    assert engine.state.phase == FlightPhase.COMPLETE
    assert [t.phase for t in engine.phase_history] == list(FlightPhase)
    assert engine.output().distance_remaining_nm == 0
