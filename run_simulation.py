# run_simulation.py
import logging
import os
import sys

# Add the project root to the Python path to ensure imports work correctly
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from flightplayback.demo import build_demo_planning_state
from flightplayback.phases.data_models import FlightPhase
from flightplayback.scheduler.core import SimulationEngine
from flightplayback.snapshot.core import create_simulation_snapshot
from flightplayback.snapshot.exceptions import SnapshotValidationError


def main():
    """
    Flies the demo planning state from lineup to parking, driving the engine
    with fixed render frames the way a UI loop would.
    """
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    # --- Configuration ---
    FRAME_DELTA_SEC = 1 / 30
    PLAYBACK_SPEED = 4.0
    REPORT_EVERY_FRAMES = 300

    print("--- Starting Flight Playback ---")
    try:
        snapshot = create_simulation_snapshot(build_demo_planning_state())
    except SnapshotValidationError as e:
        print(f"\n[!] Could not build snapshot. Error: {e}")
        return

    aircraft = snapshot.aircraft
    print(f"Route: {snapshot.departure.airport_icao} -> {snapshot.arrival.airport_icao}, "
          f"{snapshot.route.total_distance_nm:.1f} nm, est. {snapshot.route.estimated_time_min:.0f} min")
    print(f"Aircraft: {aircraft.icao_type}  V1 {aircraft.v1_kts:.0f} / VR {aircraft.vr_kts:.0f} / "
          f"V2 {aircraft.v2_kts:.0f} / VRef {aircraft.vref_kts:.0f} kt")
    print("-" * 40)

    engine = SimulationEngine()
    engine.load_snapshot(snapshot)
    engine.set_speed(PLAYBACK_SPEED)
    engine.play()

    frame = 0
    while engine.state.phase != FlightPhase.COMPLETE:
        output = engine.tick(FRAME_DELTA_SEC)
        frame += 1
        if frame % REPORT_EVERY_FRAMES == 0:
            print(
                f"  > {output.phase.category:<9} {output.phase.display_name:<15} | "
                f"ALT {output.altitude_ft:>6.0f} ft | "
                f"IAS {output.indicated_airspeed_kts:>4.0f} kt | "
                f"HDG {output.heading_true:>5.1f} | "
                f"{output.progress * 100:5.1f}% | "
                f"{output.distance_remaining_nm:6.1f} nm to go"
            )

    output = engine.output()
    print("-" * 40)
    print(f"Flown {output.distance_flown_nm:.1f} nm in {output.time_elapsed_min:.1f} min over {frame} frames.")
    for transition in engine.phase_history:
        print(f"  T+{transition.total_elapsed_sec:>7.1f}s  {transition.phase.display_name}")

    print("\n--- Playback Complete ---")


if __name__ == "__main__":
    main()
