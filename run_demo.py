"""Demo script: run one finite burn and show the burn vs reference comparison."""
from burn_sim.main import run_burn_experiment
from burn_sim.config import BurnConfig
import numpy as np

result = run_burn_experiment(BurnConfig(dt=0.5, steering_mode="perpendicular"), verbose=True)

print("\n\n===== BURN TIMELINE =====")
log = result.log
if len(log.time) > 0:
    times = np.array(log.time)
    apogee = np.array(log.apogee)
    impulse = np.array(log.total_impulse)
    phases = log.phase
    print(f"Log entries: {len(log.time)}")
    print(f"Time range: {times[0]:.1f}s - {times[-1]:.1f}s")
    print(f"Final apogee: {np.nanmax(apogee):.3f} km")
    print(f"Final impulse: {impulse[-1] * 1000:.3f} m/s")
    print()
    print("Phase Timeline:")
    prev_phase = None
    for i in range(len(phases)):
        if phases[i] != prev_phase:
            print(f"  t={times[i]:8.1f}s | Apogee={apogee[i]:10.3f} km | "
                  f"dV={impulse[i] * 1000:8.3f} m/s | Phase: {phases[i]}")
            prev_phase = phases[i]

print()
print("===== IMPULSIVE REFERENCE =====")
ref = result.reference_snapshot
if ref is not None:
    print(f"Reference apogee: {ref.apogee_radius:.3f} km")
    print(f"Reference eccentricity: {ref.eccentricity:.6f}")
    print(f"Finite-burn penalty: {result.delta_v_penalty * 1000:.3f} m/s")
    print(f"Phase offset: {result.phase_offset_deg:.4f} deg")
