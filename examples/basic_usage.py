#!/usr/bin/env python3
"""
Flash Window Basic Usage Examples
=================================

Walk through the process-window engine from the reference titanium foil to
gas atmospheres, batch comparison and the E(J) plot.
"""

import numpy as np

# =============================================================================
# Example 1: Reference titanium foil
# =============================================================================
print("=" * 70)
print("Example 1: Ti foil 100um x 6mm, L=20mm, 500 A/mm2/min")
print("=" * 70)

from flash_window import Foil, ProcessParameters, evaluate

ti = evaluate('Ti', Foil(100, 6, gauge_length_mm=20), ProcessParameters(ramp_rate=500))
print(ti.summary())

# =============================================================================
# Example 2: Ramp rate sweep
# =============================================================================
print("=" * 70)
print("Example 2: Ramp rate vs N_R")
print("=" * 70)

for ramp in [50, 244, 500, 1000, 5000]:
    r = evaluate('Ti', Foil(100, 6), ProcessParameters(ramp_rate=ramp))
    print(f"  ramp={ramp:>5}: J_LOC={r.J_loc:6.1f}  N_R={r.N_R:6.3f} ({r.regime})"
          f"  window={r.window_pct:5.1f}%")

# =============================================================================
# Example 3: Gas atmosphere and pressure
# =============================================================================
print("\n" + "=" * 70)
print("Example 3: Tungsten wire in helium vs pressure")
print("=" * 70)

from flash_window import CoolingProfile, GasEnvironment, Wire, get_emissivity, get_material

wire = Wire(250)
for p in [760, 10, 1, 0.01]:
    env = GasEnvironment('helium', pressure_torr=p)
    profile = CoolingProfile.build(env, get_material('W'), wire, get_emissivity('W'))
    d = profile.detail(2000.0)
    r = evaluate('W', wire, ProcessParameters(environment=env))
    print(f"  {p:>7g} torr: Kn={d['Kn']:9.3g} ({d['regime']:<14}) "
          f"h_avg={profile.h_avg:7.1f}  J_LOC={r.J_loc:7.1f}")

# =============================================================================
# Example 4: Comparison across materials
# =============================================================================
print("\n" + "=" * 70)
print("Example 4: Comparison table")
print("=" * 70)

from flash_window import comparison_table

df = comparison_table(Foil(100, 6), executor='thread')
print(df.round(3).to_string(index=False))

# =============================================================================
# Example 5: E(J) curves
# =============================================================================
print("\n" + "=" * 70)
print("Example 5: E(J) plot")
print("=" * 70)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from flash_window import build_ej_curve, evaluate_all

results = evaluate_all(Foil(100, 6), keys=['Ti', 'Ni', 'Cu', 'Al'])
fig, ax = plt.subplots(figsize=(10, 6))
for key, r in results.items():
    mat = get_material(key)
    curve = build_ej_curve(mat, r.J_loc)
    ax.plot(curve.J, curve.E, color=mat.color, linewidth=2, label=f"{key} ({r.outcome})")
    ax.axhline(r.E_flash, color=mat.color, linestyle=':', alpha=0.6)
ax.set_xlabel('J [A/mm²]')
ax.set_ylabel('E [V/cm]')
E_top = np.array([max(r.E_max, r.E_flash) for r in results.values()])
ax.set_ylim(0, max(E_top.max() * 1.2, 0.5))
ax.grid(True, alpha=0.3)
ax.legend()
plt.tight_layout()
plt.savefig('ej_curves.png', dpi=150)
print("  Saved: ej_curves.png")
