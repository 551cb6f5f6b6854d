"""
Transient ramp simulation
=========================

Explicit Euler march of lumped Joule heating under a linear current ramp.

    I(t)  = min(dI/dt · t, I_max),   dI/dt = ramp·A[mm²]/60 ≥ 0.01 A/s
    J     = I / A
    ρ(T)  = ρ₀ + (ρₘ − ρ₀)·clamp((T − 300)/(Tₘ − 300), 0, 1)
    E     = ρ·J                                   → running peak E_peak
    dT/dt = ρ·J²/(ρ_mass·C_p) − q_tot(h(T))·(T − 300)/(ρ_mass·C_p)

The cooling term is present only when a CoolingProfile is attached;
otherwise the march is adiabatic. Δt = 2 ms, at most 10 000 steps, and
the loop stops once simulated time passes 20 s. Not melting inside that
horizon is reported as melted=False with t_melt = 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_CONSTANTS, ModelConstants
from .cooling import CoolingProfile, fin_cooling
from .geometry import GeometrySpec, area_and_perimeter
from .material import MaterialProperties

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransientResult:
    E_peak: float          # [V/cm]
    t_melt: float          # [s], 0 when not melted
    I_melt: float          # [A]
    J_melt: float          # [A/mm²]
    dIdt: float            # [A/s]
    melted: bool
    T_final: float         # [K]
    steps: int


def simulate_transient(
    material: MaterialProperties,
    geometry: GeometrySpec,
    ramp_rate: float,
    I_max: float,
    cooling: Optional[CoolingProfile] = None,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> TransientResult:
    """
    Ramp the current until the specimen melts or the horizon is reached.

    Args:
        material: material record
        geometry: Foil, Wire or Tube
        ramp_rate: [A/mm²/min]
        I_max: supply current cap [A]
        cooling: temperature-dependent h; None → adiabatic

    Returns:
        TransientResult
    """
    A, P = area_and_perimeter(geometry, constants)
    L = geometry.gauge_length_m
    A_mm2 = A * 1e6
    dIdt = max(ramp_rate * A_mm2 / 60.0, constants.dIdt_floor)

    T_w = constants.T_wall
    dT_span = material.melt_margin(T_w)
    rho_cp = material.volumetric_heat_capacity
    dt = constants.dt

    T = T_w
    E_peak = 0.0
    step = 0
    for step in range(constants.max_steps):
        t = step * dt
        I = min(dIdt * t, I_max)
        J = I / A
        frac = min(1.0, max(0.0, (T - T_w) / dT_span))
        rho = material.rho0 + (material.rhoM - material.rho0) * frac
        E = rho * J / 100.0
        if E > E_peak:
            E_peak = E

        dTdt = rho * J * J / rho_cp
        if cooling is not None and T > T_w:
            fin = fin_cooling(cooling.lookup(T), A, P, L, material, constants)
            dTdt -= fin.q_tot * (T - T_w) / rho_cp
        T = max(T + dTdt * dt, T_w)

        if T >= material.T_m:
            return TransientResult(
                E_peak=E_peak, t_melt=t, I_melt=I, J_melt=J / 1e6, dIdt=dIdt,
                melted=True, T_final=T, steps=step + 1,
            )
        if t > constants.t_horizon:
            break

    logger.debug("%s: no melt within %.1f s (T=%.0f K)", material.key, step * dt, T)
    return TransientResult(
        E_peak=E_peak, t_melt=0.0, I_melt=0.0, J_melt=0.0, dIdt=dIdt,
        melted=False, T_final=T, steps=step + 1,
    )
