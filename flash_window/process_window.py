"""
Process window
==============

Runs the steady-state branch (cooling → J_ss/J_LOC → E(J) → J_flash) and the
transient branch for one (material, geometry, process) point and merges them
into a SimulationResult.

    E_max  = ρₘ · J_LOC                         [V/cm]
    t_ramp = J_LOC / (ramp / 60)                [s]
    N_R    = t_ramp / τ        < 1 adiabatic,  ≥ 1 cooling-limited
    I_onset = J_flash · A[mm²]

Diagnostics carried for display only:
    R₀ = ρ₀·L/A,  V₁₀ = ρ₀·(0.1·J_LOC)·L,  sensitivity = V_offset / V₁₀

Usage:
    >>> from flash_window import Foil, ProcessParameters, evaluate
    >>> r = evaluate("Ti", Foil(100, 6, 20), ProcessParameters(ramp_rate=500))
    >>> round(r.J_flash)
    52
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import asdict, dataclass
from functools import partial
from typing import Dict, Iterable, Optional, Union

import pandas as pd

from .config import DEFAULT_CONSTANTS, ModelConstants
from .cooling import ConvectionEnvironment, Environment, describe_environment
from .efield import FIELD_FACTOR
from .flash import assess_field, classify_outcome, find_J_onset, flash_threshold
from .flash import flash_window_percent, reaches_flash
from .geometry import GeometrySpec, area_and_perimeter, describe
from .material import MaterialDatabase, default_database
from .steady_state import solve_steady_state
from .transient import simulate_transient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessParameters:
    ramp_rate: float = 500.0            # [A/mm²/min]
    I_max: float = 100.0                # supply cap [A]
    v_offset_mV: float = 10.0           # voltage-offset calibration term [mV]
    environment: Environment = ConvectionEnvironment()


@dataclass(frozen=True)
class SimulationResult:
    material: str
    geometry: str
    environment: str
    # steady state
    J_ss: float                 # [A/mm²]
    J_loc: float                # [A/mm²]
    E_max: float                # [V/cm]
    h_eff: float                # [W/(m²·K)]
    tau: float                  # [s]
    clip_pct: float             # [%]
    # flash
    E_flash: float              # [V/cm]
    J_flash: float              # [A/mm²]
    I_onset: float              # [A]
    window_pct: float           # [%]
    reaches_flash: bool
    outcome: str
    # ramp
    t_ramp: float               # [s]
    N_R: float
    regime: str
    # transient
    E_peak: float               # [V/cm]
    t_melt: float               # [s]
    I_melt: float               # [A]
    J_melt: float               # [A/mm²]
    dIdt: float                 # [A/s]
    melted: bool
    # display diagnostics
    I_loc: float                # [A]
    R0: float                   # [Ω]
    sensitivity: float
    assessment: str
    assessment_message: str

    @property
    def E_best(self) -> float:
        return max(self.E_max, self.E_peak)

    def to_dict(self) -> Dict:
        return asdict(self)

    def summary(self) -> str:
        return f"""
{'='*60}
{self.material}: {self.geometry}, {self.environment}
{'='*60}
  [steady state]
    J_ss       = {self.J_ss:.1f} A/mm2
    J_LOC      = {self.J_loc:.1f} A/mm2   (I = {self.I_loc:.1f} A)
    E_max      = {self.E_max:.3f} V/cm
    tau        = {self.tau:.3g} s   (clip {self.clip_pct:.0f}%)
  [flash]
    E_flash    = {self.E_flash:.3f} V/cm
    J_flash    = {self.J_flash:.1f} A/mm2   (I = {self.I_onset:.1f} A)
    window     = {self.window_pct:.1f} %
    outcome    = {self.outcome}
  [ramp]
    t_ramp     = {self.t_ramp:.2f} s,  N_R = {self.N_R:.3g} ({self.regime})
  [transient]
    E_peak     = {self.E_peak:.3f} V/cm
    t_melt     = {self.t_melt:.2f} s{'' if self.melted else '  (no melt in horizon)'}
  [diagnostics]
    R0         = {self.R0:.4g} Ohm,  V_off/V10 = {self.sensitivity:.3g}
  {self.assessment_message}
{'='*60}
"""


def normalized_ramp(t_ramp: float, tau: float) -> float:
    """N_R = t_ramp / τ (τ floored at 1 ms)"""
    return t_ramp / max(tau, 0.001)


def ramp_regime(N_R: float) -> str:
    return "adiabatic" if N_R < 1.0 else "cooling-limited"


def ramp_time(J_loc: float, ramp_rate: float) -> float:
    """Time to ramp to J_LOC [s]"""
    return J_loc / max(ramp_rate / 60.0, 0.001)


def evaluate(
    material_key: str,
    geometry: GeometrySpec,
    params: ProcessParameters = ProcessParameters(),
    db: Optional[MaterialDatabase] = None,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> SimulationResult:
    """
    Full process-window evaluation for one material.

    Raises:
        ValueError: unknown material key, or T_wall at or above the melt
        TypeError: unsupported geometry or environment
    """
    db = db if db is not None else default_database()
    mat = db.get(material_key)

    ss = solve_steady_state(mat, geometry, params.ramp_rate, params.environment,
                            db.emissivity(material_key), constants)
    J_loc = ss.J_loc
    E_max = mat.rhoM * J_loc * FIELD_FACTOR

    E_flash = flash_threshold(mat.lam, geometry.gauge_length_mm, constants)
    J_flash = find_J_onset(mat, J_loc, E_flash, constants)

    t_ramp = ramp_time(J_loc, params.ramp_rate)
    N_R = normalized_ramp(t_ramp, ss.cooling.tau)

    trans = simulate_transient(mat, geometry, params.ramp_rate, params.I_max,
                               cooling=ss.profile, constants=constants)

    A, _ = area_and_perimeter(geometry, constants)
    A_mm2 = A * 1e6
    L = geometry.gauge_length_m
    V10 = mat.rho0 * (J_loc * 0.1 * 1e6) * L
    sensitivity = (params.v_offset_mV / 1000.0) / V10 if V10 > 0 else 99.0

    fa = assess_field(max(E_max, trans.E_peak), E_flash)

    return SimulationResult(
        material=material_key,
        geometry=describe(geometry),
        environment=describe_environment(params.environment),
        J_ss=ss.J_ss,
        J_loc=J_loc,
        E_max=E_max,
        h_eff=ss.h_eff,
        tau=ss.cooling.tau,
        clip_pct=ss.cooling.clip_share,
        E_flash=E_flash,
        J_flash=J_flash,
        I_onset=J_flash * A_mm2,
        window_pct=flash_window_percent(J_flash, J_loc),
        reaches_flash=reaches_flash(J_flash, J_loc),
        outcome=classify_outcome(J_flash, J_loc),
        t_ramp=t_ramp,
        N_R=N_R,
        regime=ramp_regime(N_R),
        E_peak=trans.E_peak,
        t_melt=trans.t_melt,
        I_melt=trans.I_melt,
        J_melt=trans.J_melt,
        dIdt=trans.dIdt,
        melted=trans.melted,
        I_loc=J_loc * A_mm2,
        R0=mat.rho0 * L / A,
        sensitivity=sensitivity,
        assessment=fa.level,
        assessment_message=fa.message,
    )


# ==============================================================================
# Batch evaluation
# ==============================================================================

def evaluate_all(
    geometry: GeometrySpec,
    params: ProcessParameters = ProcessParameters(),
    keys: Optional[Iterable[str]] = None,
    executor: Union[None, str, Executor] = None,
    max_workers: Optional[int] = None,
    db: Optional[MaterialDatabase] = None,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> Dict[str, SimulationResult]:
    """
    Evaluate several materials at one geometry / process point.

    Args:
        keys: material keys (default: every material in db)
        executor: None (serial), "thread", "process", or an Executor
        max_workers: pool size for "thread" / "process"

    Returns:
        {key: SimulationResult} in the order of ``keys``
    """
    db = db if db is not None else default_database()
    keys = list(keys) if keys is not None else db.keys()
    for key in keys:
        db.get(key)  # fail fast on unknown keys

    run = partial(evaluate, geometry=geometry, params=params, db=db, constants=constants)

    if executor is None:
        return {key: run(key) for key in keys}

    if isinstance(executor, Executor):
        return dict(zip(keys, executor.map(run, keys)))

    if executor == "thread":
        pool_cls = ThreadPoolExecutor
    elif executor == "process":
        pool_cls = ProcessPoolExecutor
    else:
        raise ValueError(f"Unknown executor: {executor}. Use 'thread' or 'process'")

    logger.debug("evaluating %d materials on a %s pool", len(keys), executor)
    with pool_cls(max_workers=max_workers) as pool:
        return dict(zip(keys, pool.map(run, keys)))


def comparison_table(
    geometry: GeometrySpec,
    params: ProcessParameters = ProcessParameters(),
    keys: Optional[Iterable[str]] = None,
    db: Optional[MaterialDatabase] = None,
    constants: ModelConstants = DEFAULT_CONSTANTS,
    **batch_kwargs,
) -> pd.DataFrame:
    """One row per material; gap = E_max / E_flash."""
    db = db if db is not None else default_database()
    results = evaluate_all(geometry, params, keys, db=db, constants=constants, **batch_kwargs)
    rows = []
    for key, r in results.items():
        rows.append({
            "material": key,
            "lambda": db.get(key).lam,
            "J_flash": r.J_flash,
            "J_LOC": r.J_loc,
            "E_max": r.E_max,
            "E_flash": r.E_flash,
            "gap": r.E_max / r.E_flash if r.E_flash > 0 else float("nan"),
            "outcome": r.outcome,
            "N_R": r.N_R,
            "E_peak": r.E_peak,
        })
    return pd.DataFrame(rows, columns=[
        "material", "lambda", "J_flash", "J_LOC", "E_max", "E_flash",
        "gap", "outcome", "N_R", "E_peak",
    ])


# ==============================================================================
# Test
# ==============================================================================

if __name__ == "__main__":
    from .geometry import Foil

    print(evaluate("Ti", Foil(100, 6, 20)).summary())
    print(comparison_table(Foil(100, 6, 20)).round(3).to_string(index=False))
