"""
Reference experiments and the N_R – E_max process map.

Eleven calibration runs on 6 mm wide, 20 mm gauge foils. Each map point
uses the measured J_LOC with the current environment:

    t_ramp = J_LOC / (ramp/60),  N_R = t_ramp / τ,  E_max = ρₘ·J_LOC
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import DEFAULT_CONSTANTS, ModelConstants
from .cooling import fin_cooling_for, resolve_cooling
from .efield import FIELD_FACTOR
from .flash import flash_threshold
from .geometry import Foil
from .material import MaterialDatabase, default_database
from .process_window import ProcessParameters, SimulationResult


@dataclass(frozen=True)
class ReferenceExperiment:
    label: str
    material: str
    ramp_rate: float         # [A/mm²/min]
    thickness_um: float
    J_loc: float             # measured [A/mm²]
    flash: bool              # flash observed
    width_mm: float = 6.0
    gauge_length_mm: float = 20.0

    @property
    def geometry(self) -> Foil:
        return Foil(self.thickness_um, self.width_mm, self.gauge_length_mm)


# fmt: off
REFERENCE_EXPERIMENTS: Tuple[ReferenceExperiment, ...] = (
    ReferenceExperiment("Ti R14", "Ti", 1000, 100, 70.3, True),
    ReferenceExperiment("Ti R12", "Ti", 500,  100, 67.6, True),
    ReferenceExperiment("Ti R13", "Ti", 244,  100, 65.1, True),
    ReferenceExperiment("Cu R21", "Cu", 244,  50,  229,  False),
    ReferenceExperiment("Ni R1",  "Ni", 5000, 200, 64.8, False),
    ReferenceExperiment("Ni R2",  "Ni", 1000, 200, 38.9, False),
    ReferenceExperiment("Ni R3",  "Ni", 500,  200, 33.1, False),
    ReferenceExperiment("Al R1",  "Al", 667,  25,  167,  False),
    ReferenceExperiment("Al R2",  "Al", 244,  25,  150,  False),
    ReferenceExperiment("Al R3",  "Al", 160,  25,  156,  False),
    ReferenceExperiment("Al R4",  "Al", 107,  25,  145,  False),
)
# fmt: on


@dataclass(frozen=True)
class MapPoint:
    label: str
    material: str
    ramp_rate: float
    J_loc: float
    N_R: float
    E_max: float             # [V/cm]
    E_flash: float           # [V/cm]
    flash: bool
    is_user: bool = False


def process_map(
    params: ProcessParameters = ProcessParameters(),
    db: Optional[MaterialDatabase] = None,
    user_result: Optional[SimulationResult] = None,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> List[MapPoint]:
    """
    One point per reference experiment, plus the user design if given.

    The user point plots max(E_max, E_peak) and counts as flash above
    0.8·E_flash.
    """
    db = db if db is not None else default_database()
    points = []
    for exp in REFERENCE_EXPERIMENTS:
        mat = db.get(exp.material)
        geom = exp.geometry
        h, _ = resolve_cooling(params.environment, mat, geom,
                               db.emissivity(exp.material), constants)
        cool = fin_cooling_for(mat, geom, h, constants)
        t_ramp = exp.J_loc / (exp.ramp_rate / 60.0)
        points.append(MapPoint(
            label=exp.label,
            material=exp.material,
            ramp_rate=exp.ramp_rate,
            J_loc=exp.J_loc,
            N_R=t_ramp / cool.tau,
            E_max=mat.rhoM * exp.J_loc * FIELD_FACTOR,
            E_flash=flash_threshold(mat.lam, exp.gauge_length_mm, constants),
            flash=exp.flash,
        ))

    if user_result is not None:
        E_best = user_result.E_best
        if user_result.E_flash > 0:
            flash = E_best > 0.8 * user_result.E_flash
        else:
            flash = E_best > 0.5
        points.append(MapPoint(
            label="Your design",
            material=user_result.material,
            ramp_rate=params.ramp_rate,
            J_loc=user_result.J_loc,
            N_R=user_result.N_R,
            E_max=E_best,
            E_flash=user_result.E_flash,
            flash=flash,
            is_user=True,
        ))
    return points
