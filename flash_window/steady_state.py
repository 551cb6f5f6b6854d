"""
Steady-state melt current and LOC estimate
==========================================

Joule heating balances total cooling at the melting point:

    ρₘ·J² = q_tot·ΔT      →      J_ss = √(q_tot·ΔT / ρₘ)

LOC scaling law (calibrated metals):

    J_ss_ref  = J_ss at the calibration foil, same cooling model
    refOS     = J_LOC_ref / J_ss_ref
    geoScale  = J_ss / J_ss_ref
    rampScale = (max(ramp, 50) / ramp_ref)^0.1
    J_LOC     = max(J_ss_ref · refOS · geoScale · rampScale, J_ss)

Uncalibrated metals use J_LOC = 2.8 · J_ss.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import DEFAULT_CONSTANTS, ModelConstants
from .cooling import (
    ConvectionEnvironment,
    CoolingProfile,
    Environment,
    FinCooling,
    fin_cooling_for,
    resolve_cooling,
)
from .geometry import Foil, GeometrySpec
from .material import CalibrationReference, MaterialProperties

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SteadyState:
    J_ss: float                          # [A/mm²]
    J_loc: float                         # [A/mm²]
    cooling: FinCooling                  # fin + clip result at the specimen
    h_eff: float                         # h used in the fin model [W/(m²·K)]
    J_ss_ref: Optional[float] = None     # [A/mm²], calibrated metals only
    ref_overshoot: Optional[float] = None
    calibrated: bool = False
    profile: Optional[CoolingProfile] = None

    @property
    def overshoot(self) -> float:
        return self.J_loc / self.J_ss if self.J_ss > 0 else 0.0


def steady_state_J(
    cooling: FinCooling,
    material: MaterialProperties,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> float:
    """J_ss [A/mm²] for a given fin-cooling rate."""
    dT = material.melt_margin(constants.T_wall)
    return float(np.sqrt(cooling.q_tot * dT / material.rhoM) / 1e6)


def reference_geometry(calibration: CalibrationReference) -> Foil:
    return Foil(calibration.thickness_um, calibration.width_mm, calibration.gauge_length_mm)


def solve_steady_state(
    material: MaterialProperties,
    geometry: GeometrySpec,
    ramp_rate: float,
    environment: Environment = ConvectionEnvironment(),
    emissivity: Optional[float] = None,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> SteadyState:
    """
    J_ss and J_LOC for one material / geometry / ramp / environment.

    Args:
        material: material record
        geometry: Foil, Wire or Tube
        ramp_rate: current-density ramp [A/mm²/min]
        environment: fixed h or gas atmosphere
        emissivity: material emissivity for the gas branch (None → default)

    Returns:
        SteadyState
    """
    h, profile = resolve_cooling(environment, material, geometry, emissivity, constants)
    cool = fin_cooling_for(material, geometry, h, constants)
    J_ss = steady_state_J(cool, material, constants)

    cal = material.calibration
    if cal is not None:
        ref_geom = reference_geometry(cal)
        h_ref, _ = resolve_cooling(environment, material, ref_geom, emissivity, constants)
        J_ss_ref = steady_state_J(fin_cooling_for(material, ref_geom, h_ref, constants),
                                  material, constants)
        if J_ss_ref > 0:
            geo_scale = J_ss / J_ss_ref
            ref_os = cal.J_loc / J_ss_ref
            ramp_scale = (max(ramp_rate, constants.ramp_floor) / cal.ramp_rate) ** constants.ramp_exponent
            J_loc = max(J_ss_ref * ref_os * geo_scale * ramp_scale, J_ss)
            return SteadyState(
                J_ss=J_ss, J_loc=J_loc, cooling=cool, h_eff=h,
                J_ss_ref=J_ss_ref, ref_overshoot=ref_os, calibrated=True,
                profile=profile,
            )
        logger.debug("%s: J_ss_ref is zero, using default overshoot", material.key)
    else:
        logger.debug("%s: no calibration, default overshoot %.1fx",
                     material.key, constants.default_overshoot)

    return SteadyState(
        J_ss=J_ss, J_loc=J_ss * constants.default_overshoot, cooling=cool,
        h_eff=h, profile=profile,
    )
