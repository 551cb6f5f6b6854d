"""
Flash threshold and onset
=========================

Voltivity threshold:

    r       = R_FACTOR · L_gauge[µm],  R_FACTOR = 0.0834,  r ≥ 1 µm
    E_flash = λ / r                                        [V/cm]

Onset current density J_flash solves E(J) = E_flash on the analytic E(J)
of efield.py by fixed-count bisection over [0.1, J_LOC]. E(J_LOC) < E_flash
means the specimen melts without flashing and J_flash = 0.

    window  = (J_LOC − J_flash) / J_LOC × 100 %
    outcome = FLASH -> LOC  if 0 < J_flash < J_LOC  else  MELT
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import DEFAULT_CONSTANTS, ModelConstants
from .efield import field_at
from .material import MaterialProperties

logger = logging.getLogger(__name__)

OUTCOME_FLASH = "FLASH -> LOC"
OUTCOME_MELT = "MELT"


def coherence_length_um(
    gauge_length_mm: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> float:
    """r [µm], floored at 1 µm"""
    return max(constants.r_factor * gauge_length_mm * 1000.0, constants.r_floor_um)


def flash_threshold(
    lam: float,
    gauge_length_mm: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> float:
    """E_flash = λ / r [V/cm]"""
    return lam / coherence_length_um(gauge_length_mm, constants)


def find_J_onset(
    material: MaterialProperties,
    J_loc: float,
    E_flash: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> float:
    """
    J [A/mm²] where the steady E(J) crosses E_flash, or 0 if it never does.

    E(J) is monotone, so the single end-point test is the only bracket check.
    """
    if J_loc <= 0:
        return 0.0
    if field_at(material, J_loc, J_loc, constants) < E_flash:
        logger.debug("%s: E(J_LOC) below E_flash=%.3f V/cm, no flash",
                     material.key, E_flash)
        return 0.0

    lo = constants.bisection_lower
    hi = J_loc
    for _ in range(constants.bisection_iterations):
        mid = 0.5 * (lo + hi)
        if field_at(material, mid, J_loc, constants) < E_flash:
            lo = mid
        else:
            hi = mid
    return min(max(0.5 * (lo + hi), 0.0), J_loc)


def flash_window_percent(J_flash: float, J_loc: float) -> float:
    if J_loc <= 0 or J_flash <= 0:
        return 0.0
    return (J_loc - J_flash) / J_loc * 100.0


def reaches_flash(J_flash: float, J_loc: float) -> bool:
    return 0.0 < J_flash < J_loc


def classify_outcome(J_flash: float, J_loc: float) -> str:
    return OUTCOME_FLASH if reaches_flash(J_flash, J_loc) else OUTCOME_MELT


# ==============================================================================
# Field assessment
# ==============================================================================
@dataclass(frozen=True)
class FieldAssessment:
    level: str        # above / near / below (no threshold: high / moderate / low)
    tag: str
    message: str


def assess_field(E_best: float, E_flash: float) -> FieldAssessment:
    """
    Classify the best attainable field (max of steady and transient peak).

        E > 1.2·E_flash   above   Flash expected
        E > 0.8·E_flash   near    Borderline
        otherwise         below   factor still needed
    """
    if E_flash > 0:
        if E_best > 1.2 * E_flash:
            return FieldAssessment(
                "above", "E > threshold",
                f"{E_best:.3f} > {E_flash:.2f} V/cm. Flash expected.")
        if E_best > 0.8 * E_flash:
            return FieldAssessment(
                "near", "E near threshold",
                f"{E_best:.3f} ~ {E_flash:.2f} V/cm. Borderline.")
        need = E_flash / max(E_best, 0.001)
        return FieldAssessment(
            "below", "E < threshold",
            f"{E_best:.3f} < {E_flash:.2f}. Need {need:.1f}x more.")

    if E_best > 0.5:
        return FieldAssessment("high", "High E -- plausible",
                               f"{E_best:.3f} V/cm. No known threshold.")
    if E_best > 0.1:
        return FieldAssessment("moderate", "Moderate E", f"{E_best:.3f} V/cm.")
    return FieldAssessment("low", "Low E", f"{E_best:.3f} V/cm.")
