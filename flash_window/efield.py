"""
Quasi-static E(J) curve.

    ρ(J) = ρ₀ + (ρₘ − ρ₀)·min(1, (J/J_LOC)^1.5)
    E(J) = ρ(J)·J                      [V/cm, J in A/mm²]

The 1.5 exponent is a calibration choice (super-linear resistivity rise
towards LOC), not a derived law. It keeps E(J) monotone in J, which the
bisection in flash.py relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from .config import DEFAULT_CONSTANTS, ModelConstants
from .material import MaterialProperties

# A/mm² → A/m² (×1e6), V/m → V/cm (÷100)
FIELD_FACTOR: float = 1e6 / 100.0


def resistivity_at(
    material: MaterialProperties,
    J: float,
    J_loc: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> float:
    """Interpolated resistivity [Ω·m] at current density J [A/mm²]."""
    frac = min(1.0, (J / J_loc) ** constants.resistivity_exponent)
    return material.rho0 + (material.rhoM - material.rho0) * frac


def field_at(
    material: MaterialProperties,
    J: float,
    J_loc: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> float:
    """E [V/cm] at J [A/mm²]"""
    return resistivity_at(material, J, J_loc, constants) * J * FIELD_FACTOR


@dataclass(frozen=True)
class EFieldCurve:
    """Sampled E(J); iterating yields (J, E) pairs and can be repeated."""
    material: str
    J_loc: float
    J: np.ndarray
    E: np.ndarray

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return zip(self.J.tolist(), self.E.tolist())

    def __len__(self) -> int:
        return len(self.J)

    @property
    def E_max(self) -> float:
        return float(self.E[-1]) if len(self.E) else 0.0


def build_ej_curve(
    material: MaterialProperties,
    J_loc: float,
    n: int = 100,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> EFieldCurve:
    """
    Sample E(J) from one step up to 1.05·J_LOC.

    step = max(0.3, 1.05·J_LOC/n); empty curve when J_LOC ≤ 0.
    """
    if J_loc <= 0:
        empty = np.array([], dtype=float)
        return EFieldCurve(material.key, J_loc, empty, empty)

    J_end = J_loc * constants.curve_overshoot
    step = max(constants.curve_step_min, J_end / n)
    # small tolerance so the end point survives float accumulation
    J = np.arange(1, int(J_end / step + 1e-9) + 1, dtype=float) * step
    frac = np.minimum(1.0, (J / J_loc) ** constants.resistivity_exponent)
    rho = material.rho0 + (material.rhoM - material.rho0) * frac
    E = rho * J * FIELD_FACTOR
    return EFieldCurve(material.key, J_loc, J, E)
