"""
Specimen geometry: foil, wire, tube.

All three shapes share a gauge length; ``area_and_perimeter`` is the single
dispatch point that converts the shape to SI cross-section area A [m²] and
wetted perimeter P [m], with A floored at 1e-15 m² and P at 1e-9 m.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from .config import DEFAULT_CONSTANTS, ModelConstants

logger = logging.getLogger(__name__)

PI: float = np.pi


@dataclass(frozen=True)
class Foil:
    """Rectangular strip: thickness × width."""
    thickness_um: float
    width_mm: float
    gauge_length_mm: float = 20.0

    @property
    def gauge_length_m(self) -> float:
        return self.gauge_length_mm / 1000.0


@dataclass(frozen=True)
class Wire:
    """Round wire."""
    diameter_um: float
    gauge_length_mm: float = 20.0

    @property
    def gauge_length_m(self) -> float:
        return self.gauge_length_mm / 1000.0


@dataclass(frozen=True)
class Tube:
    """Thin-walled tube; both inner and outer surfaces are wetted."""
    inner_diameter_mm: float
    wall_thickness_um: float
    gauge_length_mm: float = 20.0

    @property
    def outer_diameter_mm(self) -> float:
        return self.inner_diameter_mm + 2.0 * self.wall_thickness_um / 1000.0

    @property
    def gauge_length_m(self) -> float:
        return self.gauge_length_mm / 1000.0


GeometrySpec = Union[Foil, Wire, Tube]


def area_and_perimeter(
    spec: GeometrySpec,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> Tuple[float, float]:
    """
    Cross-section area A [m²] and wetted perimeter P [m].

        Foil: A = t·w,             P = 2(t + w)
        Wire: A = π/4·d²,          P = π·d
        Tube: A = π/4·(OD² − ID²), P = π·(OD + ID)
    """
    if isinstance(spec, Foil):
        t = spec.thickness_um * 1e-6
        w = spec.width_mm / 1000.0
        A = t * w
        P = 2.0 * (t + w)
    elif isinstance(spec, Wire):
        d = spec.diameter_um * 1e-6
        A = PI / 4.0 * d * d
        P = PI * d
    elif isinstance(spec, Tube):
        d_in = spec.inner_diameter_mm / 1000.0
        d_out = spec.outer_diameter_mm / 1000.0
        A = PI / 4.0 * (d_out ** 2 - d_in ** 2)
        P = PI * (d_out + d_in)
    else:
        raise TypeError(f"Unsupported geometry: {type(spec).__name__}")

    if A < constants.area_floor:
        logger.debug("cross-section %.3e m2 floored to %.1e m2", A, constants.area_floor)
        A = constants.area_floor
    if P < constants.perimeter_floor:
        logger.debug("perimeter %.3e m floored to %.1e m", P, constants.perimeter_floor)
        P = constants.perimeter_floor
    return A, P


def area_mm2(spec: GeometrySpec, constants: ModelConstants = DEFAULT_CONSTANTS) -> float:
    """Cross-section area [mm²]"""
    return area_and_perimeter(spec, constants)[0] * 1e6


def characteristic_length(spec: GeometrySpec) -> float:
    """
    Length scale [m] for the Rayleigh and Knudsen numbers.

    Wire: diameter; tube: outer diameter; foil: P/π, the diameter of a
    cylinder with the same wetted perimeter.
    """
    if isinstance(spec, Wire):
        return spec.diameter_um * 1e-6
    if isinstance(spec, Tube):
        return spec.outer_diameter_mm / 1000.0
    if isinstance(spec, Foil):
        t = spec.thickness_um * 1e-6
        w = spec.width_mm / 1000.0
        return 2.0 * (t + w) / PI
    raise TypeError(f"Unsupported geometry: {type(spec).__name__}")


def describe(spec: GeometrySpec) -> str:
    if isinstance(spec, Foil):
        return f"{spec.thickness_um:g}um x {spec.width_mm:g}mm foil, L={spec.gauge_length_mm:g}mm"
    if isinstance(spec, Wire):
        return f"d{spec.diameter_um:g}um wire, L={spec.gauge_length_mm:g}mm"
    if isinstance(spec, Tube):
        return (f"ID{spec.inner_diameter_mm:g}mm x {spec.wall_thickness_um:g}um wall tube, "
                f"L={spec.gauge_length_mm:g}mm")
    raise TypeError(f"Unsupported geometry: {type(spec).__name__}")
