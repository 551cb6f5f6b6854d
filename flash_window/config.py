"""
flash_window.config: calibration constants
==========================================

Every numeric constant the process-window model depends on, collected in one
immutable object so that a caller can override a calibration without touching
the physics modules.

    >>> from flash_window.config import DEFAULT_CONSTANTS
    >>> DEFAULT_CONSTANTS.default_overshoot
    2.8
    >>> custom = DEFAULT_CONSTANTS.replace(r_factor=0.09)

The resistivity exponent (1.5) and the default LOC overshoot (2.8x) are
calibration constants with no first-principles derivation. They are kept
exactly for output parity with the calibrated reference runs.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Union


@dataclass(frozen=True)
class ModelConstants:
    """Calibration and numerical constants of the engine."""

    # Thermal reference
    T_wall: float = 300.0                 # wall / ambient temperature [K]

    # Geometry
    area_floor: float = 1e-15             # cross-section floor [m²]
    perimeter_floor: float = 1e-9         # wetted-perimeter floor [m]

    # Fin + clip conduction
    fin_arg_max: float = 20.0             # clamp on m·L/2 before tanh

    # LOC scaling law
    default_overshoot: float = 2.8        # J_LOC / J_ss without calibration
    ramp_exponent: float = 0.1            # (ramp / ramp_ref)^0.1
    ramp_floor: float = 50.0              # [A/mm²/min]

    # E(J) curve
    resistivity_exponent: float = 1.5     # ρ(J) ∝ (J/J_LOC)^1.5
    curve_step_min: float = 0.3           # minimum J step [A/mm²]
    curve_overshoot: float = 1.05         # curve runs to 1.05·J_LOC

    # Flash threshold
    r_factor: float = 0.0834              # r = R_FACTOR · L_gauge[µm]
    r_floor_um: float = 1.0
    bisection_lower: float = 0.1          # [A/mm²]
    bisection_iterations: int = 60

    # Transient integrator
    dt: float = 0.002                     # [s]
    max_steps: int = 10000
    t_horizon: float = 20.0               # simulated-time bound [s]
    dIdt_floor: float = 0.01              # [A/s]

    # Gas cooling
    h_avg_step: float = 50.0              # trapezoid step for h_avg [K]
    h_table_step: float = 25.0            # transient lookup-table step [K]
    kn_slip: float = 0.01
    kn_free_molecular: float = 0.1
    ra_conduction_limit: float = 1.0
    nu_conduction: float = 2.0
    pressure_floor_torr: float = 1e-6

    # Radiation
    default_emissivity: float = 0.40

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelConstants":
        """Build from a mapping; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            default = getattr(DEFAULT_CONSTANTS, key)
            kwargs[key] = type(default)(value)
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "ModelConstants":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def save_json(self, path: Union[str, Path]) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def replace(self, **changes: Any) -> "ModelConstants":
        return replace(self, **changes)


DEFAULT_CONSTANTS = ModelConstants()
