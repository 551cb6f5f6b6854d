"""
Metal flash material database
=============================

Per-metal thermophysical constants and calibration anchors used by every
process-window module.

    [electrical]  ρ₀ (RT resistivity), ρₘ (resistivity at melt)       [Ω·m]
    [thermal]     T_m [K], C_p [J/(kg·K)], ρ_mass [kg/m³], k_th [W/(m·K)]
    [flash]       λ voltivity [V·µm]  →  E_flash = λ / r
    [LOC anchor]  optional CalibrationReference (ramp, J_LOC, foil t/w/L)

Emissivity is tabulated separately (EMISSIVITY); a metal missing from that
table radiates with the default ε = 0.40.

The database is an immutable object passed explicitly to the engine.
``default_database()`` builds the built-in table once per process;
``MaterialDatabase.from_json`` loads a user table.

Calibrated metals (Ti, Ni, Cu, Al) anchor the LOC scaling law on a measured
J_LOC; the others fall back to the default overshoot J_LOC = 2.8 × J_ss.
================================================================================
"""

from __future__ import annotations

import functools
import json
from dataclasses import asdict, dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Union

from .config import DEFAULT_CONSTANTS

ROOM_TEMPERATURE: float = 300.0    # [K]

# ==============================================================================
# Calibration anchor
# ==============================================================================
@dataclass(frozen=True)
class CalibrationReference:
    """Measured LOC point on a reference foil."""
    ramp_rate: float          # reference ramp [A/mm²/min]
    J_loc: float              # measured J_LOC [A/mm²]
    thickness_um: float = 100.0
    width_mm: float = 6.0
    gauge_length_mm: float = 20.0


# ==============================================================================
# Material record
# ==============================================================================
@dataclass(frozen=True)
class MaterialProperties:
    """
    Immutable material record, identified by a short key (Ti, Cu, ...).

    Invariants (checked at construction):
        ρₘ > ρ₀ > 0
        T_m > 300 K
    """
    key: str
    name: str
    rho0: float                # RT resistivity [Ω·m]
    rhoM: float                # resistivity at melt [Ω·m]
    T_m: float                 # melting temperature [K]
    Cp: float                  # specific heat [J/(kg·K)]
    rho_mass: float            # mass density [kg/m³]
    k_th: float                # thermal conductivity [W/(m·K)]
    lam: float                 # voltivity [V·µm]
    calibration: Optional[CalibrationReference] = None
    color: str = "#333333"     # plot colour

    def __post_init__(self):
        if not self.rho0 > 0:
            raise ValueError(f"{self.key}: rho0 must be positive, got {self.rho0}")
        if not self.rhoM > self.rho0:
            raise ValueError(
                f"{self.key}: rhoM ({self.rhoM}) must exceed rho0 ({self.rho0})"
            )
        if not self.T_m > ROOM_TEMPERATURE:
            raise ValueError(f"{self.key}: T_m must exceed 300 K, got {self.T_m}")

    # --------------------------------------------------------------------------
    # Derived quantities
    # --------------------------------------------------------------------------

    def melt_margin(self, T_wall: float) -> float:
        """T_m − T_wall [K]; ValueError when the wall is at or above the melt."""
        dT = self.T_m - T_wall
        if dT <= 0:
            raise ValueError(
                f"{self.key}: T_m ({self.T_m:g} K) must exceed the wall temperature "
                f"({T_wall:g} K)"
            )
        return dT

    @property
    def rho_ratio(self) -> float:
        return self.rhoM / self.rho0

    @property
    def volumetric_heat_capacity(self) -> float:
        """ρ_mass · C_p [J/(m³·K)]"""
        return self.rho_mass * self.Cp

    @property
    def is_calibrated(self) -> bool:
        return self.calibration is not None

    def __str__(self) -> str:
        return f"Material({self.key}, {self.name}, T_m={self.T_m:.0f}K)"

    def summary(self) -> str:
        if self.calibration is not None:
            c = self.calibration
            cal = (f"ramp={c.ramp_rate:g} A/mm²/min, J_LOC={c.J_loc:g} A/mm², "
                   f"foil {c.thickness_um:g}um x {c.width_mm:g}mm, L={c.gauge_length_mm:g}mm")
        else:
            cal = f"none (default overshoot {DEFAULT_CONSTANTS.default_overshoot}x)"
        return f"""
{'='*60}
Material: {self.name} ({self.key})
{'='*60}
  [electrical]
    rho0       = {self.rho0*1e8:.2f} uOhm-cm
    rhoM       = {self.rhoM*1e8:.1f} uOhm-cm   (ratio {self.rho_ratio:.1f})
  [thermal]
    T_m        = {self.T_m:.0f} K
    Cp         = {self.Cp:g} J/kg/K
    rho_mass   = {self.rho_mass:g} kg/m3
    k_th       = {self.k_th:g} W/m/K
  [flash]
    lambda     = {self.lam:g} V.um
  [LOC calibration]
    {cal}
{'='*60}
"""

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping) -> "MaterialProperties":
        data = dict(data)
        cal = data.pop("calibration", None)
        if isinstance(cal, Mapping):
            cal = CalibrationReference(**cal)
        return cls(calibration=cal, **data)


# ==============================================================================
# Built-in table
# ==============================================================================

# --------------------------------------------------------------------------
# Calibrated metals
# --------------------------------------------------------------------------

Ti = MaterialProperties(
    key="Ti", name="Titanium",
    rho0=4.2e-7, rhoM=1.78e-6, T_m=1941, Cp=523,
    rho_mass=4510, k_th=21.9, lam=1168,
    calibration=CalibrationReference(ramp_rate=500, J_loc=68, thickness_um=100),
    color="#2563eb",
)

Ni = MaterialProperties(
    key="Ni", name="Nickel",
    rho0=6.99e-8, rhoM=3.5e-7, T_m=1728, Cp=444,
    rho_mass=8908, k_th=90.9, lam=1090,
    calibration=CalibrationReference(ramp_rate=1000, J_loc=39, thickness_um=200),
    color="#666666",
)

Cu = MaterialProperties(
    key="Cu", name="Copper",
    rho0=1.68e-8, rhoM=1.0e-7, T_m=1358, Cp=385,
    rho_mass=8960, k_th=401, lam=818,
    calibration=CalibrationReference(ramp_rate=244, J_loc=229, thickness_um=50),
    color="#B87333",
)

Al = MaterialProperties(
    key="Al", name="Aluminum",
    rho0=2.65e-8, rhoM=1.2e-7, T_m=933, Cp=897,
    rho_mass=2700, k_th=237, lam=970,
    calibration=CalibrationReference(ramp_rate=244, J_loc=150, thickness_um=25),
    color="#d97706",
)

# --------------------------------------------------------------------------
# Uncalibrated metals (default overshoot)
# --------------------------------------------------------------------------

Fe = MaterialProperties(
    key="Fe", name="Iron",
    rho0=9.71e-8, rhoM=1.3e-6, T_m=1811, Cp=449,
    rho_mass=7874, k_th=80.4, lam=1192,
    color="#8B4513",
)

W = MaterialProperties(
    key="W", name="Tungsten",
    rho0=5.28e-8, rhoM=2.5e-7, T_m=3695, Cp=132,
    rho_mass=19300, k_th=173, lam=1026,
    color="#555555",
)

Pt = MaterialProperties(
    key="Pt", name="Platinum",
    rho0=1.06e-7, rhoM=3.8e-7, T_m=2041, Cp=133,
    rho_mass=21450, k_th=71.6, lam=493,
    color="#88aaaa",
)

Re = MaterialProperties(
    key="Re", name="Rhenium",
    rho0=1.93e-7, rhoM=9.0e-7, T_m=3459, Cp=137,
    rho_mass=21020, k_th=47.9, lam=1337,
    color="#6b21a8",
)


MATERIALS: Mapping[str, MaterialProperties] = MappingProxyType({
    m.key: m for m in (Ti, Ni, Cu, Al, Fe, W, Pt, Re)
})

# Total hemispherical emissivity near the flash temperature range.
# Re is deliberately absent and uses the default.
EMISSIVITY: Mapping[str, float] = MappingProxyType({
    "Ti": 0.47,
    "Ni": 0.30,
    "Cu": 0.15,
    "Al": 0.10,
    "Fe": 0.35,
    "W": 0.30,
    "Pt": 0.18,
})


# ==============================================================================
# Database object
# ==============================================================================

class MaterialDatabase:
    """Read-only keyed collection of MaterialProperties plus an emissivity table."""

    def __init__(
        self,
        materials: Mapping[str, MaterialProperties],
        emissivity: Optional[Mapping[str, float]] = None,
        default_emissivity: float = DEFAULT_CONSTANTS.default_emissivity,
    ):
        self._materials = MappingProxyType(dict(materials))
        self._emissivity = MappingProxyType(dict(emissivity or {}))
        self.default_emissivity = default_emissivity

    # --------------------------------------------------------------------------
    # Mapping protocol
    # --------------------------------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return key in self._materials

    def __iter__(self) -> Iterator[str]:
        return iter(self._materials)

    def __len__(self) -> int:
        return len(self._materials)

    def __getitem__(self, key: str) -> MaterialProperties:
        return self.get(key)

    def keys(self) -> List[str]:
        return list(self._materials)

    def items(self):
        return self._materials.items()

    # --------------------------------------------------------------------------
    # Lookup
    # --------------------------------------------------------------------------

    def get(self, key: str) -> MaterialProperties:
        """Material by key; raises ValueError for an unknown key."""
        if key not in self._materials:
            raise ValueError(f"Unknown material: {key}. Available: {self.keys()}")
        return self._materials[key]

    def emissivity(self, key: str) -> float:
        """Tabulated emissivity, or the default (0.40) when absent."""
        return self._emissivity.get(key, self.default_emissivity)

    def calibrated(self) -> List[str]:
        return [k for k, m in self._materials.items() if m.is_calibrated]

    # --------------------------------------------------------------------------
    # JSON
    # --------------------------------------------------------------------------

    def to_dict(self) -> Dict:
        return {
            "materials": {k: m.to_dict() for k, m in self._materials.items()},
            "emissivity": dict(self._emissivity),
            "default_emissivity": self.default_emissivity,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "MaterialDatabase":
        materials = {
            key: MaterialProperties.from_dict({"key": key, **record})
            for key, record in data["materials"].items()
        }
        return cls(
            materials,
            emissivity=data.get("emissivity"),
            default_emissivity=data.get(
                "default_emissivity", DEFAULT_CONSTANTS.default_emissivity),
        )

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "MaterialDatabase":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def save_json(self, path: Union[str, Path]) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def __reduce__(self):
        # mapping proxies do not pickle; rebuild from plain dicts
        return (self.__class__,
                (dict(self._materials), dict(self._emissivity), self.default_emissivity))

    def __repr__(self) -> str:
        return f"MaterialDatabase({', '.join(self.keys())})"


@functools.lru_cache(maxsize=None)
def default_database() -> MaterialDatabase:
    """Built-in database (constructed once per process)."""
    return MaterialDatabase(MATERIALS, EMISSIVITY)


def get_material(key: str) -> MaterialProperties:
    """Material from the built-in table"""
    return default_database().get(key)


def list_materials() -> List[str]:
    """Keys of the built-in table"""
    return default_database().keys()


def get_emissivity(key: str) -> float:
    return default_database().emissivity(key)


# ==============================================================================
# Test
# ==============================================================================

if __name__ == "__main__":
    db = default_database()
    print(f"{'Key':<4} {'rho0':>10} {'rhoM':>10} {'T_m':>6} {'k_th':>6} {'lam':>6} {'eps':>5} cal")
    print("-" * 60)
    for key, mat in db.items():
        print(f"{key:<4} {mat.rho0:>10.3e} {mat.rhoM:>10.3e} {mat.T_m:>6.0f} "
              f"{mat.k_th:>6.1f} {mat.lam:>6.0f} {db.emissivity(key):>5.2f} "
              f"{'yes' if mat.is_calibrated else 'no'}")
