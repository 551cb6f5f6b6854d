"""
Cooling model
=============

Two sub-models feed one effective heat-loss rate.

(a) Fin + clip steady conduction (lumped fin equation)

    m      = √(h·P / (k_th·A))
    q_clip = 2·k_th·m·tanh(min(m·L/2, 20)) / L          [W/(m³·K)]
    q_conv = h·P/A
    q_tot  = q_conv + q_clip
    τ      = ρ_mass·C_p / q_tot                          [s]

(b) Gas atmosphere: natural convection + radiation, temperature dependent

    Churchill–Chu (horizontal cylinder):
        Nu = {0.60 + 0.387·[Ra·f(Pr)]^(1/6)}²
        f(Pr) = [1 + (0.559/Pr)^(9/16)]^(-16/9)
        Ra = g·β·ΔT·D³/(ν·α),  β = 1/T_film
        Ra < 1  →  Nu = 2 (conduction limit)

    Rarefaction, Kn = λ_mfp / D,  λ_mfp = k_B·T / (√2·π·d²·p):
        Kn ≤ 0.01         continuum       h_conv unchanged
        0.01 < Kn ≤ 0.1   slip            k_eff = k / (1 + 2·Kn)
        Kn > 0.1          free-molecular  h_conv = 0

    Radiation (linearised Stefan–Boltzmann):
        h_rad = ε·σ·(T_s² + T_w²)·(T_s + T_w)

The steady-state branch uses h_avg, the trapezoidal mean of h_total over
50 K steps from the wall to the melting point; the transient branch reads
h_total(T) from a 25 K lookup table with linear interpolation.
================================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple, Union

import numpy as np

from .config import DEFAULT_CONSTANTS, ModelConstants
from .gas import DEFAULT_MIXTURE, GasMixture, mixture_properties, resolve_mixture
from .geometry import GeometrySpec, area_and_perimeter, characteristic_length
from .material import MaterialProperties

logger = logging.getLogger(__name__)


# ==============================================================================
# Physical constants
# ==============================================================================
STEFAN_BOLTZMANN: float = 5.670374419e-8   # [W/(m²·K⁴)]
k_B: float = 1.380649e-23                  # [J/K]
R_GAS: float = 8.314462618                 # [J/(mol·K)]
G_ACCEL: float = 9.80665                   # [m/s²]
TORR_TO_PA: float = 133.322368


# ==============================================================================
# Environments
# ==============================================================================
@dataclass(frozen=True)
class ConvectionEnvironment:
    """Fixed convection coefficient, no radiation term."""
    h: float = 8.0                 # [W/(m²·K)]


@dataclass(frozen=True)
class GasEnvironment:
    """Gas atmosphere at a chamber pressure."""
    gas: Union[str, Mapping[str, float]] = DEFAULT_MIXTURE
    pressure_torr: float = 760.0
    emissivity: Optional[float] = None      # overrides the material table


Environment = Union[ConvectionEnvironment, GasEnvironment]


def describe_environment(env: Environment) -> str:
    if isinstance(env, ConvectionEnvironment):
        return f"h={env.h:g} W/m2K"
    if isinstance(env, GasEnvironment):
        mix = resolve_mixture(env.gas)
        return f"{mix.name} @ {env.pressure_torr:g} torr"
    raise TypeError(f"Unsupported environment: {type(env).__name__}")


# ==============================================================================
# (a) Fin + clip conduction
# ==============================================================================
@dataclass(frozen=True)
class FinCooling:
    h: float               # convection coefficient used [W/(m²·K)]
    q_conv: float          # [W/(m³·K)]
    q_clip: float          # [W/(m³·K)]
    q_tot: float           # [W/(m³·K)]
    tau: float             # cooling time constant [s]
    m: float               # fin parameter [1/m]
    sa_v: float            # P/A [1/m]
    A: float               # [m²]
    P: float               # [m]

    @property
    def clip_share(self) -> float:
        """Share of cooling carried by the end clips [%]"""
        return self.q_clip / self.q_tot * 100.0 if self.q_tot > 0 else 0.0


def fin_cooling(
    h: float,
    area: float,
    perimeter: float,
    gauge_length_m: float,
    material: MaterialProperties,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> FinCooling:
    """Volumetric heat-loss rate of a fin cooled by h and clamped at both ends."""
    A = max(area, constants.area_floor)
    P = perimeter
    L = gauge_length_m
    sa_v = P / A
    m = np.sqrt(h * P / (material.k_th * A))
    mL2 = min(m * L / 2.0, constants.fin_arg_max)
    q_conv = h * sa_v
    q_clip = 2.0 * material.k_th * m * np.tanh(mL2) / L
    q_tot = q_conv + q_clip
    tau = material.volumetric_heat_capacity / q_tot if q_tot > 0 else float("inf")
    return FinCooling(
        h=h, q_conv=float(q_conv), q_clip=float(q_clip), q_tot=float(q_tot),
        tau=float(tau), m=float(m), sa_v=sa_v, A=A, P=P,
    )


def fin_cooling_for(
    material: MaterialProperties,
    geometry: GeometrySpec,
    h: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> FinCooling:
    A, P = area_and_perimeter(geometry, constants)
    return fin_cooling(h, A, P, geometry.gauge_length_m, material, constants)


# ==============================================================================
# (b) Gas convection + radiation
# ==============================================================================

def mean_free_path(T: float, pressure_pa: float, d_mol: float) -> float:
    """Kinetic-theory mean free path [m]"""
    return k_B * T / (np.sqrt(2.0) * np.pi * d_mol ** 2 * pressure_pa)


def knudsen_regime(Kn: float, constants: ModelConstants = DEFAULT_CONSTANTS) -> str:
    if Kn > constants.kn_free_molecular:
        return "free-molecular"
    if Kn > constants.kn_slip:
        return "slip"
    return "continuum"


def churchill_chu(Ra: float, Pr: float) -> float:
    """Nusselt number for natural convection around a horizontal cylinder."""
    f_pr = (1.0 + (0.559 / Pr) ** (9.0 / 16.0)) ** (-16.0 / 9.0)
    return (0.60 + 0.387 * (Ra * f_pr) ** (1.0 / 6.0)) ** 2


def h_radiation(T_s: float, T_w: float, emissivity: float) -> float:
    """Linearised radiative coefficient [W/(m²·K)]; 0 when T_s ≤ T_w."""
    if T_s <= T_w:
        return 0.0
    return emissivity * STEFAN_BOLTZMANN * (T_s ** 2 + T_w ** 2) * (T_s + T_w)


def convection_detail(
    T_s: float,
    T_w: float,
    mixture: GasMixture,
    pressure_torr: float,
    length: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> Dict[str, float]:
    """
    Full breakdown of the natural-convection coefficient (diagnostic).

    Returns:
        dict with T_film, pressure_pa, Ra, Pr, Nu, Kn, mfp, regime, k_eff, h_conv
    """
    T_film = 0.5 * (T_s + T_w)
    p_torr = pressure_torr
    if p_torr < constants.pressure_floor_torr:
        logger.debug("pressure %.3g torr floored to %.1g torr",
                     pressure_torr, constants.pressure_floor_torr)
        p_torr = constants.pressure_floor_torr
    p_pa = p_torr * TORR_TO_PA

    gas = mixture_properties(mixture, T_film)
    mfp = mean_free_path(T_film, p_pa, gas.d_mol)
    Kn = mfp / max(length, 1e-12)
    regime = knudsen_regime(Kn, constants)

    result = {
        "T_film": T_film,
        "pressure_pa": p_pa,
        "Ra": 0.0,
        "Pr": gas.prandtl,
        "Nu": 0.0,
        "Kn": Kn,
        "mfp": mfp,
        "regime": regime,
        "k_eff": gas.k,
        "h_conv": 0.0,
    }

    if T_s <= T_w or regime == "free-molecular":
        return result

    rho_gas = p_pa * gas.molar_mass / (R_GAS * T_film)
    nu = gas.mu / rho_gas
    alpha = gas.k / (rho_gas * gas.cp)
    beta = 1.0 / T_film
    Ra = G_ACCEL * beta * (T_s - T_w) * length ** 3 / (nu * alpha)

    if Ra < constants.ra_conduction_limit:
        Nu = constants.nu_conduction
    else:
        Nu = churchill_chu(Ra, gas.prandtl)

    k_eff = gas.k / (1.0 + 2.0 * Kn) if regime == "slip" else gas.k

    result.update(Ra=Ra, Nu=Nu, k_eff=k_eff, h_conv=Nu * k_eff / length)
    return result


def h_convection(
    T_s: float,
    T_w: float,
    mixture: GasMixture,
    pressure_torr: float,
    length: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> float:
    """Natural-convection coefficient [W/(m²·K)]"""
    return convection_detail(T_s, T_w, mixture, pressure_torr, length, constants)["h_conv"]


def _temperature_grid(T_lo: float, T_hi: float, step: float) -> np.ndarray:
    grid = np.arange(T_lo, T_hi, step, dtype=float)
    if grid.size == 0 or grid[-1] < T_hi:
        grid = np.append(grid, T_hi)
    return grid


# ==============================================================================
# Cooling profile
# ==============================================================================
@dataclass(frozen=True)
class CoolingProfile:
    """
    Temperature-dependent h for one gas environment, specimen size and metal.

    ``h_avg`` feeds the steady-state solver, ``lookup(T)`` the transient.
    """
    mixture: GasMixture
    pressure_torr: float
    emissivity: float
    length: float                      # characteristic length [m]
    T_wall: float
    T_melt: float
    h_avg: float
    table_T: np.ndarray = field(repr=False, compare=False)
    table_h: np.ndarray = field(repr=False, compare=False)
    constants: ModelConstants = field(default=DEFAULT_CONSTANTS, repr=False, compare=False)

    @classmethod
    def build(
        cls,
        environment: GasEnvironment,
        material: MaterialProperties,
        geometry: GeometrySpec,
        emissivity: Optional[float] = None,
        constants: ModelConstants = DEFAULT_CONSTANTS,
    ) -> "CoolingProfile":
        if environment.emissivity is not None:
            eps = environment.emissivity
        elif emissivity is not None:
            eps = emissivity
        else:
            eps = constants.default_emissivity

        mixture = resolve_mixture(environment.gas)
        length = characteristic_length(geometry)
        T_w = constants.T_wall
        T_m = material.T_m
        dT = material.melt_margin(T_w)

        def h_tot(T: float) -> float:
            return (h_convection(T, T_w, mixture, environment.pressure_torr, length, constants)
                    + h_radiation(T, T_w, eps))

        avg_T = _temperature_grid(T_w, T_m, constants.h_avg_step)
        avg_h = np.array([h_tot(T) for T in avg_T])
        integral = float(np.sum(0.5 * (avg_h[1:] + avg_h[:-1]) * np.diff(avg_T)))
        h_avg = integral / dT

        table_T = _temperature_grid(T_w, T_m, constants.h_table_step)
        table_h = np.array([h_tot(T) for T in table_T])

        logger.debug("cooling profile %s @ %g torr, eps=%.2f: h_avg=%.2f W/m2K",
                     mixture.name, environment.pressure_torr, eps, h_avg)
        return cls(
            mixture=mixture,
            pressure_torr=environment.pressure_torr,
            emissivity=eps,
            length=length,
            T_wall=T_w,
            T_melt=T_m,
            h_avg=h_avg,
            table_T=table_T,
            table_h=table_h,
            constants=constants,
        )

    def detail(self, T: float) -> Dict[str, float]:
        d = convection_detail(T, self.T_wall, self.mixture, self.pressure_torr,
                              self.length, self.constants)
        d["h_rad"] = h_radiation(T, self.T_wall, self.emissivity)
        return d

    def h_conv(self, T: float) -> float:
        return h_convection(T, self.T_wall, self.mixture, self.pressure_torr,
                            self.length, self.constants)

    def h_rad(self, T: float) -> float:
        return h_radiation(T, self.T_wall, self.emissivity)

    def h_total(self, T: float) -> float:
        return self.h_conv(T) + self.h_rad(T)

    def lookup(self, T: float) -> float:
        """h_total(T) interpolated from the precomputed table"""
        return float(np.interp(T, self.table_T, self.table_h))


def resolve_cooling(
    environment: Environment,
    material: MaterialProperties,
    geometry: GeometrySpec,
    emissivity: Optional[float] = None,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> Tuple[float, Optional[CoolingProfile]]:
    """Effective steady-state h and, for a gas atmosphere, its profile."""
    if isinstance(environment, ConvectionEnvironment):
        return environment.h, None
    if isinstance(environment, GasEnvironment):
        profile = CoolingProfile.build(environment, material, geometry, emissivity, constants)
        return profile.h_avg, profile
    raise TypeError(f"Unsupported environment: {type(environment).__name__}")
