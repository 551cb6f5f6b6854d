"""
Chamber gas properties
======================

Linear-in-temperature fits for thermal conductivity and viscosity of the
common process gases (valid roughly 300–1500 K), plus hard-sphere molecular
diameters for the kinetic-theory mean free path.

    k(T)  = k_a + k_b·T     [W/(m·K)]
    μ(T)  = μ_a + μ_b·T     [Pa·s]

Mixture rules (mole fractions x_i):
    k, μ, d_mol   mole-fraction weighted
    M             Σ x_i M_i
    c_p           mass weighted, Σ x_i M_i c_p,i / M
    Pr            c_p μ / k

An unknown mixture name or an unusable composition is replaced by argon.
================================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple, Union

logger = logging.getLogger(__name__)


# ==============================================================================
# Species
# ==============================================================================
@dataclass(frozen=True)
class GasSpecies:
    name: str
    molar_mass: float       # [kg/mol]
    k_a: float              # conductivity intercept [W/(m·K)]
    k_b: float              # conductivity slope [W/(m·K²)]
    mu_a: float             # viscosity intercept [Pa·s]
    mu_b: float             # viscosity slope [Pa·s/K]
    cp: float               # specific heat [J/(kg·K)]
    d_mol: float            # hard-sphere diameter [m]

    def conductivity(self, T: float) -> float:
        return self.k_a + self.k_b * T

    def viscosity(self, T: float) -> float:
        return self.mu_a + self.mu_b * T


# fmt: off
GAS_SPECIES: Dict[str, GasSpecies] = {
    "Ar": GasSpecies("Ar", 0.039948, k_a=7.0e-3,  k_b=3.57e-5, mu_a=0.95e-5,  mu_b=4.40e-8, cp=520.0,   d_mol=3.64e-10),
    "N2": GasSpecies("N2", 0.028014, k_a=8.4e-3,  k_b=5.83e-5, mu_a=0.78e-5,  mu_b=3.37e-8, cp=1080.0,  d_mol=3.75e-10),
    "O2": GasSpecies("O2", 0.031999, k_a=7.7e-3,  k_b=6.33e-5, mu_a=0.858e-5, mu_b=4.04e-8, cp=1000.0,  d_mol=3.61e-10),
    "He": GasSpecies("He", 0.0040026, k_a=6.98e-2, k_b=2.84e-4, mu_a=0.93e-5,  mu_b=3.53e-8, cp=5193.0,  d_mol=2.19e-10),
    "H2": GasSpecies("H2", 0.002016, k_a=6.93e-2, k_b=3.79e-4, mu_a=0.422e-5, mu_b=1.58e-8, cp=14500.0, d_mol=2.89e-10),
}
# fmt: on


# ==============================================================================
# Mixtures
# ==============================================================================
@dataclass(frozen=True)
class GasMixture:
    name: str
    fractions: Tuple[Tuple[str, float], ...]   # (species, mole fraction), sums to 1


GAS_MIXTURES: Dict[str, GasMixture] = {
    "argon": GasMixture("argon", (("Ar", 1.0),)),
    "nitrogen": GasMixture("nitrogen", (("N2", 1.0),)),
    "helium": GasMixture("helium", (("He", 1.0),)),
    "hydrogen": GasMixture("hydrogen", (("H2", 1.0),)),
    "air": GasMixture("air", (("N2", 0.79), ("O2", 0.21))),
    "forming_gas": GasMixture("forming_gas", (("Ar", 0.95), ("H2", 0.05))),
}

DEFAULT_MIXTURE = "argon"


def resolve_mixture(gas: Union[str, Mapping[str, float], GasMixture]) -> GasMixture:
    """
    Named mixture, explicit composition {species: fraction}, or a GasMixture.

    Fractions are normalised. Unknown names/species fall back to argon.
    """
    if isinstance(gas, GasMixture):
        return gas

    if isinstance(gas, str):
        key = gas.strip().lower().replace("-", "_").replace(" ", "_")
        if key in GAS_MIXTURES:
            return GAS_MIXTURES[key]
        if gas in GAS_SPECIES:
            return GasMixture(gas, ((gas, 1.0),))
        logger.warning("unknown gas '%s', using %s", gas, DEFAULT_MIXTURE)
        return GAS_MIXTURES[DEFAULT_MIXTURE]

    parts = []
    for species, x in gas.items():
        if species not in GAS_SPECIES:
            logger.warning("unknown gas species '%s' ignored", species)
            continue
        if x > 0:
            parts.append((species, float(x)))
    total = sum(x for _, x in parts)
    if total <= 0:
        logger.warning("empty gas composition, using %s", DEFAULT_MIXTURE)
        return GAS_MIXTURES[DEFAULT_MIXTURE]
    fractions = tuple((s, x / total) for s, x in parts)
    name = "+".join(f"{s}:{x:.3g}" for s, x in fractions)
    return GasMixture(name, fractions)


# ==============================================================================
# Mixture properties
# ==============================================================================
@dataclass(frozen=True)
class GasProperties:
    T: float                # evaluation temperature [K]
    k: float                # [W/(m·K)]
    mu: float               # [Pa·s]
    molar_mass: float       # [kg/mol]
    cp: float               # [J/(kg·K)]
    d_mol: float            # [m]

    @property
    def prandtl(self) -> float:
        return self.cp * self.mu / self.k


def mixture_properties(mixture: GasMixture, T: float) -> GasProperties:
    """Mole-fraction weighted properties of ``mixture`` at temperature T [K]."""
    k = mu = M = d = cpM = 0.0
    for species, x in mixture.fractions:
        sp = GAS_SPECIES[species]
        k += x * sp.conductivity(T)
        mu += x * sp.viscosity(T)
        M += x * sp.molar_mass
        d += x * sp.d_mol
        cpM += x * sp.molar_mass * sp.cp
    return GasProperties(T=T, k=k, mu=mu, molar_mass=M, cp=cpM / M, d_mol=d)
