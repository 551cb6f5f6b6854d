"""
Flash Window
============
Electro-thermal process window for current-ramped metal specimens:
does the specimen reach the flash field before it loses cohesion?

Modules:
    - material: material database (ρ₀, ρₘ, T_m, C_p, ρ_mass, k_th, λ) + LOC calibration
    - geometry: foil / wire / tube cross-sections
    - gas: chamber gas property fits and mixtures
    - cooling: fin + clip conduction, natural convection + radiation
    - steady_state: J_ss and the calibrated J_LOC scaling law
    - efield: quasi-static E(J) curve
    - flash: E_flash = λ/r, bisection onset J_flash, window, outcome
    - transient: explicit ramp simulation (E_peak, time to melt)
    - process_window: aggregate result, batch evaluation, comparison table
    - experiments: reference runs and the N_R – E_max process map
    - config: calibration constants (JSON overridable)

Example:
    >>> from flash_window import Foil, ProcessParameters, evaluate
    >>> r = evaluate('Ti', Foil(100, 6, gauge_length_mm=20), ProcessParameters(ramp_rate=500))
    >>> r.outcome
    'FLASH -> LOC'

    >>> from flash_window import GasEnvironment, Wire
    >>> params = ProcessParameters(environment=GasEnvironment('helium', pressure_torr=10))
    >>> r = evaluate('W', Wire(250), params)

    >>> from flash_window import comparison_table
    >>> df = comparison_table(Foil(100, 6))
"""

__version__ = "0.5.0"

# ==============================================================================
# Configuration
# ==============================================================================
from .config import DEFAULT_CONSTANTS, ModelConstants
from .log import configure_logging

# ==============================================================================
# Material Database
# ==============================================================================
from .material import (
    EMISSIVITY,
    MATERIALS,
    CalibrationReference,
    MaterialDatabase,
    MaterialProperties,
    default_database,
    get_emissivity,
    get_material,
    list_materials,
)

# ==============================================================================
# Geometry
# ==============================================================================
from .geometry import (
    Foil,
    GeometrySpec,
    Tube,
    Wire,
    area_and_perimeter,
    area_mm2,
    characteristic_length,
    describe,
)

# ==============================================================================
# Cooling
# ==============================================================================
from .gas import GAS_MIXTURES, GAS_SPECIES, GasMixture, mixture_properties, resolve_mixture
from .cooling import (
    ConvectionEnvironment,
    CoolingProfile,
    Environment,
    FinCooling,
    GasEnvironment,
    convection_detail,
    fin_cooling,
    h_convection,
    h_radiation,
    knudsen_regime,
    mean_free_path,
    resolve_cooling,
)

# ==============================================================================
# Solvers
# ==============================================================================
from .steady_state import SteadyState, solve_steady_state, steady_state_J
from .efield import EFieldCurve, build_ej_curve, field_at, resistivity_at
from .flash import (
    FieldAssessment,
    assess_field,
    classify_outcome,
    coherence_length_um,
    find_J_onset,
    flash_threshold,
    flash_window_percent,
    reaches_flash,
)
from .transient import TransientResult, simulate_transient

# ==============================================================================
# Aggregation
# ==============================================================================
from .process_window import (
    ProcessParameters,
    SimulationResult,
    comparison_table,
    evaluate,
    evaluate_all,
    normalized_ramp,
    ramp_regime,
)
from .experiments import REFERENCE_EXPERIMENTS, MapPoint, ReferenceExperiment, process_map


__all__ = [
    # Version
    "__version__",
    # Configuration
    "DEFAULT_CONSTANTS", "ModelConstants", "configure_logging",
    # Material
    "MaterialProperties", "CalibrationReference", "MaterialDatabase",
    "MATERIALS", "EMISSIVITY", "default_database", "get_material",
    "list_materials", "get_emissivity",
    # Geometry
    "Foil", "Wire", "Tube", "GeometrySpec", "area_and_perimeter", "area_mm2",
    "characteristic_length", "describe",
    # Gas / cooling
    "GAS_SPECIES", "GAS_MIXTURES", "GasMixture", "resolve_mixture", "mixture_properties",
    "ConvectionEnvironment", "GasEnvironment", "Environment", "FinCooling",
    "CoolingProfile", "fin_cooling", "convection_detail", "h_convection",
    "h_radiation", "mean_free_path", "knudsen_regime", "resolve_cooling",
    # Solvers
    "SteadyState", "solve_steady_state", "steady_state_J",
    "EFieldCurve", "build_ej_curve", "field_at", "resistivity_at",
    "flash_threshold", "coherence_length_um", "find_J_onset", "flash_window_percent",
    "reaches_flash", "classify_outcome", "FieldAssessment", "assess_field",
    "TransientResult", "simulate_transient",
    # Aggregation
    "ProcessParameters", "SimulationResult", "evaluate", "evaluate_all",
    "comparison_table", "normalized_ramp", "ramp_regime",
    "ReferenceExperiment", "REFERENCE_EXPERIMENTS", "MapPoint", "process_map",
]


def info():
    """Print package summary."""
    print(f"""
╔══════════════════════════════════════════════════════════════════════╗
║  Flash Window v{__version__}: electro-thermal process window              ║
╠══════════════════════════════════════════════════════════════════════╣
║  STEADY STATE                                                        ║
║    J_ss  = √(q_tot·ΔT/ρₘ),  q_tot = h·P/A + 2k·m·tanh(mL/2)/L        ║
║    J_LOC = J_ss_ref·refOS·geoScale·(ramp/ramp_ref)^0.1  (≥ J_ss)     ║
║    uncalibrated: J_LOC = 2.8·J_ss                                    ║
║                                                                      ║
║  FLASH                                                               ║
║    E_flash = λ / r,   r = 0.0834·L_gauge[µm]                         ║
║    E(J) = [ρ₀ + (ρₘ−ρ₀)·(J/J_LOC)^1.5]·J  →  bisection J_flash       ║
║                                                                      ║
║  RAMP                                                                ║
║    N_R = t_ramp/τ   (<1 adiabatic, ≥1 cooling-limited)               ║
║                                                                      ║
║  Materials: {', '.join(list_materials()):<57}║
╚══════════════════════════════════════════════════════════════════════╝
""")
