"""
sdcal: calibration of the service quality (goal erosion) system dynamics model
and a Monte Carlo sampling benchmark
"""

from .model import (
    LinearInterpolator,
    ServiceQualityParams,
    Trajectory,
    simulate,
    simulate_with_config,
    torch_simulate_tpo
)
from .data import ObservedData, load_parameter_table, parameters_from_table, load_observed, generate_synthetic_observed

__version__ = "0.1.0"

__all__ = [
    "LinearInterpolator",
    "ServiceQualityParams",
    "Trajectory",
    "simulate",
    "simulate_with_config",
    "torch_simulate_tpo",
    "ObservedData",
    "load_parameter_table",
    "parameters_from_table",
    "load_observed",
    "generate_synthetic_observed"
]
