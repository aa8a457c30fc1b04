from .interpolation import LinearInterpolator
from .integrator import (
    ServiceQualityParams,
    Trajectory,
    PARAM_NAMES,
    TPO_FLOOR,
    QUALITY_PRESSURE,
    ZERO_DEMAND_MULTIPLIER,
    work_pressure_multiplier,
    time_per_order,
    adjustment_rate,
    simulate,
    simulate_with_config
)
from .torch_integrator import precompute_inputs, torch_simulate_tpo

__all__ = [
    "LinearInterpolator",
    "ServiceQualityParams",
    "Trajectory",
    "PARAM_NAMES",
    "TPO_FLOOR",
    "QUALITY_PRESSURE",
    "ZERO_DEMAND_MULTIPLIER",
    "work_pressure_multiplier",
    "time_per_order",
    "adjustment_rate",
    "simulate",
    "simulate_with_config",
    "precompute_inputs",
    "torch_simulate_tpo"
]
