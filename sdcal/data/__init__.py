from .loading import (
    ObservedData,
    load_parameter_table,
    parameters_from_table,
    load_observed
)
from .synthetic import exogenous_from_config, generate_synthetic_observed, save_observed

__all__ = [
    "ObservedData",
    "load_parameter_table",
    "parameters_from_table",
    "load_observed",
    "exogenous_from_config",
    "generate_synthetic_observed",
    "save_observed"
]
