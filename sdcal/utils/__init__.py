from .theta_transforms import (
    build_theta_structure,
    apply_theta,
    to_theta,
    theta_to_params
)
from .metrics import (
    sse,
    rmse,
    r_squared,
    max_abs_error,
    format_iter_report,
    print_parameter_table,
    print_sweep_table,
    print_optimizer_comparison_table,
    print_sampling_summary
)
from .noise import add_noise_to_series
from .logger import start_logging, stop_logging, ConsoleLogger

__all__ = [
    "build_theta_structure",
    "apply_theta",
    "to_theta",
    "theta_to_params",
    "sse",
    "rmse",
    "r_squared",
    "max_abs_error",
    "format_iter_report",
    "print_parameter_table",
    "print_sweep_table",
    "print_optimizer_comparison_table",
    "print_sampling_summary",
    "add_noise_to_series",
    "start_logging",
    "stop_logging",
    "ConsoleLogger"
]
