from .calibrator import MultiOptimizerCalibrator, best_overall, SUPPORTED_OPTIMIZERS
from .sweep import run_parameter_sweep

__all__ = [
    "MultiOptimizerCalibrator",
    "best_overall",
    "SUPPORTED_OPTIMIZERS",
    "run_parameter_sweep"
]
