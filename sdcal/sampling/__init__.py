from .samplers import SAMPLING_METHODS, sample_points, discrepancy
from .circle_area import estimate_circle_area, run_sampling_benchmark, summarize_benchmark

__all__ = [
    "SAMPLING_METHODS",
    "sample_points",
    "discrepancy",
    "estimate_circle_area",
    "run_sampling_benchmark",
    "summarize_benchmark"
]
