from .plotting import (
    save_trajectory_plot,
    save_calibration_fit_plot,
    save_sampler_scatter,
    save_sampling_convergence_plot,
    plot_multi_optimizer_comparison
)
from .reports import (
    generate_sweep_report,
    generate_calibration_report,
    generate_sampling_report
)

__all__ = [
    "save_trajectory_plot",
    "save_calibration_fit_plot",
    "save_sampler_scatter",
    "save_sampling_convergence_plot",
    "plot_multi_optimizer_comparison",
    "generate_sweep_report",
    "generate_calibration_report",
    "generate_sampling_report"
]
