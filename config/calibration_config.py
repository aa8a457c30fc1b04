# Libraries to import:
from dataclasses import dataclass, field
from typing import Dict, List, Optional

@dataclass
class RegularizationConfig:
    """Configuration for the log-space prior penalty"""

    prior_type: str = "none"  # "l2_prior" or "none"
    prior_lambda: float = 1e-3

    # Natural-scale prior values; missing entries are not penalized
    prior_values: Dict[str, float] = field(default_factory=dict)
    # Example:
    # {
    #     "alpha": -0.5,
    #     "tau_decrease": 20.0
    # }

@dataclass
class CalibrationConfig:
    """Configuration for calibration parameters"""

    # Random seeds
    torch_seed: int = 0
    numpy_seed: int = 0

    # Optimizer selection
    optimizers: List[str] = field(default_factory=lambda: ["L-BFGS-B"])
    # Options: "L-BFGS-B", "CG", "Nelder-Mead", "Adam"

    # Which parameters are free; the rest stay at their base values
    estimate: Dict[str, bool] = field(default_factory=dict)

    # Optimization parameters
    verbosity: int = 1  # 0=silent, 1=summary, 2=detailed, 3=debug
    early_stop_r2: float = 0.99
    max_iter: int = 200
    adam_lr: float = 0.01
    adam_steps: int = 300

    # Loss metric: "sse" or "rmse"
    loss_metric: str = "sse"

    # Noise injection for robustness testing
    noise_type: str = "none"  # "none", "poisson", "gaussian"
    noise_seed: int = 12345
    noise_scale: float = 0.02

    # Regularization
    regularization: RegularizationConfig = field(default_factory=RegularizationConfig)

    # Restart strategy
    num_wide_restarts: int = 1
    num_medium_restarts: int = 1
    num_narrow_restarts: int = 1
    restart_widths: Dict[str, float] = field(default_factory=lambda: {
        "Wide Search": 0.75,
        "Medium Search": 0.50,
        "Narrow Search": 0.25
    })

    output_prefix: str = ""
    output_dir: Optional[str] = None

    def __post_init__(self):
        if not self.estimate:
            self.estimate = {
                "alpha": True,
                "tau_decrease": True,
                "tau_increase": False,
                "tpod0": False
            }

        if not self.output_prefix:
            self.output_prefix = "calibration_"
