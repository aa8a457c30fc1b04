# Libraries to import:
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

@dataclass
class ModelConfig:
    """Configuration for the service quality model and its data paths"""

    # Paths (None -> bundled data directory / synthetic truth)
    parameter_table_path: Optional[Path] = None
    observed_data_path: Optional[Path] = None

    # Horizon in weeks, integration sub-step in weeks
    start_week: int = 53
    end_week: int = 104
    dt: float = 1.0 / 64

    # Feedback law constants
    tpo_floor: float = 0.1
    quality_pressure: float = 1.0
    zero_demand_multiplier: float = 1_000_000.0

    # Ground truth used when generating synthetic observed data
    true_params: Dict[str, float] = field(default_factory=lambda: {
        "alpha": -0.64,
        "tau_decrease": 18.83,
        "tau_increase": 8_140_000.0,
        "tpod0": 1.08
    })

    # Exogenous inputs (week -> value) used for synthetic data
    customer_orders: Optional[Dict[int, float]] = None
    service_capacity: Optional[Dict[int, float]] = None

    def __post_init__(self):
        if self.parameter_table_path is None:
            self.parameter_table_path = Path(__file__).parent.parent / "data" / "parameters.csv"

        if self.customer_orders is None:
            # Order surge in the second half of the year
            self.customer_orders = {53: 100.0, 70: 100.0, 78: 130.0, 90: 140.0, 104: 120.0}

        if self.service_capacity is None:
            self.service_capacity = {53: 108.0, 80: 110.0, 104: 115.0}

    @property
    def steps_per_week(self) -> int:
        return int(round(1.0 / self.dt))

    @property
    def n_weeks(self) -> int:
        return self.end_week - self.start_week + 1
