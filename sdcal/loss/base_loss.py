# Libraries to import:
from dataclasses import dataclass, field
from typing import Dict

@dataclass
class LossComponents:
    """Container for loss function components"""
    total_loss: float
    sse: float
    rmse: float
    r_squared: float
    regularization: Dict[str, float] = field(default_factory=dict)  # e.g., {"tau_decrease_prior": 0.02}

    def __str__(self):
        lines = [
            f"\nLoss Breakdown:",
            f"  SSE (data fit):        {self.sse:.6f}",
        ]
        for reg_name, reg_val in self.regularization.items():
            lines.append(f"  {reg_name:20s}: {reg_val:.6f}")
        lines.extend([
            f"  {'─' * 40}",
            f"  TOTAL:                 {self.total_loss:.6f}",
            f"\nFit Quality:",
            f"  RMSE:                  {self.rmse:.6f}",
            f"  R²:                    {self.r_squared:.6f}"
        ])
        return "\n".join(lines)

class LossFunction:
    """Base class for loss functions"""

    def __init__(self, config):
        self.config = config
        self.iteration_count = 0

    def __call__(self, pred, obs, regularization_terms=None):
        """Compute loss and return components"""
        raise NotImplementedError

    def report(self, components: LossComponents, verbosity: int = 1):
        """Print loss breakdown based on verbosity level"""
        if verbosity == 0:
            return
        elif verbosity == 1:
            print(f"Iter {self.iteration_count:03d} | Loss: {components.total_loss:.6f}, R²: {components.r_squared:.4f}")
        elif verbosity >= 2:
            print(f"\n{'='*60}")
            print(f"Iteration {self.iteration_count}")
            print(components)
            print(f"{'='*60}")

        self.iteration_count += 1
