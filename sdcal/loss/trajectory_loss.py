import torch
import numpy as np
from typing import Dict, Optional
from .base_loss import LossFunction, LossComponents

def _as_tensor(x):
    if torch.is_tensor(x):
        return x.detach().to(torch.float64)
    return torch.as_tensor(np.array(x, dtype=float), dtype=torch.float64)

class TrajectoryLossFunction(LossFunction):
    """
    Fit of a weekly TPO trajectory against the observed series

    metric:
        "sse":  sum of squared errors
        "rmse": root mean squared error
    """

    def __init__(self, config, metric="sse"):
        super().__init__(config)
        if metric not in ("sse", "rmse"):
            raise ValueError(f"Unknown loss metric: {metric}")
        self.metric = metric

    def objective(self, pred: torch.Tensor, obs: torch.Tensor) -> torch.Tensor:
        """Differentiable data-fit term"""
        sq = torch.sum((pred - obs) ** 2)
        if self.metric == "sse":
            return sq
        return torch.sqrt(sq / pred.numel())

    def __call__(self, pred, obs, regularization_terms: Optional[Dict[str, torch.Tensor]] = None):
        """
        Compute loss with optional regularization

        Returns:
            LossComponents object
        """
        pred, obs = _as_tensor(pred), _as_tensor(obs)
        if pred.shape != obs.shape:
            raise ValueError(f"Prediction shape {tuple(pred.shape)} does not match observed {tuple(obs.shape)}")

        with torch.no_grad():
            residual = pred - obs
            total_sse = torch.sum(residual ** 2).item()
            rmse = torch.sqrt(torch.mean(residual ** 2)).item() if residual.numel() else float("nan")
            ss_tot = torch.sum((obs - torch.mean(obs)) ** 2).item()
            r2 = 1.0 - (total_sse / ss_tot) if ss_tot > 0 else 0.0
            fit = total_sse if self.metric == "sse" else rmse

        reg_dict = {}
        total_reg = 0.0
        if regularization_terms:
            for name, term in regularization_terms.items():
                val = term.item() if torch.is_tensor(term) else float(term)
                reg_dict[name] = val
                total_reg += val

        return LossComponents(
            total_loss=fit + total_reg,
            sse=total_sse,
            rmse=rmse,
            r_squared=r2,
            regularization=reg_dict
        )
