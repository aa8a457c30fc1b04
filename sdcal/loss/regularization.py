# Libraries to import:
import torch
import numpy as np
from typing import Dict
from abc import ABC, abstractmethod

from ..utils.theta_transforms import LOG_PARAMS

class RegularizationTerm(ABC):
    """Base class for regularization terms"""

    @abstractmethod
    def compute(self, param_dict: Dict[str, torch.Tensor]) -> torch.Tensor:
        """Compute regularization penalty"""
        pass

class L2PriorRegularization(RegularizationTerm):
    """
    L2 penalty on the distance from a prior value

    Time constants and TPOD0 are compared in log space so that a factor-of-two
    miss costs the same at 10 weeks as at 10^6 weeks.
    """

    def __init__(self, param_name: str, prior_value: float, lambda_val: float):
        self.param_name = param_name
        self.prior_value = float(prior_value)
        self.lambda_val = lambda_val
        self.log_space = param_name in LOG_PARAMS
        if self.log_space and not self.prior_value > 0:
            raise ValueError(f"Prior for {param_name} must be positive, got {prior_value}")

    def compute(self, param_dict: Dict[str, torch.Tensor]) -> torch.Tensor:
        if self.param_name not in param_dict:
            return torch.tensor(0.0, dtype=torch.float64)

        value = torch.as_tensor(param_dict[self.param_name], dtype=torch.float64)
        if self.log_space:
            diff = torch.log(value) - np.log(self.prior_value)
        else:
            diff = value - self.prior_value
        return self.lambda_val * diff ** 2

def build_regularization_terms(config, free_params) -> Dict[str, RegularizationTerm]:
    """
    Build prior terms for the free parameters that have a prior value

    Args:
        config: CalibrationConfig with regularization settings
        free_params: names of the estimated parameters

    Returns:
        Dictionary mapping regularization names to RegularizationTerm objects
    """
    reg_config = config.regularization
    terms = {}

    if reg_config.prior_type == "none":
        return terms
    if reg_config.prior_type != "l2_prior":
        raise ValueError(f"Unknown prior_type: {reg_config.prior_type}")

    for name in free_params:
        if name in reg_config.prior_values:
            terms[f"{name}_prior"] = L2PriorRegularization(
                name, reg_config.prior_values[name], reg_config.prior_lambda
            )

    return terms
