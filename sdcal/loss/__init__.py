from .base_loss import LossFunction, LossComponents
from .trajectory_loss import TrajectoryLossFunction
from .regularization import (
    RegularizationTerm,
    L2PriorRegularization,
    build_regularization_terms
)

__all__ = [
    "LossFunction",
    "LossComponents",
    "TrajectoryLossFunction",
    "RegularizationTerm",
    "L2PriorRegularization",
    "build_regularization_terms"
]
