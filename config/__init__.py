from .model_config import ModelConfig
from .calibration_config import CalibrationConfig, RegularizationConfig
from .sampling_config import SamplingConfig

__all__ = [
    "ModelConfig",
    "CalibrationConfig",
    "RegularizationConfig",
    "SamplingConfig"
]
