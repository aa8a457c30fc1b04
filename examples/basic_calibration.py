#!/usr/bin/env python3
"""
Example: recover alpha and tau_decrease from noise-free synthetic data
"""

import sys
from pathlib import Path
# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.calibration_config import CalibrationConfig
from config.model_config import ModelConfig
from scripts.run_calibration import run_calibration
from sdcal.model import ServiceQualityParams
from sdcal.utils.logger import start_logging, stop_logging

def main():
    logger = start_logging(prefix="basic_calibration")

    try:
        calib_config = CalibrationConfig(
            optimizers=["L-BFGS-B", "Nelder-Mead"],
            verbosity=1,
            noise_type="none"
        )
        calib_config.estimate = {
            "alpha": True,
            "tau_decrease": True,
            "tau_increase": False,
            "tpod0": False
        }

        model_config = ModelConfig()

        # Deliberately off: the optimizers must find their way back
        start = ServiceQualityParams(alpha=-0.3, tau_decrease=40.0, tau_increase=8_140_000.0, tpod0=1.08)
        best_params, _, _ = run_calibration(calib_config, model_config, base_params=start)

        print("\nRecovered parameters:")
        for name, value in best_params.as_dict().items():
            print(f"  {name:<14} {value:.6g}  (true {model_config.true_params[name]:.6g})")

    finally:
        stop_logging(logger)

if __name__ == "__main__":
    main()
