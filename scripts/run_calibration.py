#!/usr/bin/env python3
"""
Main calibration script: parameter sweep over the parameter table, then
multi-optimizer calibration against the observed series
"""

# Libraries to import:
import torch
import numpy as np
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.calibration_config import CalibrationConfig
from config.model_config import ModelConfig
from sdcal.data import load_parameter_table, parameters_from_table, load_observed, generate_synthetic_observed
from sdcal.model import ServiceQualityParams, simulate_with_config
from sdcal.optimization import MultiOptimizerCalibrator, run_parameter_sweep, best_overall
from sdcal.visualization import (
    save_trajectory_plot,
    save_calibration_fit_plot,
    plot_multi_optimizer_comparison,
    generate_sweep_report,
    generate_calibration_report
)

def load_observed_data(calib_config: CalibrationConfig, model_config: ModelConfig):
    """
    Observed series from CSV, or synthetic truth from the configured true parameters

    Returns:
        observed: ObservedData
        clean: noise-free Trajectory (None for real data)
    """
    if model_config.observed_data_path is not None:
        print(f"Loading observed data: {model_config.observed_data_path}")
        return load_observed(model_config.observed_data_path), None

    print(f"Generating synthetic observed data (noise: {calib_config.noise_type})")
    return generate_synthetic_observed(
        model_config,
        noise_type=calib_config.noise_type,
        noise_seed=calib_config.noise_seed,
        noise_scale=calib_config.noise_scale
    )

def run_sweep(model_config: ModelConfig, observed, prefix=""):
    """Simulate every source in the parameter table and report the fits"""
    table = load_parameter_table(model_config.parameter_table_path)
    param_sets = parameters_from_table(table)

    summary_df, trajectories = run_parameter_sweep(param_sets, observed, model_config)
    generate_sweep_report(summary_df, observed, model_config)
    save_trajectory_plot(trajectories, observed, prefix=prefix)
    return summary_df, trajectories

def run_calibration(calib_config: CalibrationConfig, model_config: ModelConfig, base_params=None):
    """
    Main calibration workflow

    Returns:
        best_params: ServiceQualityParams of the best optimizer
        best_per_optimizer: dict optimizer -> best result
        results_df: every attempt
    """
    torch.manual_seed(calib_config.torch_seed)
    np.random.seed(calib_config.numpy_seed)

    prefix = calib_config.output_prefix
    if calib_config.output_dir:
        Path(calib_config.output_dir).mkdir(parents=True, exist_ok=True)
        prefix = str(Path(calib_config.output_dir) / prefix)

    observed, clean = load_observed_data(calib_config, model_config)

    summary_df, _ = run_sweep(model_config, observed, prefix=prefix)

    # Start from the best-fitting source unless told otherwise
    if base_params is None:
        best_source = summary_df['sse'].idxmin()
        base_params = ServiceQualityParams(**{
            name: float(summary_df.loc[best_source, name])
            for name in ("alpha", "tau_decrease", "tau_increase", "tpod0")
        })
        print(f"\nCalibration starts from source '{best_source}'")

    calibrator = MultiOptimizerCalibrator(calib_config, model_config)
    results_df, best_per_optimizer, struct = calibrator.run(observed, base_params)

    true_params = model_config.true_params if clean is not None else None
    generate_calibration_report(best_per_optimizer, struct, calib_config, true_params=true_params)

    best_opt_name, best = best_overall(best_per_optimizer)
    best_params = ServiceQualityParams(**{
        name: float(best[name]) for name in ("alpha", "tau_decrease", "tau_increase", "tpod0")
    })

    fitted = simulate_with_config(best_params, observed.customer_orders, observed.service_capacity, model_config)
    save_calibration_fit_plot(observed, fitted, clean=clean, prefix=prefix)
    plot_multi_optimizer_comparison(best_per_optimizer, prefix=prefix)
    results_df.drop(columns=['theta_opt']).to_csv(f"{prefix}attempts.csv", index=False)

    return best_params, best_per_optimizer, results_df

if __name__ == "__main__":
    # Initialize configurations
    calib_config = CalibrationConfig()
    model_config = ModelConfig()

    # Run calibration
    best_params, best_per_optimizer, results_df = run_calibration(calib_config, model_config)

    print("\nCalibration complete!")
    print(best_params)
