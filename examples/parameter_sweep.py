#!/usr/bin/env python3
"""
Example: compare every parameter source in data/parameters.csv against a
synthetic observed series, in parallel
"""

import sys
from pathlib import Path
# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.model_config import ModelConfig
from sdcal.data import load_parameter_table, parameters_from_table, generate_synthetic_observed
from sdcal.optimization import run_parameter_sweep
from sdcal.visualization import save_trajectory_plot, generate_sweep_report

def main():
    model_config = ModelConfig()
    observed, _ = generate_synthetic_observed(model_config, noise_type="gaussian", noise_scale=0.02)

    param_sets = parameters_from_table(load_parameter_table(model_config.parameter_table_path))
    summary_df, trajectories = run_parameter_sweep(param_sets, observed, model_config, processes=4)

    generate_sweep_report(summary_df, observed, model_config)
    save_trajectory_plot(trajectories, observed, prefix="sweep_")

if __name__ == "__main__":
    main()
