# Libraries to import:
import numpy as np
from typing import Dict, Optional
from ..utils.metrics import (
    print_parameter_table,
    print_sweep_table,
    print_optimizer_comparison_table,
    print_sampling_summary
)

def generate_sweep_report(summary_df, observed, model_config):
    """
    Report of a parameter sweep

    Args:
        summary_df: output of run_parameter_sweep()
        observed: ObservedData the sources were scored against
        model_config: ModelConfig with the horizon
    """
    print("\n" + "="*100)
    print("PARAMETER SWEEP REPORT")
    print("="*100)
    print(f"Horizon: weeks {model_config.start_week}-{model_config.end_week} "
          f"({model_config.steps_per_week} Euler sub-steps per week)")
    print(f"Observed weeks: {len(observed.weeks)} "
          f"(TPO range {np.min(observed.tpo):.4f} - {np.max(observed.tpo):.4f})")

    print_sweep_table(summary_df)

def generate_calibration_report(
    best_per_optimizer: Dict,
    structure: Dict,
    config,
    true_params: Optional[Dict] = None
):
    """
    Report of a calibration run

    Args:
        best_per_optimizer: dict mapping optimizer name -> best result
        structure: theta structure
        config: CalibrationConfig
        true_params: dict with true parameter values (synthetic data only)
    """
    print("\n" + "#"*100)
    print("#" + " "*98 + "#")
    print("#" + " "*34 + "CALIBRATION REPORT" + " "*46 + "#")
    print("#" + " "*98 + "#")
    print("#"*100)

    print(f"\nOptimizers: {', '.join(config.optimizers)}")
    print(f"Estimated parameters: {', '.join(structure['names'])}")
    print(f"Loss metric: {config.loss_metric}")
    print(f"Noise: {config.noise_type}")

    print_optimizer_comparison_table(best_per_optimizer, stage_name="Calibration")

    best_opt_name, best = min(best_per_optimizer.items(), key=lambda x: x[1]['loss'])
    opt_params = {name: best[name] for name in structure["names"]}
    print_parameter_table(
        f"PARAMETER RECOVERY - BEST OPTIMIZER ({best_opt_name})",
        true_params,
        opt_params,
        fit_details={"loss": best['loss'], "r_squared": best['r_squared']}
    )

    print("\n" + "#"*100)

def generate_sampling_report(summary_df, config):
    """Report of the circle-area sampling benchmark"""
    print("\n" + "="*84)
    print("SAMPLING BENCHMARK REPORT")
    print("="*84)
    print(f"Methods: {', '.join(config.methods)}")
    print(f"Sample sizes: {', '.join(str(n) for n in config.sample_sizes)}")
    print(f"Repeats per size: {config.n_repeats}")

    print_sampling_summary(summary_df, config.radius)

    largest = summary_df[summary_df["n"] == summary_df["n"].max()]
    if not largest.empty:
        ranking = largest.sort_values("rmse")
        print(f"\nRanking at n = {int(largest['n'].iloc[0])} (by RMSE):")
        for rank, (_, row) in enumerate(ranking.iterrows(), 1):
            print(f"  {rank}. {row['method']:<8} RMSE = {row['rmse']:.6f}")
