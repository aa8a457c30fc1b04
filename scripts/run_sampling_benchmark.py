#!/usr/bin/env python3
"""
Circle-area benchmark: uniform random vs Latin Hypercube vs Sobol sampling
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.sampling_config import SamplingConfig
from sdcal.sampling import sample_points, run_sampling_benchmark, summarize_benchmark
from sdcal.visualization import save_sampler_scatter, save_sampling_convergence_plot, generate_sampling_report

def run_benchmark(config: SamplingConfig):
    """
    Returns:
        results_df: one row per (method, n, repeat)
        summary_df: per (method, n) error summary
    """
    results_df = run_sampling_benchmark(config)
    summary_df = summarize_benchmark(results_df, config.radius)

    generate_sampling_report(summary_df, config)

    n_show = min(config.sample_sizes, key=lambda n: abs(n - 512))
    points = {method: sample_points(method, n_show, seed=config.seed) for method in config.methods}
    save_sampler_scatter(points, config.radius, prefix=config.output_prefix)
    save_sampling_convergence_plot(summary_df, prefix=config.output_prefix)

    results_df.to_csv(f"{config.output_prefix}results.csv", index=False)
    return results_df, summary_df

if __name__ == "__main__":
    run_benchmark(SamplingConfig())
