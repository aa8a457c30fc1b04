import matplotlib.pyplot as plt
import numpy as np
from typing import Dict

from ..utils.metrics import r_squared

def _with_prefix(filename, prefix):
    return prefix + filename if prefix else filename

def save_trajectory_plot(trajectories, observed, filename="tpo_by_source.png", prefix="", title=None):
    """
    Weekly TPO of every parameter source against the observed series

    Args:
        trajectories: dict source -> Trajectory
        observed: ObservedData
    """
    filename = _with_prefix(filename, prefix)

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 9), sharex=True, gridspec_kw={"height_ratios": [3, 1]})
    ax1.scatter(observed.weeks, observed.tpo, color='black', alpha=0.5, s=14, label='Observed', zorder=3)

    colors = plt.cm.tab10(np.linspace(0, 1, max(len(trajectories), 1)))
    for color, (source, traj) in zip(colors, trajectories.items()):
        _, pred, obs = observed.align(traj.time, traj.output)
        ax1.plot(traj.time, traj.output, color=color, linewidth=2, label=f"{source} (R²={r_squared(pred, obs):.3f})")
        ax1.plot(traj.time, traj.state, color=color, linewidth=1, linestyle=':', alpha=0.7)

    ax1.set_ylabel('Time per order (weeks)', fontsize=12, fontweight='bold')
    ax1.set_title(title or 'TPO by parameter source (dotted: desired TPO)', fontsize=14)
    ax1.grid(True, alpha=0.3)
    ax1.legend(loc='best', fontsize=9)

    ax2.plot(observed.weeks, observed.frame["customer_orders"], color='#2c3e50', linewidth=2, label='Customer orders')
    ax2.plot(observed.weeks, observed.frame["service_capacity"], color='#e74c3c', linewidth=2, linestyle='--', label='Service capacity')
    ax2.set_xlabel('Week')
    ax2.set_ylabel('Exogenous inputs')
    ax2.grid(True, alpha=0.3)
    ax2.legend(loc='best', fontsize=9)

    fig.tight_layout()
    plt.savefig(filename)
    plt.close(fig)
    print(f"Saved: {filename}")
    return filename

def save_calibration_fit_plot(observed, fitted, clean=None, filename="calibration_fit.png", prefix=""):
    """
    Observed vs calibrated TPO, with the noise-free truth when known
    """
    filename = _with_prefix(filename, prefix)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.scatter(observed.weeks, observed.tpo, color='black', alpha=0.4, s=14, label='Observed')
    if clean is not None:
        ax.plot(clean.time, clean.output, color='green', linewidth=2, label='Ground Truth')
    ax.plot(fitted.time, fitted.output, color='red', linestyle='--', linewidth=2, label='Estimated')

    _, pred, obs = observed.align(fitted.time, fitted.output)
    ax.text(0.95, 0.94, f"Estimated R²: {r_squared(pred, obs):.4f}", transform=ax.transAxes, ha='right', color='red', fontsize=10, fontweight='bold')
    if clean is not None:
        _, tru, obs = observed.align(clean.time, clean.output)
        ax.text(0.95, 0.89, f"Ground Truth R²: {r_squared(tru, obs):.4f}", transform=ax.transAxes, ha='right', color='green', fontsize=10, fontweight='bold')

    ax.set_xlabel('Week')
    ax.set_ylabel('Time per order (weeks)')
    ax.set_title('Calibrated service quality model', fontsize=14)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='lower left')

    fig.tight_layout()
    plt.savefig(filename)
    plt.close(fig)
    print(f"Saved: {filename}")
    return filename

def save_sampler_scatter(points_by_method: Dict[str, np.ndarray], radius=1.0, filename="sampler_points.png", prefix=""):
    """Side-by-side scatter of each sampler's points on [-r, r]^2 with the circle"""
    filename = _with_prefix(filename, prefix)

    n_methods = len(points_by_method)
    fig, axes = plt.subplots(1, n_methods, figsize=(5 * n_methods, 5), squeeze=False)
    theta = np.linspace(0, 2 * np.pi, 400)

    for ax, (method, points) in zip(axes[0], points_by_method.items()):
        xy = (2.0 * np.asarray(points) - 1.0) * radius
        inside = xy[:, 0] ** 2 + xy[:, 1] ** 2 <= radius ** 2
        ax.scatter(xy[inside, 0], xy[inside, 1], s=6, color='steelblue', alpha=0.7)
        ax.scatter(xy[~inside, 0], xy[~inside, 1], s=6, color='coral', alpha=0.7)
        ax.plot(radius * np.cos(theta), radius * np.sin(theta), color='black', linewidth=1)
        estimate = 4.0 * radius ** 2 * inside.mean()
        ax.set_title(f"{method} (n={len(xy)}): area ≈ {estimate:.4f}")
        ax.set_xlim(-radius, radius)
        ax.set_ylim(-radius, radius)
        ax.set_aspect('equal')

    fig.tight_layout()
    plt.savefig(filename)
    plt.close(fig)
    print(f"Saved: {filename}")
    return filename

def save_sampling_convergence_plot(summary_df, filename="sampling_convergence.png", prefix=""):
    """Log-log RMSE of the area estimate vs sample size, one line per method"""
    filename = _with_prefix(filename, prefix)

    fig, ax = plt.subplots(figsize=(10, 6))
    for method, group in summary_df.groupby("method", sort=False):
        group = group.sort_values("n")
        ax.plot(group["n"], group["rmse"], marker='o', linewidth=2, label=method)

    # n^-1/2 reference anchored at the first random point
    ref = summary_df[summary_df["method"] == "random"].sort_values("n")
    if not ref.empty:
        n0, e0 = ref["n"].iloc[0], ref["rmse"].iloc[0]
        n_ref = np.array(sorted(summary_df["n"].unique()), dtype=float)
        ax.plot(n_ref, e0 * np.sqrt(n0 / n_ref), color='grey', linestyle=':', label='n^-1/2')

    ax.set_xscale('log')
    ax.set_yscale('log')
    ax.set_xlabel('Number of points')
    ax.set_ylabel('RMSE of area estimate', fontsize=12, fontweight='bold')
    ax.set_title('Circle area: sampler convergence', fontsize=14)
    ax.grid(True, which="both", ls="-", alpha=0.2)
    ax.legend()

    fig.tight_layout()
    plt.savefig(filename)
    plt.close(fig)
    print(f"Saved: {filename}")
    return filename

def plot_multi_optimizer_comparison(results_dict: Dict, stage_name: str = "Calibration", filename: str = None, prefix: str = ""):
    """
    Plot comparison of multiple optimizers

    Args:
        results_dict: dict mapping optimizer name to result dict with 'loss', 'r_squared', 'duration'
        stage_name: label used in titles and the default filename
    """
    if not results_dict:
        print("No results to plot")
        return None

    optimizers = list(results_dict.keys())
    losses = [results_dict[opt].get('loss', float('inf')) for opt in optimizers]
    r2s = [results_dict[opt].get('r_squared', 0.0) for opt in optimizers]
    durations = [results_dict[opt].get('duration', 0.0) for opt in optimizers]

    fig, axes = plt.subplots(1, 3, figsize=(18, 5))

    axes[0].bar(optimizers, losses, color='steelblue', alpha=0.7)
    axes[0].set_ylabel('Loss', fontsize=12, fontweight='bold')
    axes[0].set_title(f'{stage_name} - Loss Comparison', fontsize=14)
    if all(np.isfinite(losses)) and min(losses) > 0:
        axes[0].set_yscale('log')
    axes[0].grid(axis='y', alpha=0.3)
    axes[0].tick_params(axis='x', rotation=45)

    axes[1].bar(optimizers, r2s, color='seagreen', alpha=0.7)
    axes[1].set_ylabel('R²', fontsize=12, fontweight='bold')
    axes[1].set_title(f'{stage_name} - R² Comparison', fontsize=14)
    axes[1].set_ylim([0, 1])
    axes[1].grid(axis='y', alpha=0.3)
    axes[1].tick_params(axis='x', rotation=45)

    axes[2].bar(optimizers, durations, color='coral', alpha=0.7)
    axes[2].set_ylabel('Duration (seconds)', fontsize=12, fontweight='bold')
    axes[2].set_title(f'{stage_name} - Runtime Comparison', fontsize=14)
    axes[2].grid(axis='y', alpha=0.3)
    axes[2].tick_params(axis='x', rotation=45)

    plt.tight_layout()

    filename = _with_prefix(filename or f"{stage_name.replace(' ', '_')}_optimizer_comparison.png", prefix)
    plt.savefig(filename)
    plt.close(fig)
    print(f"Saved: {filename}")
    return filename
