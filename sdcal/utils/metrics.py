# Libraries to import:
import numpy as np

def sse(pred, obs):
    pred, obs = np.asarray(pred, dtype=float), np.asarray(obs, dtype=float)
    return float(np.sum((pred - obs) ** 2))

def rmse(pred, obs):
    pred, obs = np.asarray(pred, dtype=float), np.asarray(obs, dtype=float)
    if pred.size == 0:
        return float("nan")
    return float(np.sqrt(np.mean((pred - obs) ** 2)))

def r_squared(pred, obs):
    """Coefficient of determination; 0.0 when the observed series is constant"""
    pred, obs = np.asarray(pred, dtype=float), np.asarray(obs, dtype=float)
    ss_tot = np.sum((obs - np.mean(obs)) ** 2)
    if not ss_tot > 0:
        return 0.0
    return float(1.0 - np.sum((obs - pred) ** 2) / ss_tot)

def max_abs_error(pred, obs):
    pred, obs = np.asarray(pred, dtype=float), np.asarray(obs, dtype=float)
    return float(np.max(np.abs(pred - obs))) if pred.size else float("nan")

def format_iter_report(pred, obs, iteration_count, g_norm=None, loss_obj=None, verbose=True):
    """
    Format and print one calibration iteration

    Returns:
        sse, r2
    """
    if not verbose:
        return 0.0, 0.0

    s, r2 = sse(pred, obs), r_squared(pred, obs)
    out = f"Iter {iteration_count:03d} | SSE={s:.6f}, R2={r2:.4f}, MaxErr={max_abs_error(pred, obs):.4f}"
    if g_norm is not None:
        out += f", Grad={g_norm:.5f}"
    print(out)

    if loss_obj is not None:
        print(f"         LOSS (Objective): {loss_obj:.6f}")

    return s, r2

def print_parameter_table(title, true_params, opt_params, fit_details=None):
    """
    Print parameter recovery table

    Args:
        true_params: dict name -> value (None for unknown truth)
        opt_params: dict name -> estimated value
        fit_details: optional dict with 'loss', 'sse', 'r_squared'
    """
    print(f"\n>>> {title} <<<")
    print("=" * 80)
    print(f"{'PARAMETER':<16} | {'TRUE':<16} | {'ESTIMATED':<16} | {'% DEV':<10}")
    print("-" * 80)
    for name, o_val in opt_params.items():
        t_val = true_params.get(name) if true_params else None
        if t_val is None:
            print(f"{name:<16} | {'-':<16} | {o_val:<16.6g} | {'':<10}")
            continue
        dev_str = f"{((o_val - t_val) / t_val) * 100:>+9.2f}%" if t_val != 0 else f"{'n/a':>10}"
        print(f"{name:<16} | {t_val:<16.6g} | {o_val:<16.6g} | {dev_str}")
    print("-" * 80)
    if fit_details:
        print(f"FIT QUALITY: LOSS = {fit_details.get('loss', float('nan')):.6f} | "
              f"SSE = {fit_details.get('sse', float('nan')):.6f} | "
              f"R2 = {fit_details.get('r_squared', float('nan')):.6f}")
    print("=" * 80)

def print_sweep_table(summary_df):
    """Print per-source fit table from run_parameter_sweep()"""
    print(f"\n>>> PARAMETER SWEEP: FIT AGAINST OBSERVED <<<")
    print("=" * 100)
    print(f"{'SOURCE':<20} | {'ALPHA':<8} | {'TAU DEC':<10} | {'TAU INC':<12} | {'TPOD0':<7} | "
          f"{'SSE':<10} | {'RMSE':<8} | {'R2':<8}")
    print("-" * 100)
    for source, row in summary_df.iterrows():
        print(f"{str(source):<20} | {row['alpha']:<8.3f} | {row['tau_decrease']:<10.4g} | {row['tau_increase']:<12.4g} | "
              f"{row['tpod0']:<7.3f} | {row['sse']:<10.5f} | {row['rmse']:<8.5f} | {row['r_squared']:<8.4f}")
    print("=" * 100)
    if len(summary_df):
        best = summary_df['sse'].idxmin()
        print(f"Best source: {best} (SSE = {summary_df.loc[best, 'sse']:.5f})")

def print_optimizer_comparison_table(best_results, stage_name="Calibration"):
    """
    Print comparison table of optimizer performance

    Args:
        best_results: dict mapping optimizer name -> result dict
        stage_name: label for the table
    """
    print(f"\n>>> {stage_name.upper()}: OPTIMIZER COMPARISON <<<")
    print("=" * 80)
    print(f"{'OPTIMIZER':<15} | {'LOSS':<14} | {'R2':<10} | {'TIME (s)':<10} | {'ITERS':<8}")
    print("-" * 80)
    for opt_name, result in sorted(best_results.items(), key=lambda x: x[1]['loss']):
        print(f"{opt_name:<15} | {result['loss']:<14.6f} | {result.get('r_squared', 0.0):<10.6f} | "
              f"{result.get('duration', 0.0):<10.2f} | {int(result.get('nit', 0)):<8d}")
    print("=" * 80)

def print_sampling_summary(summary_df, radius):
    """Print per (method, n) error summary from summarize_benchmark()"""
    print(f"\n>>> CIRCLE AREA BENCHMARK (r = {radius:g}, true area = {np.pi * radius ** 2:.6f}) <<<")
    print("=" * 84)
    print(f"{'METHOD':<8} | {'N':>7} | {'MEAN EST':<12} | {'MEAN |ERR|':<12} | {'STD |ERR|':<12} | {'RMSE':<12}")
    print("-" * 84)
    for _, row in summary_df.iterrows():
        print(f"{row['method']:<8} | {int(row['n']):>7d} | {row['mean_estimate']:<12.6f} | "
              f"{row['mean_abs_error']:<12.6f} | {row['std_abs_error']:<12.6f} | {row['rmse']:<12.6f}")
    print("=" * 84)
