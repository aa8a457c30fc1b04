# Libraries to import:
import torch
import numpy as np
import pandas as pd
from scipy.optimize import minimize
import time as global_time

from ..model.integrator import ServiceQualityParams
from ..model.torch_integrator import precompute_inputs, torch_simulate_tpo
from ..utils.theta_transforms import build_theta_structure, apply_theta, to_theta, theta_to_params, LOG_PARAMS
from ..utils.metrics import r_squared, format_iter_report
from ..loss.trajectory_loss import TrajectoryLossFunction
from ..loss.regularization import build_regularization_terms

GRADIENT_OPTIMIZERS = ("L-BFGS-B", "CG", "Adam")
SUPPORTED_OPTIMIZERS = GRADIENT_OPTIMIZERS + ("Nelder-Mead",)

class MultiOptimizerCalibrator:
    """
    Multi-optimizer calibration of the service quality model

    Features:
    - Several optimizers run sequentially on the same objective
    - Restart strategy (Wide/Medium/Narrow) around the best attempt so far
    - Autograd gradients through the differentiable integrator
    - Optional log-space prior regularization
    """

    def __init__(self, config, model_config):
        self.config = config
        self.model_config = model_config
        self.optimizers = config.optimizers
        self.rng = np.random.default_rng(config.numpy_seed)

        unknown = [name for name in self.optimizers if name not in SUPPORTED_OPTIMIZERS]
        if unknown:
            raise ValueError(f"Unknown optimizer: {unknown[0]}")

    def build_loss_fn(self, observed, base_params, struct):
        """
        Returns loss_fn(x_np, need_grad=True) -> (loss, grad, r2)

        Non-finite objectives come back as (inf, zeros, 0.0) so the restart
        loop can keep the best finite attempt.
        """
        mc = self.model_config
        inputs = precompute_inputs(
            observed.customer_orders, observed.service_capacity, mc.start_week, mc.end_week, mc.dt
        )
        report_weeks = np.arange(mc.start_week, mc.end_week + 1, dtype=float)
        mask = np.isin(report_weeks, observed.weeks)
        if not mask.any():
            raise ValueError(f"Observed data has no weeks inside [{mc.start_week}, {mc.end_week}]")

        _, _, obs_np = observed.align(report_weeks, report_weeks)
        obs_t = torch.as_tensor(obs_np, dtype=torch.float64)
        mask_t = torch.as_tensor(mask)

        loss_fn_obj = TrajectoryLossFunction(self.config, metric=self.config.loss_metric)
        reg_terms = build_regularization_terms(self.config, struct["names"])
        iteration_tracker = [0]

        def loss_fn(x_np, need_grad=True):
            theta = torch.from_numpy(np.array(x_np, dtype=float)).to(torch.float64).detach().requires_grad_(need_grad)
            with torch.set_grad_enabled(need_grad):
                values = apply_theta(theta, struct, base_params)
                pred = torch_simulate_tpo(
                    values["alpha"], values["tau_decrease"], values["tau_increase"], values["tpod0"],
                    inputs,
                    tpo_floor=mc.tpo_floor,
                    quality_pressure=mc.quality_pressure,
                    zero_demand_multiplier=mc.zero_demand_multiplier
                )[mask_t]

                fit_obj = loss_fn_obj.objective(pred, obs_t)
                total_reg = torch.tensor(0.0, dtype=torch.float64)
                for reg_term in reg_terms.values():
                    total_reg = total_reg + reg_term.compute(values)
                total_loss = fit_obj + total_reg

            if not torch.isfinite(total_loss):
                return float("inf"), np.zeros(struct["size"]), 0.0

            grad = np.zeros(struct["size"])
            if need_grad:
                total_loss.backward()
                grad = theta.grad.detach().numpy().copy()

            pred_np = pred.detach().numpy()
            r2 = r_squared(pred_np, obs_np)
            format_iter_report(
                pred_np, obs_np, iteration_tracker[0],
                g_norm=np.linalg.norm(grad) if need_grad else None,
                loss_obj=total_loss.item(),
                verbose=self.config.verbosity >= 3
            )
            iteration_tracker[0] += 1
            return total_loss.item(), grad, r2

        return loss_fn

    def run(self, observed, base_params: ServiceQualityParams):
        """
        Run multi-optimizer calibration suite

        Returns:
            results_df: pandas DataFrame with all attempts
            best_per_optimizer: dict mapping optimizer name -> best result
            structure: theta structure
        """
        struct = build_theta_structure(self.config.estimate)
        if struct["size"] == 0:
            raise ValueError("No parameters selected for estimation")

        loss_fn = self.build_loss_fn(observed, base_params, struct)

        initial_guesses = [
            to_theta(base_params, struct),
            self._generate_restart_point(to_theta(base_params, struct), struct, 0.25)
        ]

        all_attempts = []

        for opt_name in self.optimizers:
            if self.config.verbosity >= 1:
                print(f"\n{'='*70}")
                print(f"RUNNING OPTIMIZER: {opt_name}")
                print(f"{'='*70}")

            for guess_id, x0 in enumerate(initial_guesses, 1):
                if self.config.verbosity >= 1:
                    print(f"\nInitial Guess {guess_id}/{len(initial_guesses)}")

                result_initial = self._run_single_attempt(opt_name, x0, loss_fn, struct, base_params, guess_id, "Initial", 0)
                all_attempts.append(result_initial)
                best_so_far = result_initial

                if result_initial['r_squared'] >= self.config.early_stop_r2:
                    if self.config.verbosity >= 1:
                        print(f"Early stop: R² = {result_initial['r_squared']:.4f} >= {self.config.early_stop_r2}")
                    continue

                restart_phases = [
                    ("Wide Search", self.config.num_wide_restarts, self.config.restart_widths["Wide Search"]),
                    ("Medium Search", self.config.num_medium_restarts, self.config.restart_widths["Medium Search"]),
                    ("Narrow Search", self.config.num_narrow_restarts, self.config.restart_widths["Narrow Search"])
                ]

                stop = False
                for phase_name, num_restarts, width in restart_phases:
                    for restart_idx in range(num_restarts):
                        if self.config.verbosity >= 2:
                            print(f"\n{phase_name} - Restart {restart_idx+1}/{num_restarts}")

                        restart_x0 = self._generate_restart_point(best_so_far['theta_opt'], struct, width)
                        result_restart = self._run_single_attempt(
                            opt_name, restart_x0, loss_fn, struct, base_params, guess_id, phase_name, restart_idx + 1
                        )
                        all_attempts.append(result_restart)

                        if result_restart['loss'] < best_so_far['loss']:
                            best_so_far = result_restart

                        if result_restart['r_squared'] >= self.config.early_stop_r2:
                            if self.config.verbosity >= 1:
                                print(f"Early stop in restart: R² >= {self.config.early_stop_r2}")
                            stop = True
                            break

                    if stop:
                        break

        results_df = pd.DataFrame(all_attempts)

        best_per_optimizer = {}
        for opt_name in self.optimizers:
            opt_results = results_df[results_df['optimizer'] == opt_name]
            if not opt_results.empty:
                best_idx = opt_results['loss'].idxmin()
                best_per_optimizer[opt_name] = results_df.loc[best_idx].to_dict()

        return results_df, best_per_optimizer, struct

    def _run_single_attempt(self, optimizer_name, x0, loss_fn, struct, base_params, guess_id, phase, restart_num):
        """Run one optimization attempt"""
        start_time = global_time.time()

        if optimizer_name in ("L-BFGS-B", "CG"):
            options = {'gtol': 1e-06, 'maxiter': self.config.max_iter}
            if optimizer_name == "L-BFGS-B":
                options['ftol'] = 1e-10
            res = minimize(
                lambda x: loss_fn(x)[:2],
                x0,
                jac=True,
                method=optimizer_name,
                options=options
            )

        elif optimizer_name == "Nelder-Mead":
            res = minimize(
                lambda x: loss_fn(x, need_grad=False)[0],
                x0,
                method='Nelder-Mead',
                options={'maxiter': self.config.max_iter * len(x0), 'xatol': 1e-6, 'fatol': 1e-10}
            )

        elif optimizer_name == "Adam":
            theta = torch.tensor(x0, dtype=torch.float64, requires_grad=True)
            adam_optimizer = torch.optim.Adam([theta], lr=self.config.adam_lr)

            best_loss, best_x = float("inf"), np.array(x0, dtype=float)
            for i in range(self.config.adam_steps):
                adam_optimizer.zero_grad()
                loss_val, grad_np, _ = loss_fn(theta.detach().numpy())
                if not np.isfinite(loss_val):
                    break
                if loss_val < best_loss:
                    best_loss, best_x = loss_val, theta.detach().numpy().copy()
                theta.grad = torch.from_numpy(grad_np)
                adam_optimizer.step()

            res = type('Result', (), {
                'x': best_x,
                'fun': best_loss,
                'success': np.isfinite(best_loss),
                'nit': self.config.adam_steps
            })()

        else:
            raise ValueError(f"Unknown optimizer: {optimizer_name}")

        duration = global_time.time() - start_time

        # Final evaluation
        final_loss, _, final_r2 = loss_fn(res.x, need_grad=False)
        params = theta_to_params(res.x, struct, base_params)

        if self.config.verbosity >= 1:
            print(f"{optimizer_name:<12} {phase:<14} #{restart_num} | Loss={final_loss:.6g}, R²={final_r2:.5f}, "
                  f"{duration:.1f}s | " + ", ".join(f"{n}={getattr(params, n):.5g}" for n in struct["names"]))

        result = {
            'optimizer': optimizer_name,
            'initial_guess_id': guess_id,
            'phase': phase,
            'restart_num': restart_num,
            'loss': final_loss,
            'r_squared': final_r2,
            'theta_opt': np.array(res.x, dtype=float),
            'duration': duration,
            'nit': getattr(res, 'nit', 0)
        }
        result.update(params.as_dict())
        return result

    def _generate_restart_point(self, base_theta, struct, width):
        """Perturb each free parameter by up to +/- width (relative)"""
        theta_new = np.array(base_theta, dtype=float).copy()

        for name, s in struct["slices"].items():
            if name in LOG_PARAMS:
                # Multiplicative jitter in natural space
                theta_new[s] = base_theta[s] + np.log(self.rng.uniform(max(1.0 - width, 1e-3), 1.0 + width))
            else:
                scale = max(abs(float(base_theta[s][0])), 0.1)
                theta_new[s] = base_theta[s] + self.rng.uniform(-width, width) * scale

        return theta_new

def best_overall(best_per_optimizer):
    """(optimizer name, result) with the lowest loss"""
    return min(best_per_optimizer.items(), key=lambda x: x[1]['loss'])
