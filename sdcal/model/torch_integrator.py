# Libraries to import:
import torch
import numpy as np

from .integrator import (
    TPO_FLOOR,
    QUALITY_PRESSURE,
    ZERO_DEMAND_MULTIPLIER,
    steps_per_unit,
    check_horizon
)

def precompute_inputs(customer_orders, service_capacity, start_time, end_time, dt):
    """
    Evaluate both exogenous inputs once on the Euler sub-step grid

    The inputs do not depend on the parameters, so repeated calibration
    calls reuse these tensors.
    """
    start, end = check_horizon(start_time, end_time)
    n_sub = steps_per_unit(dt)
    n_steps = (end - start) * n_sub
    t_grid = start + np.arange(n_steps + 1) / n_sub
    return {
        "t_grid": t_grid,
        "co": torch.as_tensor(customer_orders(t_grid), dtype=torch.float64),
        "sc": torch.as_tensor(service_capacity(t_grid), dtype=torch.float64),
        "steps_per_unit": n_sub,
        "n_steps": n_steps,
        "h": 1.0 / n_sub
    }

def torch_simulate_tpo(
    alpha,
    tau_decrease,
    tau_increase,
    tpod0,
    inputs,
    tpo_floor=TPO_FLOOR,
    quality_pressure=QUALITY_PRESSURE,
    zero_demand_multiplier=ZERO_DEMAND_MULTIPLIER
):
    """
    Differentiable twin of integrator.simulate()

    Parameters are 0-d float64 tensors (plain floats are promoted).
    Returns the weekly TPO tensor of shape (n_weeks,).
    """
    alpha, tau_decrease, tau_increase, state = (
        torch.as_tensor(v, dtype=torch.float64) for v in (alpha, tau_decrease, tau_increase, tpod0)
    )
    co, sc = inputs["co"], inputs["sc"]
    n_sub, n_steps, h = inputs["steps_per_unit"], inputs["n_steps"], inputs["h"]

    weekly = []
    for k in range(n_steps + 1):
        desired = state * co[k]
        if desired.item() == 0.0:
            multiplier = torch.tensor(zero_demand_multiplier, dtype=torch.float64)
        else:
            multiplier = torch.pow(desired / sc[k], alpha)
        tpo = torch.clamp(quality_pressure * multiplier * state, min=tpo_floor)

        if k % n_sub == 0:
            weekly.append(tpo)

        if k < n_steps:
            tau = tau_increase if tpo.item() > state.item() else tau_decrease
            state = state + h * (tpo - state) / tau

    return torch.stack(weekly)
