# Libraries to import:
import numpy as np
import pandas as pd

from ..model.interpolation import LinearInterpolator
from ..model.integrator import ServiceQualityParams, simulate_with_config
from ..utils.noise import add_noise_to_series
from .loading import ObservedData

def exogenous_from_config(model_config):
    """Interpolators for customer orders and service capacity from a ModelConfig"""
    return (
        LinearInterpolator.from_mapping(model_config.customer_orders),
        LinearInterpolator.from_mapping(model_config.service_capacity)
    )

def generate_synthetic_observed(model_config, params=None, noise_type="none", noise_seed=12345, noise_scale=0.02):
    """
    Simulate the model with known parameters and package the weekly TPO
    (optionally noisy) as an ObservedData set

    Returns:
        observed: ObservedData with the noisy series
        clean_trajectory: Trajectory of the noise-free run
    """
    if params is None:
        params = ServiceQualityParams(**model_config.true_params)

    co, sc = exogenous_from_config(model_config)
    clean = simulate_with_config(params, co, sc, model_config)
    noisy_tpo = add_noise_to_series(clean.output, noise_type, noise_seed, noise_scale)

    weeks = clean.time
    frame = pd.DataFrame({
        "week": weeks,
        "tpo": noisy_tpo,
        "customer_orders": co(weeks),
        "service_capacity": sc(weeks)
    })
    return ObservedData(frame), clean

def save_observed(observed, path):
    observed.frame.to_csv(path, index=False)
    print(f"Saved: {path}")
