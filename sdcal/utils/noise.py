import torch
import numpy as np

def add_noise_to_series(clean_series, noise_type="none", noise_seed=12345, noise_scale=0.02):
    """
    Add noise to a synthetic observed series for robustness testing

    Args:
        clean_series: array-like of shape (T,)
        noise_type: "none", "poisson", "gaussian"
        noise_seed: random seed for reproducibility
        noise_scale: relative noise level (coefficient of variation)

    Returns:
        noisy_series: np.ndarray of same shape
    """
    clean = torch.as_tensor(np.array(clean_series, dtype=float), dtype=torch.float64)

    if noise_type == "none":
        return clean.clone().numpy()

    generator = torch.Generator().manual_seed(noise_seed)

    if noise_type == "poisson":
        # Treat the series as a rate in units of 1/noise_scale^2 events
        counts_per_unit = 1.0 / noise_scale ** 2
        noisy = torch.poisson(clean * counts_per_unit, generator=generator) / counts_per_unit
        return noisy.numpy()

    elif noise_type == "gaussian":
        noise = torch.randn(clean.shape, generator=generator, dtype=torch.float64) * noise_scale
        noisy = clean * (1.0 + noise)
        noisy = torch.clamp(noisy, min=0.0)  # Non-negative
        return noisy.numpy()

    else:
        raise ValueError(f"Unknown noise_type: {noise_type}")
