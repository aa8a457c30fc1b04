# Libraries to import:
import warnings
import numpy as np
from scipy.stats import qmc

SAMPLING_METHODS = ("random", "lhs", "sobol")

def sample_points(method, n, seed=None, d=2):
    """
    Draw n points in the unit hypercube [0, 1)^d

    method:
        "random": independent uniform draws
        "lhs":    Latin Hypercube Sampling
        "sobol":  scrambled Sobol sequence (balanced when n is a power of two)
    """
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")

    if method == "random":
        rng = np.random.default_rng(seed)
        return rng.random((n, d))

    elif method == "lhs":
        return qmc.LatinHypercube(d=d, seed=seed).random(n)

    elif method == "sobol":
        engine = qmc.Sobol(d=d, scramble=True, seed=seed)
        m = int(np.log2(n))
        if 2 ** m == n:
            return engine.random_base2(m)
        # Balance properties are lost off a power of two; scipy warns about it
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", category=UserWarning)
            return engine.random(n)

    else:
        raise ValueError(f"Unknown sampling method: {method}")

def discrepancy(points):
    """Centered L2 discrepancy (lower = more even coverage)"""
    return float(qmc.discrepancy(points, method="CD"))
