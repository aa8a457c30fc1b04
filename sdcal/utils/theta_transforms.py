# Libraries to import:
import torch
import numpy as np

from ..model.integrator import ServiceQualityParams, PARAM_NAMES

# alpha can be negative; time constants and TPOD0 are fitted in log space
LOG_PARAMS = ("tau_decrease", "tau_increase", "tpod0")

def build_theta_structure(estimate):
    """
    Lay out the free parameters in a flat theta vector

    Args:
        estimate: dict name -> bool, e.g. {"alpha": True, "tau_decrease": True}

    Returns:
        {"slices": {name: slice}, "names": [...], "size": n}
    """
    unknown = [name for name in estimate if name not in PARAM_NAMES]
    if unknown:
        raise ValueError(f"Unknown parameters in estimate config: {unknown}")

    slices = {}; idx = 0
    for name in PARAM_NAMES:
        if estimate.get(name, False):
            slices[name] = slice(idx, idx + 1); idx += 1
    return {"slices": slices, "names": list(slices), "size": idx}

def to_theta(params: ServiceQualityParams, structure):
    theta = np.zeros(structure["size"], dtype=float)
    for name, s in structure["slices"].items():
        value = getattr(params, name)
        theta[s] = np.log(value) if name in LOG_PARAMS else value
    return theta

def apply_theta(theta, structure, base_params: ServiceQualityParams):
    """
    Map theta back to natural-scale parameters

    Works on numpy arrays (returns floats) and torch tensors (returns 0-d
    tensors that keep the autograd graph). Parameters not in the structure
    come from base_params.
    """
    is_tensor = torch.is_tensor(theta)
    values = {}
    for name in PARAM_NAMES:
        if name in structure["slices"]:
            raw = theta[structure["slices"][name]][0]
            if name in LOG_PARAMS:
                values[name] = torch.exp(raw) if is_tensor else float(np.exp(raw))
            else:
                values[name] = raw if is_tensor else float(raw)
        else:
            base = getattr(base_params, name)
            values[name] = torch.tensor(base, dtype=torch.float64) if is_tensor else float(base)
    return values

def theta_to_params(theta, structure, base_params):
    values = apply_theta(np.asarray(theta, dtype=float), structure, base_params)
    return ServiceQualityParams(**values)
