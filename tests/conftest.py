import os
import sys

import matplotlib

matplotlib.use("Agg")

import pytest

# Repository root on the path so that `sdcal` and `config` import uninstalled
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config.model_config import ModelConfig
from sdcal.model import ServiceQualityParams
from sdcal.data import generate_synthetic_observed


def constant(value):
    """Exogenous input that ignores time"""
    return lambda t: value


@pytest.fixture
def base_params():
    """Parameter vector from the calibrated source."""
    return ServiceQualityParams(alpha=-0.64, tau_decrease=18.83, tau_increase=8_140_000.0, tpod0=1.08)


@pytest.fixture
def coarse_config():
    """Full horizon at half-week steps, cheap enough for calibration tests."""
    return ModelConfig(dt=0.5)


@pytest.fixture
def clean_observed(coarse_config):
    observed, clean = generate_synthetic_observed(coarse_config, noise_type="none")
    return observed, clean
