"""
Tests for the multi-optimizer calibrator on noise-free synthetic data.
"""

import numpy as np
import pandas as pd
import pytest

from config.calibration_config import CalibrationConfig
from sdcal.model import ServiceQualityParams
from sdcal.optimization import MultiOptimizerCalibrator, best_overall


def make_config(**overrides):
    settings = dict(
        optimizers=["L-BFGS-B"],
        estimate={"alpha": True},
        verbosity=0,
        early_stop_r2=1.1,
        num_wide_restarts=0,
        num_medium_restarts=0,
        num_narrow_restarts=0,
    )
    settings.update(overrides)
    return CalibrationConfig(**settings)


@pytest.fixture
def start_params():
    return ServiceQualityParams(alpha=-0.3, tau_decrease=18.83, tau_increase=8_140_000.0, tpod0=1.08)


class TestMultiOptimizerCalibrator:
    def test_lbfgs_recovers_elasticity(self, coarse_config, clean_observed, start_params):
        observed, _ = clean_observed
        calibrator = MultiOptimizerCalibrator(make_config(), coarse_config)
        results_df, best_per_optimizer, struct = calibrator.run(observed, start_params)

        assert struct["names"] == ["alpha"]
        assert isinstance(results_df, pd.DataFrame)
        assert len(results_df) == 2  # two initial guesses, no restarts

        best = best_per_optimizer["L-BFGS-B"]
        assert best["alpha"] == pytest.approx(-0.64, abs=5e-3)
        assert best["r_squared"] > 0.999
        assert best["tau_decrease"] == start_params.tau_decrease

    def test_nelder_mead_recovers_elasticity(self, coarse_config, clean_observed, start_params):
        observed, _ = clean_observed
        calibrator = MultiOptimizerCalibrator(make_config(optimizers=["Nelder-Mead"]), coarse_config)
        _, best_per_optimizer, _ = calibrator.run(observed, start_params)
        assert best_per_optimizer["Nelder-Mead"]["alpha"] == pytest.approx(-0.64, abs=5e-3)

    def test_true_parameters_have_near_zero_loss(self, coarse_config, clean_observed, base_params):
        observed, _ = clean_observed
        calibrator = MultiOptimizerCalibrator(make_config(), coarse_config)
        struct = {"slices": {"alpha": slice(0, 1)}, "names": ["alpha"], "size": 1}
        loss_fn = calibrator.build_loss_fn(observed, base_params, struct)

        loss, grad, r2 = loss_fn(np.array([base_params.alpha]))
        assert loss == pytest.approx(0.0, abs=1e-12)
        assert r2 == pytest.approx(1.0)
        assert grad.shape == (1,)

    def test_restarts_and_best_overall(self, coarse_config, clean_observed, start_params):
        observed, _ = clean_observed
        config = make_config(optimizers=["L-BFGS-B", "Adam"], num_narrow_restarts=1, adam_steps=20)
        calibrator = MultiOptimizerCalibrator(config, coarse_config)
        results_df, best_per_optimizer, _ = calibrator.run(observed, start_params)

        assert set(results_df["optimizer"]) == {"L-BFGS-B", "Adam"}
        assert "Narrow Search" in set(results_df["phase"])
        name, best = best_overall(best_per_optimizer)
        assert best["loss"] == results_df["loss"].min()
        assert name == best["optimizer"]

    def test_unknown_optimizer(self, coarse_config):
        with pytest.raises(ValueError, match="Unknown optimizer"):
            MultiOptimizerCalibrator(make_config(optimizers=["BFGS-X"]), coarse_config)

    def test_nothing_to_estimate(self, coarse_config, clean_observed, start_params):
        observed, _ = clean_observed
        config = make_config(estimate={"alpha": False, "tau_decrease": False})
        with pytest.raises(ValueError, match="No parameters"):
            MultiOptimizerCalibrator(config, coarse_config).run(observed, start_params)
