"""
Tests for parameter-table and observed-data loading and synthetic truth.
"""

import numpy as np
import pandas as pd
import pytest

from config.model_config import ModelConfig
from sdcal.data import (
    ObservedData,
    load_parameter_table,
    parameters_from_table,
    load_observed,
    generate_synthetic_observed,
    save_observed,
)
from sdcal.model import ServiceQualityParams
from sdcal.utils.noise import add_noise_to_series


class TestParameterTable:
    def test_bundled_table(self):
        table = load_parameter_table(ModelConfig().parameter_table_path)
        assert "calibrated" in table.index
        assert list(table.columns) == ["alpha", "tau_decrease", "tau_increase", "tpod0"]
        assert table.loc["calibrated", "tau_increase"] == 8_140_000.0

    def test_parameters_from_table(self):
        table = load_parameter_table(ModelConfig().parameter_table_path)
        param_sets = parameters_from_table(table)
        assert param_sets["calibrated"] == ServiceQualityParams(-0.64, 18.83, 8_140_000.0, 1.08)
        assert len(param_sets) == len(table)

    def test_missing_column_rejected(self, tmp_path):
        path = tmp_path / "params.csv"
        path.write_text("source,alpha,tau_decrease,tpod0\nx,-0.5,10,1.0\n")
        with pytest.raises(ValueError, match="tau_increase"):
            load_parameter_table(path)


class TestObservedData:
    @pytest.fixture
    def observed_csv(self, tmp_path):
        path = tmp_path / "observed.csv"
        pd.DataFrame({
            "week": [55, 53, 54],
            "tpo": [1.0, 1.2, 1.1],
            "customer_orders": [120.0, 100.0, 110.0],
            "service_capacity": [100.0, 100.0, 100.0],
        }).to_csv(path, index=False)
        return path

    def test_load_sorts_by_week(self, observed_csv):
        observed = load_observed(observed_csv)
        np.testing.assert_array_equal(observed.weeks, [53.0, 54.0, 55.0])
        np.testing.assert_array_equal(observed.tpo, [1.2, 1.1, 1.0])

    def test_exogenous_interpolators(self, observed_csv):
        observed = load_observed(observed_csv)
        assert observed.customer_orders(53.5) == pytest.approx(105.0)
        assert observed.customer_orders(200.0) == 120.0
        assert observed.service_capacity(0.0) == 100.0

    def test_missing_column_rejected(self, tmp_path):
        path = tmp_path / "observed.csv"
        path.write_text("week,tpo,customer_orders\n53,1.0,100\n")
        with pytest.raises(ValueError, match="service_capacity"):
            load_observed(path)

    def test_repeated_week_rejected(self):
        frame = pd.DataFrame({
            "week": [53, 54, 54, 55],
            "tpo": [1.0, 1.0, 1.1, 1.0],
            "customer_orders": [100.0] * 4,
            "service_capacity": [108.0] * 4,
        })
        with pytest.raises(ValueError, match=r"repeated weeks \[54\]"):
            ObservedData(frame)

    def test_align_on_common_weeks(self, observed_csv):
        observed = load_observed(observed_csv)
        weeks, pred, obs = observed.align([54.0, 55.0, 56.0], [9.0, 8.0, 7.0])
        np.testing.assert_array_equal(weeks, [54.0, 55.0])
        np.testing.assert_array_equal(pred, [9.0, 8.0])
        np.testing.assert_array_equal(obs, [1.1, 1.0])

    def test_save_and_reload(self, observed_csv, tmp_path):
        observed = load_observed(observed_csv)
        out = tmp_path / "copy.csv"
        save_observed(observed, out)
        reloaded = load_observed(out)
        pd.testing.assert_frame_equal(reloaded.frame, observed.frame)


class TestSyntheticObserved:
    def test_clean_matches_simulation(self, clean_observed):
        observed, clean = clean_observed
        assert isinstance(observed, ObservedData)
        np.testing.assert_array_equal(observed.tpo, clean.output)
        np.testing.assert_array_equal(observed.weeks, np.arange(53, 105))

    def test_noise_is_seeded(self, coarse_config):
        a, _ = generate_synthetic_observed(coarse_config, noise_type="gaussian", noise_seed=7)
        b, _ = generate_synthetic_observed(coarse_config, noise_type="gaussian", noise_seed=7)
        c, clean = generate_synthetic_observed(coarse_config, noise_type="gaussian", noise_seed=8)
        np.testing.assert_array_equal(a.tpo, b.tpo)
        assert not np.array_equal(a.tpo, c.tpo)
        assert not np.array_equal(a.tpo, clean.output)

    def test_custom_params(self, coarse_config):
        params = ServiceQualityParams(-0.5, 10.0, 1e6, 1.0)
        observed, clean = generate_synthetic_observed(coarse_config, params=params)
        assert clean.state[0] == 1.0


class TestNoise:
    def test_none_is_a_copy(self):
        series = np.array([1.0, 2.0, 3.0])
        noisy = add_noise_to_series(series, "none")
        np.testing.assert_array_equal(noisy, series)
        noisy[0] = 10.0
        assert series[0] == 1.0

    @pytest.mark.parametrize("noise_type", ["gaussian", "poisson"])
    def test_relative_noise_level(self, noise_type):
        series = np.full(2000, 1.0)
        noisy = add_noise_to_series(series, noise_type, noise_seed=1, noise_scale=0.05)
        assert np.all(noisy >= 0.0)
        assert np.mean(noisy) == pytest.approx(1.0, abs=0.01)
        assert np.std(noisy) == pytest.approx(0.05, rel=0.15)

    def test_unknown_noise_type(self):
        with pytest.raises(ValueError, match="Unknown noise_type"):
            add_noise_to_series([1.0], "uniform")
