"""
Tests for the fixed-step Euler integration of desired time per order.

Covers the reported-row layout, purity, the zero-demand sentinel, the TPO
floor, fixed-point and erosion scenarios, and arithmetic failure modes.
"""

import dataclasses
import math

import numpy as np
import pytest

from sdcal.model import (
    ServiceQualityParams,
    Trajectory,
    simulate,
    simulate_with_config,
    work_pressure_multiplier,
    time_per_order,
    adjustment_rate,
    ZERO_DEMAND_MULTIPLIER,
    TPO_FLOOR,
)
from config.model_config import ModelConfig


def constant(value):
    return lambda t: value


class TestReportedRows:
    def test_one_row_per_week(self, base_params):
        traj = simulate(base_params, constant(1.0), constant(1.08), 53, 104, 1.0 / 64)
        assert len(traj) == (104 - 53) + 1
        np.testing.assert_array_equal(traj.time, np.arange(53, 105, dtype=float))
        assert np.all(np.diff(traj.time) > 0)

    def test_non_binary_step_still_reports_whole_weeks(self, base_params):
        traj = simulate(base_params, constant(1.0), constant(0.54), 53, 60, 0.1)
        np.testing.assert_array_equal(traj.time, np.arange(53, 61, dtype=float))

    def test_single_week_horizon(self, base_params):
        traj = simulate(base_params, constant(1.0), constant(1.08), 53, 53, 1.0 / 64)
        assert len(traj) == 1
        assert traj.state[0] == base_params.tpod0

    def test_first_row_is_initial_state(self, base_params):
        traj = simulate(base_params, constant(1.0), constant(0.54), 53, 60, 1.0 / 64)
        assert traj.state[0] == base_params.tpod0

    def test_repeated_runs_are_bit_identical(self, base_params):
        co = lambda t: 100.0 + 2.0 * (t - 53)
        sc = lambda t: 108.0 + 0.5 * (t - 53)
        first = simulate(base_params, co, sc, 53, 104, 1.0 / 64)
        second = simulate(base_params, co, sc, 53, 104, 1.0 / 64)
        assert np.array_equal(first.time, second.time)
        assert np.array_equal(first.state, second.state)
        assert np.array_equal(first.output, second.output)

    def test_trajectory_is_read_only(self, base_params):
        traj = simulate(base_params, constant(1.0), constant(1.08), 53, 60, 0.25)
        with pytest.raises(ValueError):
            traj.output[0] = 5.0

    def test_caller_arrays_stay_writable(self):
        output = np.array([1.0, 2.0])
        traj = Trajectory(time=np.array([53.0, 54.0]), state=np.array([1.0, 1.0]), output=output)
        output[0] = 5.0
        assert traj.output[0] == 1.0
        with pytest.raises(ValueError):
            traj.output[0] = 5.0

    def test_to_frame(self, base_params):
        frame = simulate(base_params, constant(1.0), constant(1.08), 53, 60, 0.25).to_frame()
        assert list(frame.columns) == ["week", "tpod", "tpo"]
        assert len(frame) == 8

    @pytest.mark.parametrize("dt", [0.0, -0.25, 0.3, 2.0])
    def test_bad_step_size_rejected(self, base_params, dt):
        with pytest.raises(ValueError):
            simulate(base_params, constant(1.0), constant(1.08), 53, 60, dt)

    def test_bad_horizon_rejected(self, base_params):
        with pytest.raises(ValueError):
            simulate(base_params, constant(1.0), constant(1.08), 53.5, 60, 0.25)
        with pytest.raises(ValueError):
            simulate(base_params, constant(1.0), constant(1.08), 60, 53, 0.25)


class TestWorkPressure:
    def test_zero_demand_gives_sentinel(self):
        assert work_pressure_multiplier(0.0, 100.0, -0.64) == 1_000_000.0
        assert work_pressure_multiplier(0.0, 0.0, -0.64) == ZERO_DEMAND_MULTIPLIER

    def test_ratio_raised_to_elasticity(self):
        assert work_pressure_multiplier(200.0, 100.0, -0.64) == pytest.approx(2.0 ** -0.64)
        assert work_pressure_multiplier(108.0, 108.0, -0.64) == 1.0

    def test_sentinel_inside_simulation(self, base_params):
        traj = simulate(base_params, constant(0.0), constant(100.0), 53, 60, 0.25)
        assert traj.output[0] == pytest.approx(ZERO_DEMAND_MULTIPLIER * base_params.tpod0)
        assert np.all(np.isfinite(traj.output))

    def test_zero_demand_and_zero_capacity_does_not_divide(self, base_params):
        traj = simulate(base_params, constant(0.0), constant(0.0), 53, 55, 0.25)
        assert np.all(np.isfinite(traj.state))

    def test_overflowing_multiplier_is_infinite(self):
        assert work_pressure_multiplier(1e-70, 1.0, -5.0) == math.inf

    def test_overflow_flows_into_trajectory(self):
        params = ServiceQualityParams(alpha=-5.0, tau_decrease=10.0, tau_increase=10.0, tpod0=1.0)
        traj = simulate(params, constant(1e-70), constant(1.0), 53, 55, 0.25)
        assert traj.output[0] == math.inf
        assert np.all(np.isnan(traj.output[1:]))

    def test_negative_ratio_is_math_domain_error(self, base_params):
        with pytest.raises(ValueError):
            simulate(base_params, constant(-1.0), constant(1.0), 53, 55, 0.25)


class TestFloor:
    def test_time_per_order_clamped(self):
        assert time_per_order(0.01, 1.0) == TPO_FLOOR
        assert time_per_order(2.0, 0.5) == 1.0

    def test_low_state_reports_floor(self):
        params = ServiceQualityParams(alpha=-0.64, tau_decrease=5.0, tau_increase=10.0, tpod0=0.01)
        traj = simulate(params, constant(1.0), constant(0.01), 53, 60, 0.125)
        assert traj.output[0] == TPO_FLOOR

    @pytest.mark.parametrize("alpha", [-2.0, -0.64, -0.1, 0.0])
    @pytest.mark.parametrize("tpod0", [0.05, 1.0, 3.0])
    @pytest.mark.parametrize("co,sc", [(0.5, 2.0), (1.0, 1.0), (2.0, 0.5)])
    def test_output_never_below_floor(self, alpha, tpod0, co, sc):
        params = ServiceQualityParams(alpha=alpha, tau_decrease=5.0, tau_increase=10.0, tpod0=tpod0)
        traj = simulate(params, constant(co), constant(sc), 53, 60, 0.125)
        assert np.all(traj.output >= TPO_FLOOR)


class TestScenarios:
    def test_balanced_capacity_is_a_fixed_point(self, base_params):
        # desired capacity = 1.08 * 1.0 == service capacity -> ratio 1
        traj = simulate(base_params, constant(1.0), constant(1.08), 53, 104, 1.0 / 64)
        assert np.all(traj.state == 1.08)
        assert np.all(traj.output == 1.08)

    def test_balanced_capacity_at_order_scale(self, base_params):
        traj = simulate(base_params, constant(100.0), constant(108.0), 53, 104, 1.0 / 64)
        np.testing.assert_allclose(traj.state, 1.08, rtol=1e-12)
        np.testing.assert_allclose(traj.output, 1.08, rtol=1e-12)

    def test_half_capacity_erodes_toward_new_equilibrium(self, base_params):
        # ratio 2 at the start: multiplier 2^-0.64
        traj = simulate(base_params, constant(1.0), constant(0.54), 53, 104, 1.0 / 64)

        assert traj.output[0] == pytest.approx(1.08 * 2.0 ** -0.64)
        assert traj.output[0] == pytest.approx(0.693, abs=1e-3)
        assert np.all(np.diff(traj.state) < 0)
        assert np.all(traj.state > 0.54)
        assert np.all(traj.output < traj.state)
        # First week of erosion at tau_decrease = 18.83
        assert traj.state[1] == pytest.approx(1.08 + (traj.output[0] - 1.08) / 18.83, rel=1e-2)

    def test_half_capacity_uses_decrease_constant_only(self, base_params):
        other = dataclasses.replace(base_params, tau_increase=1.0)
        a = simulate(base_params, constant(1.0), constant(0.54), 53, 104, 1.0 / 64)
        b = simulate(other, constant(1.0), constant(0.54), 53, 104, 1.0 / 64)
        assert np.array_equal(a.state, b.state)

    def test_slow_adjustment_barely_moves(self):
        params = ServiceQualityParams(alpha=-0.64, tau_decrease=1e6, tau_increase=1e7, tpod0=1.08)
        for sc in (0.54, 2.16):
            traj = simulate(params, constant(1.0), constant(sc), 53, 104, 1.0 / 64)
            assert np.max(np.abs(traj.state - 1.08)) / 1.08 < 0.01

    def test_simulate_with_config(self, base_params):
        config = ModelConfig(start_week=60, end_week=70, dt=0.25)
        traj = simulate_with_config(base_params, constant(1.0), constant(0.54), config)
        assert isinstance(traj, Trajectory)
        assert traj.time[0] == 60 and traj.time[-1] == 70


class TestFailureModes:
    def test_zero_decrease_constant_divides_by_zero(self, base_params):
        params = dataclasses.replace(base_params, tau_decrease=0.0)
        with pytest.raises(ZeroDivisionError):
            simulate(params, constant(1.0), constant(0.54), 53, 60, 0.25)

    def test_zero_increase_constant_only_fails_when_used(self, base_params):
        params = dataclasses.replace(base_params, tau_increase=0.0)
        simulate(params, constant(1.0), constant(0.54), 53, 60, 0.25)
        with pytest.raises(ZeroDivisionError):
            simulate(params, constant(1.0), constant(2.16), 53, 60, 0.25)

    def test_adjustment_rate_branch(self):
        assert adjustment_rate(1.0, 2.0, 10.0, 100.0) == pytest.approx(0.01)
        assert adjustment_rate(2.0, 1.0, 10.0, 100.0) == pytest.approx(-0.1)

    def test_nan_input_propagates(self, base_params):
        traj = simulate(base_params, constant(float("nan")), constant(1.0), 53, 56, 0.25)
        assert np.all(np.isnan(traj.output))
        assert np.isnan(traj.state[-1])


class TestParams:
    def test_from_sequence_order(self):
        params = ServiceQualityParams.from_sequence([-0.64, 18.83, 8_140_000, 1.08])
        assert params.alpha == -0.64
        assert params.tau_decrease == 18.83
        assert params.tau_increase == 8_140_000.0
        assert params.tpod0 == 1.08

    def test_immutable(self, base_params):
        with pytest.raises(dataclasses.FrozenInstanceError):
            base_params.alpha = 0.0

    def test_as_dict(self, base_params):
        assert list(base_params.as_dict()) == ["alpha", "tau_decrease", "tau_increase", "tpod0"]
