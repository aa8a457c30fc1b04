# Libraries to import:
import math
from dataclasses import dataclass
from typing import Callable, Sequence
import numpy as np
import pandas as pd

TPO_FLOOR = 0.1
QUALITY_PRESSURE = 1.0
ZERO_DEMAND_MULTIPLIER = 1_000_000.0

PARAM_NAMES = ("alpha", "tau_decrease", "tau_increase", "tpod0")

@dataclass(frozen=True)
class ServiceQualityParams:
    """
    Parameter vector of the service quality model

    alpha:        elasticity of time per order to work pressure
    tau_decrease: adjustment time (weeks) when TPO is below TPOD
    tau_increase: adjustment time (weeks) when TPO is above TPOD
    tpod0:        initial desired time per order

    No validation is performed; a zero time constant fails inside the
    integrator when its branch is taken.
    """
    alpha: float
    tau_decrease: float
    tau_increase: float
    tpod0: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]):
        """Build from (alpha, tau_decrease, tau_increase, tpod0), in that order"""
        alpha, tau_decrease, tau_increase, tpod0 = values
        return cls(float(alpha), float(tau_decrease), float(tau_increase), float(tpod0))

    def as_tuple(self):
        return (self.alpha, self.tau_decrease, self.tau_increase, self.tpod0)

    def as_dict(self):
        return dict(zip(PARAM_NAMES, self.as_tuple()))

@dataclass(frozen=True, eq=False)
class Trajectory:
    """Weekly (time, TPOD, TPO) rows produced by one integration run"""
    time: np.ndarray
    state: np.ndarray
    output: np.ndarray

    def __post_init__(self):
        for name in ("time", "state", "output"):
            arr = np.array(getattr(self, name), dtype=float)
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    def __len__(self):
        return len(self.time)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"week": self.time, "tpod": self.state, "tpo": self.output})

def work_pressure_multiplier(desired, capacity, alpha, zero_demand_multiplier=ZERO_DEMAND_MULTIPLIER):
    """(desired / capacity) ** alpha, or the sentinel when nothing is demanded"""
    if desired == 0:
        return zero_demand_multiplier
    try:
        return math.pow(desired / capacity, alpha)
    except OverflowError:
        return math.inf

def time_per_order(state, multiplier, floor=TPO_FLOOR, quality_pressure=QUALITY_PRESSURE):
    value = quality_pressure * multiplier * state
    # NaN is not clamped
    if math.isnan(value) or value >= floor:
        return value
    return floor

def adjustment_rate(state, output, tau_decrease, tau_increase):
    tau = tau_increase if output > state else tau_decrease
    return (output - state) / tau

def steps_per_unit(dt):
    """Number of Euler sub-steps per reporting unit; 1/dt must be a whole number"""
    if not dt > 0:
        raise ValueError(f"dt must be positive, got {dt}")
    n = int(round(1.0 / dt))
    if n < 1 or abs(n * dt - 1.0) > 1e-9:
        raise ValueError(f"1/dt must be a whole number of sub-steps, got dt={dt}")
    return n

def check_horizon(start_time, end_time):
    if int(start_time) != start_time or int(end_time) != end_time:
        raise ValueError(f"Horizon must be whole reporting units, got [{start_time}, {end_time}]")
    if end_time < start_time:
        raise ValueError(f"end_time {end_time} is before start_time {start_time}")
    return int(start_time), int(end_time)

def simulate(
    params: ServiceQualityParams,
    customer_orders: Callable[[float], float],
    service_capacity: Callable[[float], float],
    start_time: int = 53,
    end_time: int = 104,
    dt: float = 1.0 / 64,
    tpo_floor: float = TPO_FLOOR,
    quality_pressure: float = QUALITY_PRESSURE,
    zero_demand_multiplier: float = ZERO_DEMAND_MULTIPLIER
) -> Trajectory:
    """
    Forward Euler integration of desired time per order (TPOD)

    At every sub-step:
        desired SC = TPOD * CO(t)
        WP mult    = (desired SC / SC(t)) ** alpha   (sentinel if desired SC == 0)
        TPO        = max(floor, QP * WP mult * TPOD)
        dTPOD/dt   = (TPO - TPOD) / (tau_increase if TPO > TPOD else tau_decrease)

    Only rows on whole reporting units are kept: (end_time - start_time) + 1
    rows. Arithmetic errors (zero time constant, zero capacity) propagate.
    """
    start, end = check_horizon(start_time, end_time)
    n_sub = steps_per_unit(dt)
    h = 1.0 / n_sub
    n_steps = (end - start) * n_sub

    alpha, tau_decrease, tau_increase, state = (float(v) for v in params.as_tuple())

    times, states, outputs = [], [], []
    for k in range(n_steps + 1):
        t = start + k * h
        desired = state * customer_orders(t)
        multiplier = work_pressure_multiplier(desired, service_capacity(t), alpha, zero_demand_multiplier)
        tpo = time_per_order(state, multiplier, tpo_floor, quality_pressure)

        if k % n_sub == 0:
            times.append(start + k // n_sub)
            states.append(state)
            outputs.append(tpo)

        if k < n_steps:
            state = state + h * adjustment_rate(state, tpo, tau_decrease, tau_increase)

    return Trajectory(
        time=np.array(times, dtype=float),
        state=np.array(states, dtype=float),
        output=np.array(outputs, dtype=float)
    )

def simulate_with_config(params, customer_orders, service_capacity, model_config) -> Trajectory:
    """simulate() over the horizon and constants held in a ModelConfig"""
    return simulate(
        params,
        customer_orders,
        service_capacity,
        start_time=model_config.start_week,
        end_time=model_config.end_week,
        dt=model_config.dt,
        tpo_floor=model_config.tpo_floor,
        quality_pressure=model_config.quality_pressure,
        zero_demand_multiplier=model_config.zero_demand_multiplier
    )
