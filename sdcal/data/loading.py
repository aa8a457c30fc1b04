# Libraries to import:
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict
import numpy as np
import pandas as pd

from ..model.interpolation import LinearInterpolator
from ..model.integrator import ServiceQualityParams, PARAM_NAMES

PARAMETER_COLUMNS = ["source", *PARAM_NAMES]
OBSERVED_COLUMNS = ["week", "tpo", "customer_orders", "service_capacity"]

def _require_columns(df, required, path):
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {missing}")

@dataclass
class ObservedData:
    """
    Weekly observed records plus interpolators for the two exogenous inputs

    frame columns: week, tpo, customer_orders, service_capacity
    """
    frame: pd.DataFrame
    customer_orders: LinearInterpolator = field(init=False, repr=False)
    service_capacity: LinearInterpolator = field(init=False, repr=False)

    def __post_init__(self):
        _require_columns(self.frame, OBSERVED_COLUMNS, "observed data")
        repeated = sorted(self.frame.loc[self.frame["week"].duplicated(), "week"].unique().tolist())
        if repeated:
            raise ValueError(f"observed data: repeated weeks {repeated}")
        self.frame = self.frame.sort_values("week").reset_index(drop=True)
        self.customer_orders = LinearInterpolator(self.frame["week"], self.frame["customer_orders"])
        self.service_capacity = LinearInterpolator(self.frame["week"], self.frame["service_capacity"])

    @property
    def weeks(self) -> np.ndarray:
        return self.frame["week"].to_numpy(dtype=float)

    @property
    def tpo(self) -> np.ndarray:
        return self.frame["tpo"].to_numpy(dtype=float)

    def align(self, weeks, predicted):
        """
        Pair predicted values with observed TPO on the weeks both cover

        Returns (weeks, predicted, observed) as numpy arrays.
        """
        weeks = np.asarray(weeks, dtype=float)
        predicted = np.asarray(predicted, dtype=float)
        obs_weeks = self.weeks
        mask_pred = np.isin(weeks, obs_weeks)
        mask_obs = np.isin(obs_weeks, weeks)
        return weeks[mask_pred], predicted[mask_pred], self.tpo[mask_obs]

def load_parameter_table(path) -> pd.DataFrame:
    """Read the parameter table CSV, indexed by source label"""
    path = Path(path)
    df = pd.read_csv(path, float_precision="round_trip")
    _require_columns(df, PARAMETER_COLUMNS, path)
    df["source"] = df["source"].astype(str)
    return df.set_index("source")[list(PARAM_NAMES)].astype(float)

def parameters_from_table(table: pd.DataFrame) -> Dict[str, ServiceQualityParams]:
    return {
        str(source): ServiceQualityParams(**{name: float(row[name]) for name in PARAM_NAMES})
        for source, row in table.iterrows()
    }

def load_observed(path) -> ObservedData:
    path = Path(path)
    df = pd.read_csv(path, float_precision="round_trip")
    _require_columns(df, OBSERVED_COLUMNS, path)
    return ObservedData(df[OBSERVED_COLUMNS].astype(float))
