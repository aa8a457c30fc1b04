# Libraries to import:
import numpy as np

class LinearInterpolator:
    """
    Piecewise-linear function through (time, value) breakpoints

    Queries outside [t_min, t_max] return the nearest endpoint value
    (flat extrapolation). Non-finite values are passed through unchanged.
    """

    def __init__(self, times, values):
        times = np.asarray(times, dtype=float).ravel()
        values = np.asarray(values, dtype=float).ravel()
        if times.size == 0:
            raise ValueError("LinearInterpolator needs at least one breakpoint")
        if times.shape != values.shape:
            raise ValueError(f"times and values differ in length: {times.size} != {values.size}")

        order = np.argsort(times, kind="stable")
        self.times = times[order]
        self.values = values[order]

    @classmethod
    def from_mapping(cls, mapping):
        """Build from a {time: value} dict"""
        return cls(list(mapping.keys()), list(mapping.values()))

    @property
    def domain(self):
        return float(self.times[0]), float(self.times[-1])

    def __call__(self, t):
        if np.ndim(t) == 0:
            return self._evaluate_scalar(float(t))
        return np.array([self._evaluate_scalar(float(x)) for x in np.asarray(t, dtype=float).ravel()]).reshape(np.shape(t))

    def _evaluate_scalar(self, t):
        times, values = self.times, self.values
        if np.isnan(t):
            return float("nan")
        if t <= times[0]:
            return float(values[0])
        if t >= times[-1]:
            return float(values[-1])

        # times[i - 1] <= t < times[i]
        i = int(np.searchsorted(times, t, side="right"))
        t0, t1 = times[i - 1], times[i]
        v0, v1 = values[i - 1], values[i]
        w = (t - t0) / (t1 - t0)
        return float(v0 + w * (v1 - v0))

    def __repr__(self):
        t_min, t_max = self.domain
        return f"LinearInterpolator(n={self.times.size}, domain=[{t_min:g}, {t_max:g}])"
