# Libraries to import:
from dataclasses import dataclass, field
from typing import List

@dataclass
class SamplingConfig:
    """Configuration for the circle-area sampling benchmark"""

    radius: float = 1.0
    methods: List[str] = field(default_factory=lambda: ["random", "lhs", "sobol"])
    # Powers of two keep the Sobol sequence balanced
    sample_sizes: List[int] = field(default_factory=lambda: [2 ** k for k in range(6, 15)])
    n_repeats: int = 20
    seed: int = 0

    # Centered L2 discrepancy is O(n^2); only computed up to this size
    compute_discrepancy: bool = False
    max_discrepancy_n: int = 4096

    verbosity: int = 1
    output_prefix: str = "sampling_"
