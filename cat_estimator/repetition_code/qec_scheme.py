#  Copyright 2024 Google LLC
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#      https://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
import math
from functools import lru_cache
from typing import Optional, TYPE_CHECKING

from attrs import field, frozen, validators

from cat_estimator.exception import InvalidPhysicalParameters

if TYPE_CHECKING:
    from cat_estimator.repetition_code import PhysicalParameters


@frozen
class CodeParameter:
    """The operating point of a repetition-code patch.

    Attributes:
        distance: The (odd) code distance the patch is operated at.
        alpha_sq: The mean photon number $|\\alpha|^2$ of the cat qubits in the patch.
    """

    distance: int
    alpha_sq: int

    def __str__(self):
        return f'{self.distance} (|α|² = {self.alpha_sq})'


@frozen
class ResourceCost:
    """The physical footprint and logical cycle time of one repetition-code patch."""

    qubits: int
    cycle_time_ns: float


@frozen
class RepetitionCode:
    r"""A model of the repetition code protecting cat qubits against phase flips.

    Cat qubits have exponentially suppressed bit flips, so a one-dimensional repetition
    code is enough to correct the remaining phase flips. The logical phase-flip
    probability per round of error correction for code distance $d$ is
    $$
    a \left( \frac{(|\alpha|^2)^{0.86} \kappa_1 / \kappa_2}{p^*} \right)^{\frac{d+1}{2}}
    $$
    where $a$ is the `error_rate_scaler` and $p^*$ the `error_rate_threshold`. Each round
    uses $2(d-1)$ CX gates, each of which can cause a logical bit flip. A logical cycle
    takes $d$ rounds, so the error per logical cycle is $d$ times the sum of both terms.

    The mean photon number changes neither the number of qubits nor the cycle time, so the
    model always operates a patch at the photon number minimizing its error. A patch of
    $2d - 1$ cat qubits can also run the code at any smaller odd distance; the operating
    point of a patch is the best of those. This keeps the logical error rate
    non-increasing in the distance, even where bit flips from the growing number of CX gates
    would otherwise dominate.

    Attributes:
        error_rate_scaler: Logical phase-flip rate coefficient.
        error_rate_threshold: Threshold on $(|\alpha|^2)^{0.86} \kappa_1 / \kappa_2$, obtained
            by circuit-level simulation.

    References:
        [Performance analysis of a repetition cat code architecture: computing 256-bit
        elliptic curve logarithm in 9 hours with 126 133 cat qubits](https://arxiv.org/abs/2302.06639).
        Gouzien et. al. (2023). Eq. 3, eq. 4, appendix E and figure 26.
    """

    error_rate_scaler: float = field(repr=lambda x: f'{x:g}', validator=validators.gt(0))
    error_rate_threshold: float = field(repr=lambda x: f'{x:g}', validator=validators.gt(0))

    def suppression_ratio(self, alpha_sq: float, physical_params: 'PhysicalParameters') -> float:
        """The ratio of the physical phase-flip rate to the threshold."""
        return physical_params.phase_flip_rate(alpha_sq) / self.error_rate_threshold

    def check_below_threshold(self, physical_params: 'PhysicalParameters') -> None:
        """Raise `InvalidPhysicalParameters` if no distance can suppress phase flips.

        The phase-flip rate grows with the photon number, so the smallest photon number
        is the most favorable one.
        """
        ratio = self.suppression_ratio(physical_params.min_alpha_sq, physical_params)
        if not ratio < 1:
            raise InvalidPhysicalParameters(
                f"Phase-flip rate {physical_params.phase_flip_rate(physical_params.min_alpha_sq):g} "
                f"is not below the repetition code threshold {self.error_rate_threshold:g}."
            )

    def phase_flip_probability(
        self, code_distance: int, alpha_sq: float, physical_params: 'PhysicalParameters'
    ) -> float:
        """Logical phase-flip probability per round of error correction."""
        return self.error_rate_scaler * math.pow(
            self.suppression_ratio(alpha_sq, physical_params), (code_distance + 1) // 2
        )

    @staticmethod
    def bit_flip_probability(
        code_distance: int, alpha_sq: float, physical_params: 'PhysicalParameters'
    ) -> float:
        """Logical bit-flip probability per round of error correction."""
        n_cx = 2 * (code_distance - 1)
        return n_cx * physical_params.cx_bit_flip_probability(alpha_sq)

    def error_per_cycle(
        self, code_parameter: CodeParameter, physical_params: 'PhysicalParameters'
    ) -> float:
        """Probability of a logical error during one logical cycle at `code_parameter`."""
        d = code_parameter.distance
        return d * (
            self.phase_flip_probability(d, code_parameter.alpha_sq, physical_params)
            + self.bit_flip_probability(d, code_parameter.alpha_sq, physical_params)
        )

    @lru_cache(maxsize=4096)
    def _best_at_distance(
        self, code_distance: int, physical_params: 'PhysicalParameters'
    ) -> CodeParameter:
        # Smallest photon number wins ties.
        best = None
        best_err = math.inf
        for alpha_sq in physical_params.alpha_sq_range():
            cp = CodeParameter(distance=code_distance, alpha_sq=alpha_sq)
            err = self.error_per_cycle(cp, physical_params)
            if err < best_err:
                best, best_err = cp, err
        assert best is not None
        return best

    @lru_cache(maxsize=4096)
    def code_parameter(
        self, code_distance: int, physical_params: 'PhysicalParameters'
    ) -> CodeParameter:
        """The operating point of a patch sized for `code_distance`.

        Raises:
            ValueError: If `code_distance` is smaller than one.
            InvalidPhysicalParameters: If the physical error rate is not below threshold.
        """
        if code_distance < 1:
            raise ValueError(f"Code distance must be at least 1, not {code_distance}")
        self.check_below_threshold(physical_params)

        best = self._best_at_distance(1, physical_params)
        best_err = self.error_per_cycle(best, physical_params)
        for d in range(3, code_distance + 1, 2):
            cp = self._best_at_distance(d, physical_params)
            err = self.error_per_cycle(cp, physical_params)
            if err < best_err:
                best, best_err = cp, err
        return best

    def logical_error_rate(
        self, code_distance: int, physical_params: 'PhysicalParameters', n_cycles: float = 1
    ) -> float:
        """Probability that one logical qubit fails during `n_cycles` logical cycles.

        Error probabilities of different cycles are added, a first-order approximation
        valid for the small rates of interest.
        """
        cp = self.code_parameter(code_distance, physical_params)
        return n_cycles * self.error_per_cycle(cp, physical_params)

    @staticmethod
    def physical_qubits(code_distance: int) -> int:
        """The number of cat qubits in a patch: $d$ data qubits and $d - 1$ ancillae."""
        return 2 * code_distance - 1

    def logical_cycle_time_ns(
        self, code_distance: int, physical_params: 'PhysicalParameters'
    ) -> float:
        """Duration of a logical cycle: one round per unit of the operating distance."""
        cp = self.code_parameter(code_distance, physical_params)
        return physical_params.round_time_ns * cp.distance

    def resource_cost(
        self, code_distance: int, physical_params: 'PhysicalParameters'
    ) -> ResourceCost:
        return ResourceCost(
            qubits=self.physical_qubits(code_distance),
            cycle_time_ns=self.logical_cycle_time_ns(code_distance, physical_params),
        )

    def code_distance_from_budget(
        self, physical_params: 'PhysicalParameters', budget: float, max_distance: int = 49
    ) -> Optional[int]:
        """The smallest odd distance whose error per logical cycle is below `budget`.

        Returns `None` if no distance up to `max_distance` meets the budget.
        """
        lo, hi = 0, (max_distance - 1) // 2
        if hi < 0 or self.logical_error_rate(2 * hi + 1, physical_params) > budget:
            return None
        while lo < hi:
            mid = (lo + hi) // 2
            if self.logical_error_rate(2 * mid + 1, physical_params) <= budget:
                hi = mid
            else:
                lo = mid + 1
        return 2 * lo + 1

    @classmethod
    def make_gouzien_et_al(cls) -> 'RepetitionCode':
        """The repetition code considered in the Gouzien et. al. reference.

        The threshold $0.013$ is the result of a circuit-level simulation and is not a
        tunable parameter (p. 4, eq. 3 and fig. 26 of arXiv:2302.06639).
        """
        return cls(error_rate_scaler=5.6e-2, error_rate_threshold=0.013)


@frozen
class LogicalErrorModel:
    """A model for getting the logical error rate of a patch at a given code distance.

    This curries the physical parameters with the repetition code, so the cost models can
    calculate the error per logical cycle given only a code distance.
    """

    physical_params: 'PhysicalParameters'
    qec_scheme: RepetitionCode

    def __call__(self, code_distance: int) -> float:
        return self.qec_scheme.logical_error_rate(code_distance, self.physical_params)

    def cycle_time_ns(self, code_distance: int) -> float:
        return self.qec_scheme.logical_cycle_time_ns(code_distance, self.physical_params)
