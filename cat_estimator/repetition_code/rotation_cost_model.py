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
import abc
import math
from typing import Optional

from attrs import field, frozen, validators

from .magic_count import MagicCount


class RotationCostModel(abc.ABC):
    """The magic states consumed by synthesizing arbitrary-angle rotations.

    A rotation by an arbitrary angle is approximated by a circuit of Clifford and
    non-Clifford gates, whose number of non-Clifford gates grows as the approximation
    error shrinks. The models here only count the magic states, the Clifford gates are
    assumed to fit in the logical depth reported for the algorithm.
    """

    @abc.abstractmethod
    def per_rotation(self, error_budget: float) -> MagicCount:
        """The magic states of one rotation approximated within `error_budget`."""

    def setup(self, error_budget: float) -> MagicCount:
        """The magic states of a one-time preparation shared by all rotations."""
        return MagicCount()

    def synthesis_cost(self, n_rotations: int, synthesis_budget: float) -> MagicCount:
        """The magic states of `n_rotations` rotations sharing `synthesis_budget` equally.

        Raises:
            ValueError: If there are rotations to synthesize and the budget is not in (0, 1).
        """
        if n_rotations == 0:
            return MagicCount()
        if not 0 < synthesis_budget < 1:
            raise ValueError(
                f"Rotations require a synthesis error budget in (0, 1), not {synthesis_budget}."
            )
        eps = synthesis_budget / n_rotations
        return self.setup(eps) + n_rotations * self.per_rotation(eps)


@frozen
class LogarithmicSynthesisCost(RotationCostModel):
    r"""Direct synthesis into T gates, logarithmic in the approximation error.

    $$
    \#T = \lceil a \log_2(1 / \epsilon) + b \rceil
    $$

    Attributes:
        slope: The coefficient $a$.
        offset: The constant $b$.
        reference: Where the fit comes from.
    """

    slope: float = field(validator=validators.ge(0))
    offset: float
    reference: Optional[str] = None

    def per_rotation(self, error_budget: float) -> MagicCount:
        if not 0 < error_budget < 1:
            raise ValueError(f"Rotation error budget must be in (0, 1), not {error_budget}")
        n_t = math.ceil(-self.slope * math.log2(error_budget) + self.offset)
        return MagicCount(n_t=max(n_t, 0))


@frozen
class PhaseGradientCost(RotationCostModel):
    """Rotations by addition into a phase-gradient register.

    A register of `bitsize` qubits holding a phase gradient is prepared once, by
    synthesizing `bitsize` rotations with `gradient_synthesis`. Every rotation is then an
    addition into that register, with `bitsize - 2` Toffoli gates regardless of the budget.

    Attributes:
        bitsize: The number of bits of precision of the rotation angles.
        gradient_synthesis: The synthesis of the rotations preparing the gradient.
        reference: Where the construction comes from.
    """

    bitsize: int = field(validator=validators.gt(0))
    gradient_synthesis: RotationCostModel
    reference: Optional[str] = None

    def per_rotation(self, error_budget: float) -> MagicCount:
        return MagicCount(n_ccz=max(self.bitsize - 2, 0))

    def setup(self, error_budget: float) -> MagicCount:
        return self.bitsize * self.gradient_synthesis.per_rotation(error_budget / self.bitsize)


# Mixed-fallback synthesis, arXiv:2211.07629 eq. D2.
BeverlandEtAlRotationCost = LogarithmicSynthesisCost(
    slope=0.53, offset=5.3, reference='https://arxiv.org/abs/2211.07629'
)

SevenBitPhaseGradientCost = PhaseGradientCost(
    bitsize=7,
    gradient_synthesis=BeverlandEtAlRotationCost,
    reference='https://doi.org/10.1103/PRXQuantum.1.020312',
)
