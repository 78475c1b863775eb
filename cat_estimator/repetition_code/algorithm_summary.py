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
from fractions import Fraction
from typing import TYPE_CHECKING

from attrs import field, frozen, validators

from .magic_count import MagicCount

if TYPE_CHECKING:
    from .rotation_cost_model import RotationCostModel

_COUNT = dict(default=0, validator=[validators.instance_of(int), validators.ge(0)])

# Logical cycles per operation on the cat-qubit layout. A CX takes 2.2 cycles including
# the measurement (0.2 cycles, five steps in a cycle). A Toffoli is three CX, then 1.5 CX
# conditioned on a measurement outcome, then a measurement.
CX_LOGICAL_CYCLES = Fraction(22, 10)
TOFFOLI_LOGICAL_CYCLES = Fraction(101, 10)


@frozen(kw_only=True)
class LogicalProgramSummary:
    """Logical costs of a quantum algorithm that impact modeling of its physical cost.

    This is produced by a front-end (a program parser, or formulas for a known algorithm)
    and consumed by the estimator, which does not care how the counts were derived.

    Attributes:
        logical_qubit_count: Number of algorithm logical qubits.
        t_count: Number of T gates.
        ccz_count: Number of CCZ or Toffoli gates.
        rotation_count: Number of arbitrary-angle single-qubit rotations. These are
            synthesized into T gates within the synthesis error budget.
        algorithmic_depth: A lower bound on the number of logical cycles of the algorithm.
        cx_count: Number of two-qubit Clifford gates (CX, CY, CZ; a SWAP counts as three).
    """

    logical_qubit_count: int = field(**_COUNT)
    t_count: int = field(**_COUNT)
    ccz_count: int = field(**_COUNT)
    rotation_count: int = field(**_COUNT)
    algorithmic_depth: int = field(**_COUNT)
    cx_count: int = field(**_COUNT)

    @property
    def has_magic(self) -> bool:
        """Whether the algorithm consumes any non-Clifford resource state."""
        return self.t_count + self.ccz_count + self.rotation_count > 0

    def n_layout_qubits(self) -> int:
        """The number of logical patches after mapping onto the cat-qubit layout.

        This includes the "horizontal" routing patches between the data qubits, and the
        one between the data qubits and the factories. The "vertical" routing qubits are
        accounted for in physical qubits when the final estimate is assembled.

        References:
            arXiv:2302.06639, p. 27.
        """
        q = self.logical_qubit_count
        if q == 0:
            return 0
        return q + (q + 1) // 2 + 1

    def magic_count(
        self, rotation_model: 'RotationCostModel', synthesis_budget: float
    ) -> MagicCount:
        """The number of T and CCZ states consumed, after synthesizing rotations.

        Each rotation is synthesized to within `synthesis_budget / rotation_count`.
        """
        synthesized = rotation_model.synthesis_cost(self.rotation_count, synthesis_budget)
        return MagicCount(n_t=self.t_count, n_ccz=self.ccz_count) + synthesized

    def logical_depth(self, magic_count: MagicCount) -> int:
        """The number of logical cycles needed to run the algorithm without stalling.

        This is the larger of the depth reported by the front-end and the time it takes to
        apply every CX and every Toffoli in sequence.

        References:
            arXiv:2302.06639, p. 30, fig. 27 (CX) and p. 36, fig. 33 (Toffoli).
        """
        sequential = math.ceil(
            self.cx_count * CX_LOGICAL_CYCLES
            + magic_count.n_toffoli_states() * TOFFOLI_LOGICAL_CYCLES
        )
        return max(self.algorithmic_depth, sequential)

    @classmethod
    def make_elliptic_curve_discrete_log(
        cls, bit_size: int = 256, window_size: int = 18
    ) -> 'LogicalProgramSummary':
        """Logical counts of Shor's algorithm for elliptic curve discrete logarithms.

        Args:
            bit_size: The size of the elliptic curve field in bits.
            window_size: The window size of the windowed modular arithmetic.

        References:
            arXiv:2302.06639, p. 22, app. C.11 (qubits) and p. 21, app. C.10 (gates).
            The window size 18 for 256 bits is $w_e$ of table IV.
        """
        if bit_size < 1 or window_size < 1:
            raise ValueError("bit_size and window_size must be positive.")
        n3 = bit_size**3
        return cls(
            logical_qubit_count=9 * bit_size + window_size + 4,
            cx_count=-(-448 * n3 // window_size),
            ccz_count=-(-348 * n3 // window_size),
        )
