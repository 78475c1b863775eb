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
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cat_estimator.repetition_code import PhysicalParameters


class MagicStateFactory(metaclass=abc.ABCMeta):
    """Methods for modeling the costs of the magic state factories of a cat-qubit compilation.

    The repetition code can only execute Clifford gates fault-tolerantly. Non-Clifford gates
    like the Toffoli, CCZ or T gate are enacted by teleporting in a "magic state" of
    sufficiently low error, prepared in a dedicated area of the processor called a factory.
    Magic state production is an important runtime and qubit-count bottleneck.

    This abstract interface specifies that each magic state factory must report its number
    of physical qubits, the time it takes to produce a batch of states, the number of states
    in a batch and the error probability of each produced state.
    """

    @abc.abstractmethod
    def n_physical_qubits(self) -> int:
        """The number of physical qubits used by the magic state factory."""

    @abc.abstractmethod
    def duration_ns(self, physical_params: 'PhysicalParameters') -> float:
        """The average time in nanoseconds to produce one batch of magic states."""

    @abc.abstractmethod
    def state_error(self) -> float:
        """The probability that a produced magic state is faulty."""

    @property
    def n_output_states(self) -> int:
        """The number of magic states produced in one batch."""
        return 1

    def production_time_ns(self, n_states: int, physical_params: 'PhysicalParameters') -> float:
        """The time to produce `n_states` magic states."""
        n_batches = -(-n_states // self.n_output_states)
        return n_batches * self.duration_ns(physical_params)

    def n_cycles(
        self, n_states: int, logical_cycle_time_ns: float, physical_params: 'PhysicalParameters'
    ) -> int:
        """The number of logical cycles needed to produce `n_states` magic states."""
        return math.ceil(self.production_time_ns(n_states, physical_params) / logical_cycle_time_ns)

    def factory_error(self, n_states: int) -> float:
        """The total error expected from producing `n_states` magic states."""
        return n_states * self.state_error()
