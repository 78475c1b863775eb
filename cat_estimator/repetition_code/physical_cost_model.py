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
from typing import Optional, TYPE_CHECKING

from attrs import field, frozen

from .multi_factory import MultiFactory
from .qec_scheme import CodeParameter, LogicalErrorModel

if TYPE_CHECKING:
    from cat_estimator.repetition_code import (
        CandidateConfiguration,
        ErrorBudget,
        LogicalProgramSummary,
        MagicCount,
        PhysicalParameters,
        RepetitionCode,
    )


@frozen
class CandidateCost:
    """The physical costs of one candidate configuration.

    Attributes:
        candidate: The evaluated configuration.
        code_parameter: The operating point (distance and photon number) of the data patches.
        logical_cycle_time_ns: Duration of one logical cycle.
        n_logical_cycles: The number of logical cycles the algorithm runs for. This is the
            larger of the algorithm depth and the time the factories take to produce every
            magic state.
        data_qubits: Physical qubits of the data (and horizontal routing) patches.
        factory_qubits: Physical qubits of all factories.
        routing_qubits: Physical qubits of the vertical routing.
        data_error: Probability of a logical error on a data patch during the run.
        factory_error: Probability that a consumed magic state is faulty.
    """

    candidate: 'CandidateConfiguration'
    code_parameter: CodeParameter
    logical_cycle_time_ns: float
    n_logical_cycles: int
    data_qubits: int
    factory_qubits: int
    routing_qubits: int
    data_error: float = field(repr=lambda x: f'{x:g}')
    factory_error: float = field(repr=lambda x: f'{x:g}')

    @property
    def physical_qubits(self) -> int:
        return self.data_qubits + self.factory_qubits + self.routing_qubits

    @property
    def runtime_ns(self) -> float:
        return self.n_logical_cycles * self.logical_cycle_time_ns

    def is_feasible(self, budget: 'ErrorBudget') -> bool:
        """Whether both the data and the factory errors are within their budgets."""
        return self.data_error <= budget.logical and self.factory_error <= budget.factory


@frozen
class PhysicalCostModel:
    """A model for estimating the physical costs of a candidate configuration.

    The model is parameterized by the properties of the hardware (`PhysicalParameters`), the
    repetition code, and the logical workload of the algorithm: the number of patches in the
    layout, the depth of the algorithm in logical cycles and the number of Toffoli magic
    states it consumes.

    ### Time costs

    The algorithm runs for the greater of two durations: its depth, and the time the factories
    take to produce every magic state. Each logical cycle takes `d` rounds of the code.

    ### Space costs

    The number of physical qubits is the sum of the data patches, the factories, and the
    routing qubits ensuring all-to-all connectivity between them.

    ### Error

    The total error is the sum of the data error (every patch, every logical cycle) and the
    factory error. The data error depends on the number of cycles, which depends on the
    number of factories.

    Args:
        physical_params: The physical parameters of the target hardware.
        qec_scheme: The repetition code protecting the data.
        n_layout_qubits: The number of logical patches in the layout.
        logical_depth: The number of logical cycles of the algorithm without stalling.
        n_magic_states: The number of Toffoli magic states consumed.
    """

    physical_params: 'PhysicalParameters'
    qec_scheme: 'RepetitionCode'
    n_layout_qubits: int
    logical_depth: int
    n_magic_states: int

    @classmethod
    def from_program(
        cls,
        program: 'LogicalProgramSummary',
        magic_count: 'MagicCount',
        physical_params: 'PhysicalParameters',
        qec_scheme: 'RepetitionCode',
    ) -> 'PhysicalCostModel':
        return cls(
            physical_params=physical_params,
            qec_scheme=qec_scheme,
            n_layout_qubits=program.n_layout_qubits(),
            logical_depth=program.logical_depth(magic_count),
            n_magic_states=magic_count.n_toffoli_states(),
        )

    @property
    def logical_error_model(self) -> LogicalErrorModel:
        return LogicalErrorModel(physical_params=self.physical_params, qec_scheme=self.qec_scheme)

    def _multi_factory(self, candidate: 'CandidateConfiguration') -> Optional[MultiFactory]:
        if candidate.factory is None:
            return None
        return MultiFactory(base_factory=candidate.factory, n_factories=candidate.factory_replication)

    def production_time_ns(self, candidate: 'CandidateConfiguration') -> float:
        factory = self._multi_factory(candidate)
        if factory is None:
            return 0.0
        return factory.production_time_ns(self.n_magic_states, self.physical_params)

    def physical_qubits(self, candidate: 'CandidateConfiguration') -> int:
        return sum(self._qubits(candidate))

    def _qubits(self, candidate: 'CandidateConfiguration'):
        q = self.n_layout_qubits
        data_qubits = q * self.qec_scheme.physical_qubits(candidate.code_distance)
        factory = self._multi_factory(candidate)
        factory_qubits = 0 if factory is None else factory.n_physical_qubits()
        # Vertical routing between every patch and each of the 6 patch-widths of the factories.
        routing_qubits = 2 * (3 * q + 6 * candidate.factory_replication - 1)
        return data_qubits, factory_qubits, routing_qubits

    def runtime_lower_bound_ns(self, candidate: 'CandidateConfiguration') -> float:
        """A lower bound on the runtime, non-decreasing in the code distance.

        The runtime is a whole number of logical cycles, so it exceeds this bound by less
        than one logical cycle.
        """
        cycle_time_ns = self.qec_scheme.logical_cycle_time_ns(
            candidate.code_distance, self.physical_params
        )
        return max(self.logical_depth * cycle_time_ns, self.production_time_ns(candidate))

    def evaluate(self, candidate: 'CandidateConfiguration') -> CandidateCost:
        cp = self.qec_scheme.code_parameter(candidate.code_distance, self.physical_params)
        cycle_time_ns = self.logical_error_model.cycle_time_ns(candidate.code_distance)

        factory = self._multi_factory(candidate)
        if factory is None:
            n_cycles = self.logical_depth
            factory_error = 0.0
        else:
            n_production_cycles = factory.n_cycles(
                self.n_magic_states, cycle_time_ns, self.physical_params
            )
            n_cycles = max(self.logical_depth, n_production_cycles)
            factory_error = factory.factory_error(self.n_magic_states)

        data_qubits, factory_qubits, routing_qubits = self._qubits(candidate)
        data_error = self.n_layout_qubits * self.qec_scheme.logical_error_rate(
            candidate.code_distance, self.physical_params, n_cycles=n_cycles
        )
        return CandidateCost(
            candidate=candidate,
            code_parameter=cp,
            logical_cycle_time_ns=cycle_time_ns,
            n_logical_cycles=n_cycles,
            data_qubits=data_qubits,
            factory_qubits=factory_qubits,
            routing_qubits=routing_qubits,
            data_error=data_error,
            factory_error=factory_error,
        )
