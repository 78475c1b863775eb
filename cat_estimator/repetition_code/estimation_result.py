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

from .toffoli_factory import ToffoliFactory

if TYPE_CHECKING:
    from cat_estimator.repetition_code import CandidateCost, ErrorBudget


@frozen
class EstimationResult:
    """The physical resources of the best configuration for running an algorithm.

    Attributes:
        physical_qubit_count: The total number of cat qubits.
        total_runtime_ns: The duration of the algorithm.
        chosen_code_distance: The code distance the data patches are sized for.
        factory_count: The number of parallel Toffoli factories.
        logical_cycle_time_ns: The duration of one logical cycle.
        achieved_error: The probability that the computation fails.
        mean_photon_number: The mean photon number $|\\alpha|^2$ of the data cat qubits.
        n_logical_cycles: The number of logical cycles the algorithm runs for.
        factory: The Toffoli factory design, `None` without magic states.
        data_error: The contribution of the data patches to `achieved_error`.
        factory_error: The contribution of the magic states to `achieved_error`.
        synthesis_error: The contribution of rotation synthesis to `achieved_error`.
        data_qubits: The cat qubits of the data patches.
        factory_qubits: The cat qubits of the factories.
        routing_qubits: The cat qubits routing magic states to the data.
        error_budget: The error budget the configuration satisfies.
        objective_value: The value of the minimized objective.
    """

    physical_qubit_count: int
    total_runtime_ns: float
    chosen_code_distance: int
    factory_count: int
    logical_cycle_time_ns: float
    achieved_error: float = field(repr=lambda x: f'{x:g}')
    mean_photon_number: int
    n_logical_cycles: int
    factory: Optional[ToffoliFactory]
    data_error: float = field(repr=lambda x: f'{x:g}')
    factory_error: float = field(repr=lambda x: f'{x:g}')
    synthesis_error: float = field(repr=lambda x: f'{x:g}')
    data_qubits: int
    factory_qubits: int
    routing_qubits: int
    error_budget: 'ErrorBudget'
    objective_value: float = field(repr=lambda x: f'{x:g}')

    @classmethod
    def from_cost(
        cls,
        cost: 'CandidateCost',
        error_budget: 'ErrorBudget',
        synthesis_error: float,
        objective_value: float,
    ) -> 'EstimationResult':
        return cls(
            physical_qubit_count=cost.physical_qubits,
            total_runtime_ns=cost.runtime_ns,
            chosen_code_distance=cost.candidate.code_distance,
            factory_count=cost.candidate.factory_replication,
            logical_cycle_time_ns=cost.logical_cycle_time_ns,
            achieved_error=cost.data_error + cost.factory_error + synthesis_error,
            mean_photon_number=cost.code_parameter.alpha_sq,
            n_logical_cycles=cost.n_logical_cycles,
            factory=cost.candidate.factory,
            data_error=cost.data_error,
            factory_error=cost.factory_error,
            synthesis_error=synthesis_error,
            data_qubits=cost.data_qubits,
            factory_qubits=cost.factory_qubits,
            routing_qubits=cost.routing_qubits,
            error_budget=error_budget,
            objective_value=objective_value,
        )

    @property
    def duration_hr(self) -> float:
        return self.total_runtime_ns * 1e-9 / 3600

    @property
    def qubit_hours(self) -> float:
        return self.physical_qubit_count * self.duration_hr

    @property
    def factory_fraction(self) -> float:
        """The percentage of the physical qubits used by the factories."""
        return 100 * self.factory_qubits / self.physical_qubit_count

    def __str__(self):
        return (
            f'{self.physical_qubit_count} cat qubits, {self.duration_hr:.3g} hours '
            f'(d = {self.chosen_code_distance}, |α|² = {self.mean_photon_number}, '
            f'{self.factory_count} factories, error {self.achieved_error:.3g})'
        )


@frozen
class NoFeasibleConfiguration:
    """The outcome of an estimation for which no configuration meets the error budget.

    Instances are falsy, so `if not result:` detects them.

    Attributes:
        error_budget: The error budget that could not be met.
        n_candidates_evaluated: The number of configurations evaluated by the search.
        n_factories_pruned: The number of factory designs discarded for their error.
        reason: A human readable explanation.
    """

    error_budget: 'ErrorBudget'
    n_candidates_evaluated: int
    n_factories_pruned: int
    reason: str

    def __bool__(self):
        return False
