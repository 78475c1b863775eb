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

from attrs import field, frozen, validators


class Objective(metaclass=abc.ABCMeta):
    """A quantity to minimize over the candidate configurations.

    Every objective must be a non-decreasing function of both the number of physical qubits
    and the runtime. The configuration search relies on it to stop scanning larger code
    distances once their lower bound can no longer improve on the best configuration.
    """

    @abc.abstractmethod
    def __call__(self, physical_qubits: int, runtime_ns: float) -> float:
        """The value of the objective for a configuration."""


@frozen
class MinimizeQubits(Objective):
    def __call__(self, physical_qubits: int, runtime_ns: float) -> float:
        return float(physical_qubits)


@frozen
class MinimizeRuntime(Objective):
    def __call__(self, physical_qubits: int, runtime_ns: float) -> float:
        return float(runtime_ns)


@frozen
class MinimizeSpacetimeVolume(Objective):
    """Minimize the number of qubit-hours, the product of qubits and runtime."""

    def __call__(self, physical_qubits: int, runtime_ns: float) -> float:
        return physical_qubits * runtime_ns * 1e-9 / 3600


@frozen
class WeightedObjective(Objective):
    """A weighted sum of the number of physical qubits and the runtime in hours.

    Args:
        qubit_weight: The weight of one physical qubit.
        runtime_weight: The weight of one hour of runtime.
    """

    qubit_weight: float = field(default=1.0, validator=validators.ge(0))
    runtime_weight: float = field(default=1.0, validator=validators.ge(0))

    def __call__(self, physical_qubits: int, runtime_ns: float) -> float:
        return self.qubit_weight * physical_qubits + self.runtime_weight * runtime_ns * 1e-9 / 3600
