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
from typing import Tuple, TYPE_CHECKING

from attrs import field, frozen, validators

from .magic_state_factory import MagicStateFactory

if TYPE_CHECKING:
    from cat_estimator.repetition_code import PhysicalParameters


@frozen
class ToffoliFactory(MagicStateFactory):
    """A Toffoli magic state factory based on fault-tolerant stabilizer measurements.

    The factory prepares a Toffoli magic state by measuring its stabilizers, using
    adiabatic CX gates of duration $89.2 / (\\kappa_2 |\\alpha|^2)$. The preparation is
    heralded: it is restarted on failure, which is accounted for in the duration.

    This model does not compute the performance of the factory. It uses precomputed
    performances, see `GOUZIEN_ET_AL_TOFFOLI_FACTORIES`.

    Attributes:
        code_distance: The repetition-code distance inside the factory. This is
            independent of the distance of the data patches.
        alpha_sq: The mean photon number inside the factory.
        error_probability: The logical error probability of a produced state.
        acceptance_probability: The probability that a preparation is accepted.
        steps: The number of adiabatic-CX time steps of one preparation attempt.

    References:
        arXiv:2302.06639, section VI and p. 32.
    """

    code_distance: int = field(validator=validators.gt(0))
    alpha_sq: float = field(validator=validators.gt(0))
    error_probability: float = field(repr=lambda x: f'{x:g}', validator=validators.gt(0))
    acceptance_probability: float = field(validator=[validators.gt(0), validators.le(1)])
    steps: int = field(validator=validators.gt(0))

    def n_physical_qubits(self) -> int:
        """Four logical qubits and one "horizontal" routing qubit, each a repetition patch.

        The routing qubit below the factory is accounted for with the data qubits.
        """
        n_logical_qubits = 4
        horizontal_routing_qubits = 1
        return (n_logical_qubits + horizontal_routing_qubits) * (2 * self.code_distance - 1)

    def duration_ns(self, physical_params: 'PhysicalParameters') -> int:
        gate_time_ns = physical_params.adiabatic_cx_steps * physical_params.t_kappa2_ns / self.alpha_sq
        return math.floor(gate_time_ns * self.steps / self.acceptance_probability + 0.5)

    def state_error(self) -> float:
        return self.error_probability

    def normalized_volume(self, physical_params: 'PhysicalParameters') -> int:
        """Space-time volume of the factory per produced state, including retries."""
        return self.n_physical_qubits() * self.duration_ns(physical_params)

    def __str__(self):
        return f'{self.code_distance} (|α|² = {self.alpha_sq})'


def _tf(d, alpha_sq, err, steps, acceptance) -> ToffoliFactory:
    return ToffoliFactory(
        code_distance=d,
        alpha_sq=alpha_sq,
        error_probability=err,
        steps=steps,
        acceptance_probability=acceptance,
    )


# Table III, p. 35 of arXiv:2302.06639. Precomputed at k1/k2 = 1e-5 and 1/k2 = 100 ns.
GOUZIEN_ET_AL_TOFFOLI_FACTORIES: Tuple[ToffoliFactory, ...] = (
    _tf(3, 3.75, 1.05e-3, 23, 0.84),
    _tf(3, 5.08, 1.02e-4, 29, 0.745),
    _tf(3, 5.32, 8.14e-5, 35, 0.66),
    _tf(5, 7.15, 4.62e-6, 46, 0.456),
    _tf(5, 8.18, 7.00e-7, 53, 0.362),
    _tf(5, 8.38, 5.36e-7, 60, 0.288),
    _tf(7, 9.71, 6.14e-8, 73, 0.148),
    _tf(7, 10.76, 8.40e-9, 81, 0.105),
    _tf(7, 11.06, 5.16e-9, 89, 0.0727),
    _tf(9, 11.64, 2.28e-9, 104, 0.0262),
    _tf(9, 12.83, 2.30e-10, 113, 0.0154),
    _tf(9, 13.44, 7.36e-11, 122, 0.00975),
    _tf(19, 17.35, 7.90e-12, 9576, 1.0),
    _tf(21, 18.94, 5.40e-13, 14112, 1.0),
    _tf(23, 20.53, 3.74e-14, 21344, 1.0),
)
