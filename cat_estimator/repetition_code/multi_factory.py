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
from typing import TYPE_CHECKING

from attrs import field, frozen, validators

from .magic_state_factory import MagicStateFactory

if TYPE_CHECKING:
    from cat_estimator.repetition_code import PhysicalParameters


@frozen
class MultiFactory(MagicStateFactory):
    """Overlay of MagicStateFactory representing multiple factories of the same kind.

    All quantities are derived by those of `base_factory`. The footprint is multiplied by
    `n_factories`, the states are produced by all copies in parallel, and the error per
    state does not depend on the number of factories.

    Args:
        base_factory: the base factory to be replicated.
        n_factories: number of factories to construct.
    """

    base_factory: MagicStateFactory
    n_factories: int = field(validator=validators.gt(0))

    def n_physical_qubits(self) -> int:
        return self.base_factory.n_physical_qubits() * self.n_factories

    def duration_ns(self, physical_params: 'PhysicalParameters') -> float:
        return self.base_factory.duration_ns(physical_params)

    def state_error(self) -> float:
        return self.base_factory.state_error()

    @property
    def n_output_states(self) -> int:
        return self.base_factory.n_output_states * self.n_factories
