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
import logging
from typing import Iterator, Optional, Sequence, Tuple, TYPE_CHECKING

from attrs import field, frozen, validators

from cat_estimator.exception import FactoryInfeasible

from .factory_model import feasible_factories, min_factories_for_time
from .toffoli_factory import GOUZIEN_ET_AL_TOFFOLI_FACTORIES, ToffoliFactory

if TYPE_CHECKING:
    from cat_estimator.repetition_code import PhysicalCostModel, PhysicalParameters, RepetitionCode

logger = logging.getLogger(__name__)


@frozen
class SearchBounds:
    """The bounds of the configuration search.

    Attributes:
        min_code_distance: The smallest code distance considered.
        max_code_distance: The largest code distance considered.
        max_factories: The largest number of parallel factories considered.
        max_factory_distance: If set, factory designs with a larger code distance are
            not considered.
    """

    min_code_distance: int = field(default=1, validator=validators.ge(1))
    max_code_distance: int = field(default=49, validator=validators.ge(1))
    max_factories: int = field(default=1000, validator=validators.ge(1))
    max_factory_distance: Optional[int] = field(
        default=None, validator=validators.optional(validators.ge(1))
    )

    def __attrs_post_init__(self):
        if not self.code_distances():
            raise ValueError(
                f"No odd code distance in [{self.min_code_distance}, {self.max_code_distance}]."
            )

    def code_distances(self) -> Tuple[int, ...]:
        """The odd code distances within the bounds, in increasing order."""
        start = self.min_code_distance | 1
        return tuple(range(start, self.max_code_distance + 1, 2))

    def allows_factory(self, factory: ToffoliFactory) -> bool:
        return self.max_factory_distance is None or factory.code_distance <= self.max_factory_distance


@frozen
class CandidateConfiguration:
    """A point of the search space.

    Attributes:
        code_distance: The code distance the data patches are sized for.
        factory_replication: The number of parallel factories, zero without factories.
        cycles_per_logical_tick: The number of repetition-code rounds in a logical cycle,
            i.e. the distance the patches are operated at.
        factory: The factory design, or `None` for a program without magic states.
    """

    code_distance: int
    factory_replication: int
    cycles_per_logical_tick: int
    factory: Optional[ToffoliFactory] = None


@frozen
class CandidateSpace:
    """The finite grid of candidate configurations of one estimation.

    The grid is the product of the code distances, the factory designs and, for every
    design, the replications from one up to its bound. Iterating the space lazily yields
    every candidate, and iterating it again starts over.

    Args:
        code_distances: The code distances, in increasing order.
        factory_options: For every factory design, the largest replication considered.
            A program without magic states has the single option `(None, 0)`.
        physical_params: The physical parameters of the hardware.
        qec_scheme: The repetition code protecting the data.
        n_factories_pruned: The number of factory designs discarded before the search.
        pruned_reason: Why designs were discarded, if all of them were.
    """

    code_distances: Tuple[int, ...] = field(converter=tuple)
    factory_options: Tuple[Tuple[Optional[ToffoliFactory], int], ...] = field(converter=tuple)
    physical_params: 'PhysicalParameters'
    qec_scheme: 'RepetitionCode'
    n_factories_pruned: int = 0
    pruned_reason: Optional[str] = None

    @classmethod
    def from_cost_model(
        cls,
        cost_model: 'PhysicalCostModel',
        factory_budget: float,
        bounds: SearchBounds = SearchBounds(),
        factories: Sequence[ToffoliFactory] = GOUZIEN_ET_AL_TOFFOLI_FACTORIES,
    ) -> 'CandidateSpace':
        """The candidates for the workload of `cost_model`.

        The factory designs are the ones meeting the factory budget, ordered by normalized
        volume. More factories than needed to keep up with the algorithm at the smallest
        code distance would only add qubits: at larger distances the logical cycles are
        longer and fewer factories suffice. This bounds the replication of each design.
        """
        params = cost_model.physical_params
        qec = cost_model.qec_scheme
        distances = bounds.code_distances()
        n_states = cost_model.n_magic_states
        if n_states == 0:
            return cls(distances, ((None, 0),), params, qec)

        allowed = [f for f in factories if bounds.allows_factory(f)]
        try:
            designs = feasible_factories(n_states, factory_budget, params, allowed)
        except FactoryInfeasible as e:
            logger.debug("Pruned all %d factory designs: %s", len(factories), e)
            return cls(
                distances, (), params, qec, n_factories_pruned=len(factories), pruned_reason=str(e)
            )

        available_ns = cost_model.logical_depth * qec.logical_cycle_time_ns(distances[0], params)
        options = []
        for factory in designs:
            r_max = min_factories_for_time(factory, n_states, available_ns, params)
            options.append((factory, min(r_max, bounds.max_factories)))
        logger.debug(
            "%d of %d factory designs meet the factory budget %g",
            len(designs),
            len(factories),
            factory_budget,
        )
        return cls(distances, options, params, qec, n_factories_pruned=len(factories) - len(designs))

    def candidate(
        self, code_distance: int, factory: Optional[ToffoliFactory], factory_replication: int
    ) -> CandidateConfiguration:
        cp = self.qec_scheme.code_parameter(code_distance, self.physical_params)
        return CandidateConfiguration(
            code_distance=code_distance,
            factory_replication=factory_replication,
            cycles_per_logical_tick=cp.distance,
            factory=factory,
        )

    def axes(self) -> Iterator[Tuple[int, Optional[ToffoliFactory], int]]:
        """Yields `(design_index, factory, replication)` for every line of the grid.

        Along each line only the code distance varies.
        """
        for i, (factory, r_max) in enumerate(self.factory_options):
            if factory is None:
                yield i, None, 0
                continue
            for r in range(1, r_max + 1):
                yield i, factory, r

    def __iter__(self) -> Iterator[CandidateConfiguration]:
        for _, factory, r in self.axes():
            for d in self.code_distances:
                yield self.candidate(d, factory, r)

    def __len__(self) -> int:
        n_axes = sum(1 if factory is None else r_max for factory, r_max in self.factory_options)
        return n_axes * len(self.code_distances)


def iter_candidates(
    cost_model: 'PhysicalCostModel',
    factory_budget: float,
    bounds: SearchBounds = SearchBounds(),
    factories: Sequence[ToffoliFactory] = GOUZIEN_ET_AL_TOFFOLI_FACTORIES,
) -> Iterator[CandidateConfiguration]:
    """Yields every candidate configuration for the workload of `cost_model`."""
    yield from CandidateSpace.from_cost_model(cost_model, factory_budget, bounds, factories)
