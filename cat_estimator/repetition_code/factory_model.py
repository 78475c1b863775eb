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
import math
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

from attrs import frozen

from cat_estimator.exception import FactoryInfeasible

from .magic_count import MagicCount
from .multi_factory import MultiFactory
from .toffoli_factory import GOUZIEN_ET_AL_TOFFOLI_FACTORIES, ToffoliFactory

if TYPE_CHECKING:
    from cat_estimator.repetition_code import PhysicalParameters, RepetitionCode

logger = logging.getLogger(__name__)


@frozen
class FactoryRequirement:
    """The factories needed to supply an algorithm with magic states.

    Attributes:
        factory: The factory design, or `None` if no magic state is needed.
        factories_needed: The number of parallel factories needed to keep up with the rate
            at which the algorithm consumes magic states.
        cycles_needed: The number of logical cycles `factories_needed` factories take to
            produce every magic state.
        factory_error: The probability that at least one consumed magic state is faulty.
    """

    factory: Optional[ToffoliFactory]
    factories_needed: int
    cycles_needed: int
    factory_error: float


def feasible_factories(
    n_states: int,
    factory_budget: float,
    physical_params: 'PhysicalParameters',
    factories: Sequence[ToffoliFactory] = GOUZIEN_ET_AL_TOFFOLI_FACTORIES,
) -> Tuple[ToffoliFactory, ...]:
    """The factory designs whose total error on `n_states` states is within `factory_budget`.

    The designs are sorted by increasing normalized volume; the sort is stable, so equal
    volumes keep their order in `factories`.

    Raises:
        FactoryInfeasible: If no design meets the per-state error target.
    """
    if n_states <= 0:
        return ()
    feasible = [f for f in factories if f.factory_error(n_states) <= factory_budget]
    if not feasible:
        best = min((f.error_probability for f in factories), default=math.inf)
        raise FactoryInfeasible(
            f"No factory produces {n_states} magic states within an error of "
            f"{factory_budget:g}; the best design has an error of {best:g} per state."
        )
    feasible.sort(key=lambda f: f.normalized_volume(physical_params))
    return tuple(feasible)


def min_factories_for_time(
    factory: ToffoliFactory, n_states: int, available_ns: float, physical_params: 'PhysicalParameters'
) -> int:
    """The smallest number of copies of `factory` producing `n_states` within `available_ns`.

    If a single batch takes longer than `available_ns`, no number of copies is fast enough.
    The number of copies returned is then the one after which more copies do not help.
    """
    n_batches = -(-n_states // factory.n_output_states)
    batches_per_factory = math.floor(available_ns / factory.duration_ns(physical_params))
    if batches_per_factory <= 0:
        return n_batches
    return -(-n_batches // batches_per_factory)


def factory_requirement(
    t_count: int,
    ccz_count: int,
    factory_budget: float,
    code_distance: int,
    *,
    logical_depth: int,
    physical_params: 'PhysicalParameters',
    qec_scheme: 'RepetitionCode',
    factories: Sequence[ToffoliFactory] = GOUZIEN_ET_AL_TOFFOLI_FACTORIES,
) -> FactoryRequirement:
    """The factories supplying `t_count` T and `ccz_count` CCZ states to an algorithm.

    The factory design is the one with the smallest normalized volume among those meeting
    the per-state target `factory_budget / n_states`. The number of factories is the
    smallest one whose throughput matches the consumption of an algorithm running for
    `logical_depth` logical cycles on patches of distance `code_distance`.

    Raises:
        FactoryInfeasible: If no design meets the error target, even when slow.
    """
    n_states = MagicCount(n_t=t_count, n_ccz=ccz_count).n_toffoli_states()
    if n_states == 0:
        return FactoryRequirement(factory=None, factories_needed=0, cycles_needed=0, factory_error=0.0)

    factory = feasible_factories(n_states, factory_budget, physical_params, factories)[0]
    cycle_time_ns = qec_scheme.logical_cycle_time_ns(code_distance, physical_params)
    n_factories = min_factories_for_time(
        factory, n_states, logical_depth * cycle_time_ns, physical_params
    )
    multi = MultiFactory(base_factory=factory, n_factories=n_factories)
    req = FactoryRequirement(
        factory=factory,
        factories_needed=n_factories,
        cycles_needed=multi.n_cycles(n_states, cycle_time_ns, physical_params),
        factory_error=multi.factory_error(n_states),
    )
    logger.debug("Factory requirement for %d states at d=%d: %s", n_states, code_distance, req)
    return req
