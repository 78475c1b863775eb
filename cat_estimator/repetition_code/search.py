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
r"""Search for the configuration minimizing an objective under an error budget.

The search space is the grid of `CandidateSpace`: code distances, factory designs and the
number of copies of each design. The default `'monotone'` strategy returns the exact
minimum over this grid without evaluating all of it. Along a line of the grid, with the
factory design and replication fixed and the code distance $d$ growing:

 - the data error is non-increasing, since both the error per logical cycle and the number
   of logical cycles $\max(\text{depth}, \lceil t_\text{prod} / t_\text{cycle}(d) \rceil)$
   are, while the factory error does not depend on $d$. Feasibility is thus monotone, and
   the smallest feasible distance is found by bisection.
 - the number of qubits is increasing, and the runtime is bounded from below by
   $\max(\text{depth} \cdot t_\text{cycle}(d), t_\text{prod})$, which is non-decreasing.
   Objectives are non-decreasing in both, so once the objective of this bound reaches the
   best value found, no larger distance can improve on it.

Lines are only built up to the replication at which the factories keep up with the
algorithm at the smallest distance (see `CandidateSpace.from_cost_model`). Ties are broken
on (objective, qubits, runtime, distance, replication, design index), so every strategy
returns the same configuration. The `'exhaustive'` strategy evaluates every point.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple, TYPE_CHECKING, Union

import numpy as np
from attrs import field, frozen

from .candidates import CandidateSpace, SearchBounds
from .estimation_result import NoFeasibleConfiguration
from .objective import MinimizeSpacetimeVolume, Objective
from .toffoli_factory import GOUZIEN_ET_AL_TOFFOLI_FACTORIES, ToffoliFactory

if TYPE_CHECKING:
    from cat_estimator.repetition_code import CandidateCost, ErrorBudget, PhysicalCostModel

logger = logging.getLogger(__name__)

STRATEGIES = ('monotone', 'exhaustive')

_Ranked = Tuple[tuple, 'CandidateCost']


@frozen
class _DesignOutcome:
    best: Optional[_Ranked]
    points: Tuple['CandidateCost', ...]
    n_evaluated: int


def pareto_frontier(costs: Sequence['CandidateCost']) -> List['CandidateCost']:
    """The costs not dominated in both physical qubits and runtime, by increasing qubits.

    Of several costs with the same qubits and runtime, the first one is kept.
    """
    if not costs:
        return []
    qubits = np.array([c.physical_qubits for c in costs])
    runtimes = np.array([c.runtime_ns for c in costs], dtype=float)
    order = np.lexsort((runtimes, qubits))
    sorted_runtimes = runtimes[order]
    best_before = np.concatenate(([np.inf], np.minimum.accumulate(sorted_runtimes)[:-1]))
    keep = sorted_runtimes < best_before
    return [costs[i] for i in order[keep]]


@frozen
class ConfigurationSearch:
    """Finds the configuration of a workload minimizing an objective.

    Args:
        cost_model: The physical costs of the workload.
        error_budget: The error budget every returned configuration meets.
        objective: The quantity to minimize.
        bounds: The bounds of the search space.
        factories: The catalog of factory designs.
    """

    cost_model: 'PhysicalCostModel'
    error_budget: 'ErrorBudget'
    objective: Objective = field(factory=MinimizeSpacetimeVolume)
    bounds: SearchBounds = field(factory=SearchBounds)
    factories: Tuple[ToffoliFactory, ...] = field(
        default=GOUZIEN_ET_AL_TOFFOLI_FACTORIES, converter=tuple
    )

    def candidate_space(self) -> CandidateSpace:
        return CandidateSpace.from_cost_model(
            self.cost_model, self.error_budget.factory, self.bounds, self.factories
        )

    def rank(self, cost: 'CandidateCost', design_index: int) -> tuple:
        """The total order of the search: smaller is better."""
        qubits, runtime = cost.physical_qubits, cost.runtime_ns
        return (
            self.objective(qubits, runtime),
            qubits,
            runtime,
            cost.candidate.code_distance,
            cost.candidate.factory_replication,
            design_index,
        )

    def _scan_line(
        self,
        space: CandidateSpace,
        design_index: int,
        factory: Optional[ToffoliFactory],
        replication: int,
        stop: Callable[[float, float, Optional[_Ranked], Sequence['CandidateCost']], bool],
    ) -> _DesignOutcome:
        """Bisects for the smallest feasible distance, then scans upward until `stop`."""
        distances = space.code_distances
        evaluated = {}

        def evaluate(i: int) -> 'CandidateCost':
            if i not in evaluated:
                candidate = space.candidate(distances[i], factory, replication)
                evaluated[i] = self.cost_model.evaluate(candidate)
            return evaluated[i]

        lo, hi = 0, len(distances)
        while lo < hi:
            mid = (lo + hi) // 2
            if evaluate(mid).is_feasible(self.error_budget):
                hi = mid
            else:
                lo = mid + 1

        best: Optional[_Ranked] = None
        points: List['CandidateCost'] = []
        for i in range(lo, len(distances)):
            candidate = space.candidate(distances[i], factory, replication)
            qubits = self.cost_model.physical_qubits(candidate)
            runtime_bound = self.cost_model.runtime_lower_bound_ns(candidate)
            if points and stop(qubits, runtime_bound, best, points):
                break
            cost = evaluate(i)
            points.append(cost)
            ranked = (self.rank(cost, design_index), cost)
            if best is None or ranked[0] < best[0]:
                best = ranked
        return _DesignOutcome(best=best, points=tuple(points), n_evaluated=len(evaluated))

    def _scan_design(
        self,
        space: CandidateSpace,
        design_index: int,
        stop: Callable[[float, float, Optional[_Ranked], Sequence['CandidateCost']], bool],
    ) -> _DesignOutcome:
        factory, r_max = space.factory_options[design_index]
        replications = [0] if factory is None else range(1, r_max + 1)
        best: Optional[_Ranked] = None
        points: List['CandidateCost'] = []
        n_evaluated = 0
        for r in replications:
            line = self._scan_line(space, design_index, factory, r, stop)
            n_evaluated += line.n_evaluated
            points.extend(line.points)
            if line.best is not None and (best is None or line.best[0] < best[0]):
                best = line.best
        logger.debug(
            "Design %d (%s): %d candidates evaluated, best %s",
            design_index,
            factory,
            n_evaluated,
            None if best is None else best[1].candidate,
        )
        return _DesignOutcome(best=best, points=tuple(points), n_evaluated=n_evaluated)

    def _exhaustive_design(self, space: CandidateSpace, design_index: int) -> _DesignOutcome:
        factory, r_max = space.factory_options[design_index]
        replications = [0] if factory is None else range(1, r_max + 1)
        best: Optional[_Ranked] = None
        points: List['CandidateCost'] = []
        n_evaluated = 0
        for r in replications:
            for d in space.code_distances:
                cost = self.cost_model.evaluate(space.candidate(d, factory, r))
                n_evaluated += 1
                if not cost.is_feasible(self.error_budget):
                    continue
                points.append(cost)
                ranked = (self.rank(cost, design_index), cost)
                if best is None or ranked[0] < best[0]:
                    best = ranked
        return _DesignOutcome(best=best, points=tuple(points), n_evaluated=n_evaluated)

    def _run(
        self,
        space: CandidateSpace,
        per_design: Callable[[CandidateSpace, int], _DesignOutcome],
        max_workers: Optional[int],
    ) -> List[_DesignOutcome]:
        design_indices = range(len(space.factory_options))
        if max_workers is None:
            return [per_design(space, i) for i in design_indices]
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(lambda i: per_design(space, i), design_indices))

    def _no_feasible(self, space: CandidateSpace, n_evaluated: int) -> NoFeasibleConfiguration:
        if space.pruned_reason is not None:
            reason = space.pruned_reason
        else:
            reason = (
                f"No configuration up to code distance {space.code_distances[-1]} keeps the "
                f"data error within {self.error_budget.logical:g}."
            )
        return NoFeasibleConfiguration(
            error_budget=self.error_budget,
            n_candidates_evaluated=n_evaluated,
            n_factories_pruned=space.n_factories_pruned,
            reason=reason,
        )

    def best(
        self, strategy: str = 'monotone', max_workers: Optional[int] = None
    ) -> Union['CandidateCost', NoFeasibleConfiguration]:
        """The feasible configuration minimizing the objective.

        Args:
            strategy: `'monotone'` (default) or `'exhaustive'`. Both return the same
                configuration; the exhaustive one evaluates every point of the grid.
            max_workers: If set, the factory designs are searched in a thread pool with
                this many workers.

        Returns:
            The costs of the best configuration, or a `NoFeasibleConfiguration`.
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown search strategy {strategy!r}, expected one of {STRATEGIES}.")
        space = self.candidate_space()

        if strategy == 'exhaustive':
            per_design = self._exhaustive_design
        else:

            def stop(qubits, runtime_bound, best, points):
                return self.objective(qubits, runtime_bound) >= best[0][0]

            def per_design(space, i):
                return self._scan_design(space, i, stop)

        outcomes = self._run(space, per_design, max_workers)
        n_evaluated = sum(o.n_evaluated for o in outcomes)
        ranked = [o.best for o in outcomes if o.best is not None]
        if not ranked:
            logger.debug("No feasible configuration among %d candidates", n_evaluated)
            return self._no_feasible(space, n_evaluated)
        key, cost = min(ranked, key=lambda kc: kc[0])
        logger.debug("Best of %d candidates: %s (objective %g)", n_evaluated, cost.candidate, key[0])
        return cost

    def frontier(
        self, max_workers: Optional[int] = None
    ) -> Union[List['CandidateCost'], NoFeasibleConfiguration]:
        """The feasible configurations not dominated in both physical qubits and runtime.

        Along a line of the grid a larger distance has more qubits, so it is only kept if it
        can run faster than every smaller distance of the line.
        """
        space = self.candidate_space()

        def stop(qubits, runtime_bound, best, points):
            return runtime_bound >= min(c.runtime_ns for c in points)

        outcomes = self._run(space, lambda s, i: self._scan_design(s, i, stop), max_workers)
        points = [c for o in outcomes for c in o.points]
        if not points:
            return self._no_feasible(space, sum(o.n_evaluated for o in outcomes))
        return pareto_frontier(points)
