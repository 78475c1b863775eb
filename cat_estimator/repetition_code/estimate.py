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
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING, Union

from .candidates import SearchBounds
from .error_budget import ErrorBudget, partition
from .estimation_result import EstimationResult, NoFeasibleConfiguration
from .objective import MinimizeSpacetimeVolume, Objective
from .physical_cost_model import PhysicalCostModel
from .qec_scheme import RepetitionCode
from .rotation_cost_model import BeverlandEtAlRotationCost
from .search import ConfigurationSearch
from .toffoli_factory import GOUZIEN_ET_AL_TOFFOLI_FACTORIES, ToffoliFactory

if TYPE_CHECKING:
    from cat_estimator.repetition_code import (
        LogicalProgramSummary,
        PhysicalParameters,
        RotationCostModel,
    )

logger = logging.getLogger(__name__)


def _prepare_search(
    program: 'LogicalProgramSummary',
    error_budget: Union[float, ErrorBudget],
    physical_params: 'PhysicalParameters',
    objective: Objective,
    qec_scheme: Optional[RepetitionCode],
    factories: Optional[Sequence[ToffoliFactory]],
    rotation_model: Optional['RotationCostModel'],
    bounds: Optional[SearchBounds],
) -> Tuple[ConfigurationSearch, float]:
    if qec_scheme is None:
        qec_scheme = RepetitionCode.make_gouzien_et_al()
    qec_scheme.check_below_threshold(physical_params)
    if program.logical_qubit_count == 0:
        raise ValueError("Cannot estimate the resources of a program without logical qubits.")
    if isinstance(error_budget, ErrorBudget):
        budget = error_budget
    else:
        budget = partition(error_budget, program)
    budget.check_program(program)

    if rotation_model is None:
        rotation_model = BeverlandEtAlRotationCost

    magic_count = program.magic_count(rotation_model, budget.synthesis)
    cost_model = PhysicalCostModel.from_program(program, magic_count, physical_params, qec_scheme)
    logger.debug("Estimating %s with %s and budget %s", program, magic_count, budget)
    search = ConfigurationSearch(
        cost_model=cost_model,
        error_budget=budget,
        objective=objective,
        bounds=SearchBounds() if bounds is None else bounds,
        factories=GOUZIEN_ET_AL_TOFFOLI_FACTORIES if factories is None else factories,
    )
    synthesis_error = budget.synthesis if program.rotation_count > 0 else 0.0
    return search, synthesis_error


def estimate(
    program: 'LogicalProgramSummary',
    error_budget: Union[float, ErrorBudget],
    physical_params: 'PhysicalParameters',
    objective: Objective = MinimizeSpacetimeVolume(),
    *,
    qec_scheme: Optional[RepetitionCode] = None,
    factories: Optional[Sequence[ToffoliFactory]] = None,
    rotation_model: Optional['RotationCostModel'] = None,
    bounds: Optional[SearchBounds] = None,
    strategy: str = 'monotone',
    max_workers: Optional[int] = None,
) -> Union[EstimationResult, NoFeasibleConfiguration]:
    """Estimate the physical resources of running `program` on cat-qubit hardware.

    The error budget is split among the sources of error, then the configuration search
    finds the code distance, factory design and number of factories minimizing `objective`
    while keeping every error within its share.

    Args:
        program: The logical counts of the algorithm.
        error_budget: The acceptable probability of failure, split with `partition`, or an
            explicit `ErrorBudget`.
        physical_params: The physical parameters of the hardware.
        objective: The quantity to minimize.
        qec_scheme: The repetition code. Defaults to the one of Gouzien et. al.
        factories: The catalog of Toffoli factory designs. Defaults to the designs of
            Gouzien et. al.
        rotation_model: The cost of synthesizing rotations. Defaults to Beverland et. al.
        bounds: The bounds of the search space.
        strategy: `'monotone'` or `'exhaustive'`, see `ConfigurationSearch.best`.
        max_workers: If set, search the factory designs in a thread pool.

    Returns:
        The resources of the best configuration, or a falsy `NoFeasibleConfiguration` if no
        configuration within `bounds` meets the error budget.

    Raises:
        ValueError: If the program has no logical qubits.
        InfeasibleBudget: If the error budget is out of range, or gives no share to a source
            of error present in the program.
        InvalidPhysicalParameters: If the hardware is above the threshold of the code.
    """
    search, synthesis_error = _prepare_search(
        program, error_budget, physical_params, objective, qec_scheme, factories, rotation_model, bounds
    )
    cost = search.best(strategy=strategy, max_workers=max_workers)
    if isinstance(cost, NoFeasibleConfiguration):
        logger.info("No feasible configuration: %s", cost.reason)
        return cost
    result = EstimationResult.from_cost(
        cost,
        error_budget=search.error_budget,
        synthesis_error=synthesis_error,
        objective_value=objective(cost.physical_qubits, cost.runtime_ns),
    )
    logger.info("Estimated %s", result)
    return result


def estimate_frontier(
    program: 'LogicalProgramSummary',
    error_budget: Union[float, ErrorBudget],
    physical_params: 'PhysicalParameters',
    *,
    qec_scheme: Optional[RepetitionCode] = None,
    factories: Optional[Sequence[ToffoliFactory]] = None,
    rotation_model: Optional['RotationCostModel'] = None,
    bounds: Optional[SearchBounds] = None,
    max_workers: Optional[int] = None,
) -> Union[List[EstimationResult], NoFeasibleConfiguration]:
    """The configurations of `program` trading physical qubits for runtime.

    Returns the feasible configurations not dominated in both qubits and runtime, by
    increasing number of qubits. The objective value of each result is its qubit-hours.
    See `estimate` for the arguments.
    """
    objective = MinimizeSpacetimeVolume()
    search, synthesis_error = _prepare_search(
        program, error_budget, physical_params, objective, qec_scheme, factories, rotation_model, bounds
    )
    costs = search.frontier(max_workers=max_workers)
    if isinstance(costs, NoFeasibleConfiguration):
        return costs
    return [
        EstimationResult.from_cost(
            cost,
            error_budget=search.error_budget,
            synthesis_error=synthesis_error,
            objective_value=objective(cost.physical_qubits, cost.runtime_ns),
        )
        for cost in costs
    ]
