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

import attrs
import pytest

from cat_estimator.repetition_code import (
    BeverlandEtAlRotationCost,
    ConfigurationSearch,
    LogicalProgramSummary,
    MinimizeQubits,
    MinimizeRuntime,
    MinimizeSpacetimeVolume,
    NoFeasibleConfiguration,
    pareto_frontier,
    partition,
    PhysicalCostModel,
    PhysicalParameters,
    RepetitionCode,
    SearchBounds,
    WeightedObjective,
)

PARAMS = PhysicalParameters.make_gouzien_et_al()
QEC = RepetitionCode.make_gouzien_et_al()


def _search(program: LogicalProgramSummary, total: float, **kwargs) -> ConfigurationSearch:
    budget = partition(total, program)
    magic_count = program.magic_count(BeverlandEtAlRotationCost, budget.synthesis)
    cost_model = PhysicalCostModel.from_program(program, magic_count, PARAMS, QEC)
    return ConfigurationSearch(cost_model=cost_model, error_budget=budget, **kwargs)


PROGRAM = LogicalProgramSummary(logical_qubit_count=10, t_count=1000)

OBJECTIVES = [
    MinimizeQubits(),
    MinimizeRuntime(),
    MinimizeSpacetimeVolume(),
    WeightedObjective(qubit_weight=1, runtime_weight=1e4),
]


@pytest.mark.parametrize('objective', OBJECTIVES)
@pytest.mark.parametrize(
    'program,total',
    [
        (PROGRAM, 1e-3),
        (LogicalProgramSummary(logical_qubit_count=4, ccz_count=200, cx_count=1000), 1e-2),
        (LogicalProgramSummary(logical_qubit_count=30, algorithmic_depth=10**6), 1e-4),
    ],
)
def test_monotone_matches_exhaustive(program, total, objective):
    search = _search(program, total, objective=objective)
    best = search.best()
    assert best == search.best(strategy='exhaustive')
    assert best.is_feasible(search.error_budget)


@pytest.mark.slow
@pytest.mark.parametrize('objective', OBJECTIVES)
def test_monotone_matches_exhaustive_large(objective):
    program = LogicalProgramSummary(
        logical_qubit_count=100, t_count=20_000, ccz_count=10_000, rotation_count=1000
    )
    search = _search(program, 1e-2, objective=objective)
    assert search.best() == search.best(strategy='exhaustive')


def test_returned_configuration_is_best_feasible():
    search = _search(PROGRAM, 1e-3)
    best = search.best()
    feasible = []
    for candidate in search.candidate_space():
        cost = search.cost_model.evaluate(candidate)
        if cost.is_feasible(search.error_budget):
            feasible.append(cost)
    objective = search.objective
    assert objective(best.physical_qubits, best.runtime_ns) == min(
        objective(c.physical_qubits, c.runtime_ns) for c in feasible
    )


def test_thread_pool_and_determinism():
    search = _search(PROGRAM, 1e-3)
    best = search.best()
    assert best == search.best()
    assert best == search.best(max_workers=4)
    assert search.frontier() == search.frontier(max_workers=4)


def test_no_feasible_configuration():
    search = _search(PROGRAM, 1e-3, bounds=SearchBounds(max_code_distance=3))
    result = search.best()
    assert isinstance(result, NoFeasibleConfiguration)
    assert not result
    assert result.n_candidates_evaluated > 0
    assert result.n_factories_pruned == 4
    assert 'distance 3' in result.reason


def test_unknown_strategy():
    with pytest.raises(ValueError):
        _search(PROGRAM, 1e-3).best(strategy='greedy')


def test_frontier():
    search = _search(PROGRAM, 1e-3)
    frontier = search.frontier()
    assert len(frontier) >= 1
    qubits = [c.physical_qubits for c in frontier]
    runtimes = [c.runtime_ns for c in frontier]
    assert qubits == sorted(qubits)
    assert all(a > b for a, b in zip(runtimes, runtimes[1:]))
    assert all(c.is_feasible(search.error_budget) for c in frontier)

    fewest_qubits = attrs.evolve(search, objective=MinimizeQubits()).best()
    fastest = attrs.evolve(search, objective=MinimizeRuntime()).best()
    assert frontier[0].physical_qubits == fewest_qubits.physical_qubits
    assert frontier[-1].runtime_ns == fastest.runtime_ns


@attrs.frozen
class _Point:
    physical_qubits: int
    runtime_ns: float


def test_pareto_frontier():
    points = [_Point(10, 5.0), _Point(5, 9.0), _Point(10, 4.0), _Point(7, 9.0), _Point(12, 4.0)]
    assert pareto_frontier(points) == [_Point(5, 9.0), _Point(10, 4.0)]
    assert pareto_frontier([]) == []

    duplicates = [_Point(5, 1.0), _Point(5, 1.0)]
    assert pareto_frontier(duplicates) == [_Point(5, 1.0)]
