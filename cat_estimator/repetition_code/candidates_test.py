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

import pytest

from cat_estimator.repetition_code import (
    BeverlandEtAlRotationCost,
    CandidateConfiguration,
    CandidateSpace,
    iter_candidates,
    LogicalProgramSummary,
    PhysicalCostModel,
    PhysicalParameters,
    RepetitionCode,
    SearchBounds,
)

PARAMS = PhysicalParameters.make_gouzien_et_al()
QEC = RepetitionCode.make_gouzien_et_al()


def _cost_model(program: LogicalProgramSummary) -> PhysicalCostModel:
    magic_count = program.magic_count(BeverlandEtAlRotationCost, 0.0)
    return PhysicalCostModel.from_program(program, magic_count, PARAMS, QEC)


def test_search_bounds():
    assert SearchBounds().code_distances() == tuple(range(1, 50, 2))
    assert SearchBounds(min_code_distance=4, max_code_distance=9).code_distances() == (5, 7, 9)

    with pytest.raises(ValueError):
        _ = SearchBounds(min_code_distance=2, max_code_distance=2)
    with pytest.raises(ValueError):
        _ = SearchBounds(max_factories=0)


def test_clifford_candidates():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=4, cx_count=10))
    space = CandidateSpace.from_cost_model(cost_model, 0.0, SearchBounds(max_code_distance=9))
    assert space.factory_options == ((None, 0),)
    assert list(space) == [
        CandidateConfiguration(
            code_distance=d,
            factory_replication=0,
            cycles_per_logical_tick=QEC.code_parameter(d, PARAMS).distance,
        )
        for d in (1, 3, 5, 7, 9)
    ]


def test_candidate_space_is_restartable():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=10, t_count=1000))
    space = CandidateSpace.from_cost_model(cost_model, 5e-4)
    candidates = list(space)
    assert candidates == list(space)
    assert len(candidates) == len(space)
    assert len(set(candidates)) == len(candidates)

    assert list(iter_candidates(cost_model, 5e-4)) == candidates


def test_candidate_space_factory_options():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=10, t_count=1000))
    space = CandidateSpace.from_cost_model(cost_model, 5e-4)
    assert space.n_factories_pruned == 4
    assert space.pruned_reason is None
    assert len(space.factory_options) == 11
    for factory, r_max in space.factory_options:
        assert 1 <= r_max <= 500

    for candidate in space:
        assert candidate.factory is not None
        assert 1 <= candidate.factory_replication
        assert candidate.cycles_per_logical_tick <= candidate.code_distance


def test_candidate_space_bounds():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=10, t_count=100_000))
    bounds = SearchBounds(max_factories=2, max_factory_distance=7)
    space = CandidateSpace.from_cost_model(cost_model, 0.5, bounds)
    assert all(r_max <= 2 for _, r_max in space.factory_options)
    assert all(factory.code_distance <= 7 for factory, _ in space.factory_options)


def test_all_factories_pruned():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=10, t_count=1000))
    space = CandidateSpace.from_cost_model(cost_model, 1e-30)
    assert space.factory_options == ()
    assert space.n_factories_pruned == 15
    assert space.pruned_reason
    assert list(space) == []
    assert len(space) == 0
