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

import numpy as np
import pytest

from cat_estimator.repetition_code import (
    BeverlandEtAlRotationCost,
    CandidateSpace,
    ErrorBudget,
    GOUZIEN_ET_AL_TOFFOLI_FACTORIES,
    LogicalProgramSummary,
    PhysicalCostModel,
    PhysicalParameters,
    RepetitionCode,
)

PARAMS = PhysicalParameters.make_gouzien_et_al()
QEC = RepetitionCode.make_gouzien_et_al()


def _cost_model(program: LogicalProgramSummary) -> PhysicalCostModel:
    magic_count = program.magic_count(BeverlandEtAlRotationCost, 0.0)
    return PhysicalCostModel.from_program(program, magic_count, PARAMS, QEC)


def test_from_program():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=10, t_count=1000))
    assert cost_model.n_layout_qubits == 16
    assert cost_model.logical_depth == 5050
    assert cost_model.n_magic_states == 500


def test_clifford_candidate():
    cost_model = _cost_model(
        LogicalProgramSummary(logical_qubit_count=10, algorithmic_depth=10_000)
    )
    space = CandidateSpace.from_cost_model(cost_model, 0.0)
    cost = cost_model.evaluate(space.candidate(11, None, 0))
    assert cost.data_qubits == 16 * 21
    assert cost.factory_qubits == 0
    assert cost.routing_qubits == 2 * (3 * 16 - 1)
    assert cost.physical_qubits == cost.data_qubits + cost.routing_qubits
    assert cost.n_logical_cycles == 10_000
    assert cost.logical_cycle_time_ns == 500 * cost.code_parameter.distance
    assert cost.runtime_ns == 10_000 * cost.logical_cycle_time_ns
    assert cost.factory_error == 0
    np.testing.assert_allclose(cost.data_error, 16 * QEC.logical_error_rate(11, PARAMS, 10_000))


def test_candidate_with_factories():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=10, t_count=1000))
    factory = GOUZIEN_ET_AL_TOFFOLI_FACTORIES[4]
    space = CandidateSpace.from_cost_model(cost_model, 5e-4)

    one = cost_model.evaluate(space.candidate(9, factory, 1))
    three = cost_model.evaluate(space.candidate(9, factory, 3))
    assert one.factory_qubits == factory.n_physical_qubits()
    assert three.factory_qubits == 3 * factory.n_physical_qubits()
    assert three.routing_qubits - one.routing_qubits == 2 * 6 * 2
    assert one.factory_error == three.factory_error == pytest.approx(500 * 7e-7)

    assert one.n_logical_cycles >= cost_model.logical_depth
    assert three.n_logical_cycles <= one.n_logical_cycles
    assert three.data_error <= one.data_error
    assert one.runtime_ns == pytest.approx(
        max(5050, np.ceil(500 * factory.duration_ns(PARAMS) / one.logical_cycle_time_ns))
        * one.logical_cycle_time_ns
    )


def test_runtime_lower_bound():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=10, t_count=1000))
    factory = GOUZIEN_ET_AL_TOFFOLI_FACTORIES[6]
    space = CandidateSpace.from_cost_model(cost_model, 5e-4)
    bounds = []
    for d in space.code_distances:
        candidate = space.candidate(d, factory, 2)
        cost = cost_model.evaluate(candidate)
        bound = cost_model.runtime_lower_bound_ns(candidate)
        assert bound <= cost.runtime_ns < bound + cost.logical_cycle_time_ns
        assert cost_model.physical_qubits(candidate) == cost.physical_qubits
        bounds.append(bound)
    assert np.all(np.diff(bounds) >= 0)


def test_feasibility():
    cost_model = _cost_model(LogicalProgramSummary(logical_qubit_count=10, t_count=1000))
    factory = GOUZIEN_ET_AL_TOFFOLI_FACTORIES[4]
    space = CandidateSpace.from_cost_model(cost_model, 5e-4)
    budget = ErrorBudget(logical=5e-4, factory=5e-4)
    feasible = [
        cost_model.evaluate(space.candidate(d, factory, 1)).is_feasible(budget)
        for d in space.code_distances
    ]
    assert not feasible[0]
    assert feasible[-1]
    # Once feasible, larger distances stay feasible.
    assert feasible == sorted(feasible)
