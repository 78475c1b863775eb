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

import numpy as np
import pytest

from cat_estimator.exception import InvalidPhysicalParameters
from cat_estimator.repetition_code import (
    CodeParameter,
    LogicalErrorModel,
    PhysicalParameters,
    RepetitionCode,
)

QEC = RepetitionCode.make_gouzien_et_al()
PARAMS = PhysicalParameters.make_gouzien_et_al()


def test_phase_and_bit_flips():
    assert QEC.phase_flip_probability(3, 1, PARAMS) == pytest.approx(0.056 * (1e-5 / 0.013) ** 2)
    assert QEC.phase_flip_probability(5, 1, PARAMS) == pytest.approx(0.056 * (1e-5 / 0.013) ** 3)
    assert QEC.bit_flip_probability(1, 5, PARAMS) == 0
    assert QEC.bit_flip_probability(3, 1, PARAMS) == pytest.approx(4 * 0.5 * math.exp(-2))

    cp = CodeParameter(distance=3, alpha_sq=1)
    assert QEC.error_per_cycle(cp, PARAMS) == pytest.approx(
        3 * (QEC.phase_flip_probability(3, 1, PARAMS) + QEC.bit_flip_probability(3, 1, PARAMS))
    )


@pytest.mark.parametrize('code_distance', [1, 2, 3, 9, 10, 25, 49])
def test_code_parameter_is_best_operating_point(code_distance):
    cp = QEC.code_parameter(code_distance, PARAMS)
    assert cp.distance % 2 == 1
    assert cp.distance <= code_distance
    assert cp.alpha_sq in PARAMS.alpha_sq_range()

    err = QEC.error_per_cycle(cp, PARAMS)
    for d in range(1, code_distance + 1, 2):
        for alpha_sq in PARAMS.alpha_sq_range():
            assert err <= QEC.error_per_cycle(CodeParameter(d, alpha_sq), PARAMS)


@pytest.mark.parametrize('k1_k2', [1e-5, 1e-4, 1e-3])
def test_error_and_qubits_monotone_in_distance(k1_k2):
    params = PhysicalParameters(k1_k2=k1_k2)
    distances = range(1, 201)
    errors = np.array([QEC.logical_error_rate(d, params) for d in distances])
    qubits = np.array([QEC.resource_cost(d, params).qubits for d in distances])
    cycle_times = np.array([QEC.resource_cost(d, params).cycle_time_ns for d in distances])
    assert np.all(np.diff(errors) <= 0)
    assert np.all(np.diff(qubits) >= 0)
    assert np.all(np.diff(cycle_times) >= 0)


def test_resource_cost():
    assert QEC.physical_qubits(11) == 21
    cost = QEC.resource_cost(11, PARAMS)
    assert cost.qubits == 21
    assert cost.cycle_time_ns == 500 * QEC.code_parameter(11, PARAMS).distance


def test_logical_error_rate_scales_with_cycles():
    rate = QEC.logical_error_rate(7, PARAMS)
    np.testing.assert_allclose(QEC.logical_error_rate(7, PARAMS, n_cycles=1000), 1000 * rate)
    assert LogicalErrorModel(PARAMS, QEC)(7) == rate


@pytest.mark.parametrize('budget', [1e-6, 1e-9, 1e-12, 1e-15])
def test_code_distance_from_budget(budget):
    d = QEC.code_distance_from_budget(PARAMS, budget)
    assert d is not None and d % 2 == 1
    assert QEC.logical_error_rate(d, PARAMS) <= budget
    if d > 1:
        assert QEC.logical_error_rate(d - 2, PARAMS) > budget


def test_code_distance_from_budget_unreachable():
    assert QEC.code_distance_from_budget(PARAMS, 1e-30) is None
    assert QEC.code_distance_from_budget(PARAMS, 1e-6, max_distance=1) is None


def test_above_threshold():
    params = PhysicalParameters(k1_k2=0.013)
    with pytest.raises(InvalidPhysicalParameters):
        QEC.code_parameter(3, params)
    with pytest.raises(InvalidPhysicalParameters):
        QEC.check_below_threshold(params)


def test_invalid_distance():
    with pytest.raises(ValueError):
        QEC.code_parameter(0, PARAMS)
