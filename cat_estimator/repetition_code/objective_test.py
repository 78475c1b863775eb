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
    MinimizeQubits,
    MinimizeRuntime,
    MinimizeSpacetimeVolume,
    WeightedObjective,
)

HOUR_NS = 3600 * 1e9


def test_objective_values():
    assert MinimizeQubits()(1000, HOUR_NS) == 1000
    assert MinimizeRuntime()(1000, HOUR_NS) == HOUR_NS
    assert MinimizeSpacetimeVolume()(1000, 2 * HOUR_NS) == pytest.approx(2000)
    assert WeightedObjective(qubit_weight=2, runtime_weight=10)(1000, HOUR_NS) == pytest.approx(
        2010
    )


@pytest.mark.parametrize(
    'objective',
    [MinimizeQubits(), MinimizeRuntime(), MinimizeSpacetimeVolume(), WeightedObjective(0, 1)],
)
def test_objectives_are_monotone(objective):
    assert objective(100, 1e9) <= objective(101, 1e9)
    assert objective(100, 1e9) <= objective(100, 2e9)


def test_weighted_objective_validation():
    with pytest.raises(ValueError):
        _ = WeightedObjective(qubit_weight=-1)
