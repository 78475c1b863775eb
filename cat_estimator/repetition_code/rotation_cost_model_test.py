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

import cat_estimator.repetition_code.rotation_cost_model as rcm
from cat_estimator.repetition_code.magic_count import MagicCount

GRADIENT_13 = rcm.PhaseGradientCost(
    bitsize=13, gradient_synthesis=rcm.LogarithmicSynthesisCost(slope=1, offset=1)
)


@pytest.mark.parametrize(
    'model,want',
    [
        (rcm.BeverlandEtAlRotationCost, MagicCount(n_t=7)),
        (rcm.LogarithmicSynthesisCost(slope=0, offset=-3), MagicCount()),
        (GRADIENT_13, MagicCount(n_ccz=11)),
    ],
)
def test_per_rotation(model: rcm.RotationCostModel, want: MagicCount):
    assert model.per_rotation(2**-3) == want


@pytest.mark.parametrize(
    'model,want',
    [(rcm.BeverlandEtAlRotationCost, MagicCount()), (GRADIENT_13, MagicCount(n_t=104))],
)
def test_setup(model: rcm.RotationCostModel, want: MagicCount):
    assert model.setup(2**-3) == want


def test_synthesis_cost():
    # Each rotation within 1e-4 costs ceil(0.53 * log2(1e4) + 5.3) = 13 T gates.
    assert rcm.BeverlandEtAlRotationCost.synthesis_cost(10, 1e-3) == MagicCount(n_t=130)
    assert rcm.BeverlandEtAlRotationCost.synthesis_cost(0, 0.0) == MagicCount()

    seven = rcm.SevenBitPhaseGradientCost.synthesis_cost(100, 0.1)
    assert seven.n_ccz == 500
    assert seven.n_t == 7 * rcm.BeverlandEtAlRotationCost.per_rotation(1e-3 / 7).n_t


@pytest.mark.parametrize('budget', [0, 1, -0.5])
def test_invalid_budget(budget):
    with pytest.raises(ValueError):
        rcm.BeverlandEtAlRotationCost.per_rotation(budget)
    with pytest.raises(ValueError):
        rcm.BeverlandEtAlRotationCost.synthesis_cost(10, budget)
