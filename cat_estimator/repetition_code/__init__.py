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
"""Models of a cat-qubit processor protected by a repetition code.

The physical costs of an algorithm are found by `estimate`, which searches for the
configuration minimizing an `Objective` under an error budget.
"""

# isort:skip_file

from .physical_parameters import PhysicalParameters
from .qec_scheme import CodeParameter, LogicalErrorModel, RepetitionCode, ResourceCost
from .magic_count import MagicCount
from .rotation_cost_model import (
    BeverlandEtAlRotationCost,
    LogarithmicSynthesisCost,
    PhaseGradientCost,
    RotationCostModel,
    SevenBitPhaseGradientCost,
)
from .algorithm_summary import LogicalProgramSummary
from .error_budget import ErrorBudget, partition
from .magic_state_factory import MagicStateFactory
from .toffoli_factory import GOUZIEN_ET_AL_TOFFOLI_FACTORIES, ToffoliFactory
from .multi_factory import MultiFactory
from .factory_model import (
    FactoryRequirement,
    factory_requirement,
    feasible_factories,
    min_factories_for_time,
)
from .candidates import CandidateConfiguration, CandidateSpace, SearchBounds, iter_candidates
from .objective import (
    MinimizeQubits,
    MinimizeRuntime,
    MinimizeSpacetimeVolume,
    Objective,
    WeightedObjective,
)
from .physical_cost_model import CandidateCost, PhysicalCostModel
from .estimation_result import EstimationResult, NoFeasibleConfiguration
from .search import ConfigurationSearch, pareto_frontier
from .estimate import estimate, estimate_frontier
