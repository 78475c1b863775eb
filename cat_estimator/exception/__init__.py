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

"""Exceptions that may be raised while estimating physical resources.

Budget-level and hardware-level problems are raised to the caller. A candidate whose
magic-state factory cannot meet its error target raises `FactoryInfeasible`, which the
configuration search absorbs. Exhausting the search space is not an exception: it is
reported with the `NoFeasibleConfiguration` record from `cat_estimator.repetition_code`.
"""


class EstimationError(ValueError):
    """Base class for errors raised by the resource estimator."""


class InvalidPhysicalParameters(EstimationError):
    """The hardware parameters allow no error suppression at any code distance."""


class InfeasibleBudget(EstimationError):
    """The requested error budget is out of range or inconsistent."""


class FactoryInfeasible(EstimationError):
    """No magic state factory design meets the per-state error target."""


__all__ = ['EstimationError', 'InvalidPhysicalParameters', 'InfeasibleBudget', 'FactoryInfeasible']
