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
from typing import TYPE_CHECKING

from attrs import field, frozen

from cat_estimator.exception import InfeasibleBudget

if TYPE_CHECKING:
    from .algorithm_summary import LogicalProgramSummary


def _check_total(total: float) -> None:
    if not (math.isfinite(total) and 0 < total < 1):
        raise InfeasibleBudget(f"The total error budget must be in (0, 1), not {total}")


@frozen
class ErrorBudget:
    """The acceptable probability of failure, split among the sources of error.

    Attributes:
        logical: Budget for logical errors on the data patches over the whole run.
        factory: Budget for faulty magic states produced by the factories.
        synthesis: Budget for the approximation error of synthesized rotations.
        total: The total error budget. Defaults to the sum of the parts.
    """

    logical: float = field(repr=lambda x: f'{x:g}')
    factory: float = field(default=0.0, repr=lambda x: f'{x:g}')
    synthesis: float = field(default=0.0, repr=lambda x: f'{x:g}')
    total: float = field(repr=lambda x: f'{x:g}')

    @total.default
    def _total_default(self):
        return self.allocated

    def __attrs_post_init__(self):
        _check_total(self.total)
        for name in ('logical', 'factory', 'synthesis'):
            part = getattr(self, name)
            if not (math.isfinite(part) and part >= 0):
                raise InfeasibleBudget(f"The {name} error budget must be non-negative, not {part}")
        if not self.logical > 0:
            raise InfeasibleBudget("The logical error budget must be positive.")
        if self.allocated > self.total:
            raise InfeasibleBudget(
                f"The error budget parts sum to {self.allocated:g}, "
                f"more than the total {self.total:g}."
            )

    @property
    def allocated(self) -> float:
        """The sum of the parts, in a fixed order."""
        return self.logical + self.factory + self.synthesis

    def check_program(self, program: 'LogicalProgramSummary') -> None:
        """Raise `InfeasibleBudget` if a source of error present in `program` has no budget."""
        if program.has_magic and not self.factory > 0:
            raise InfeasibleBudget("The program uses magic states but the factory budget is 0.")
        if program.rotation_count > 0 and not self.synthesis > 0:
            raise InfeasibleBudget("The program uses rotations but the synthesis budget is 0.")


def partition(total: float, program: 'LogicalProgramSummary') -> ErrorBudget:
    """Split a total error budget among the sources of error present in `program`.

    The policy is to give an equal share to each present source:

     - logical (data) errors are always present;
     - factory errors are present if the program uses T, CCZ or rotation gates;
     - synthesis errors are present if the program uses rotations.

    A Clifford-only program gets the whole budget for logical errors, a program with T and
    CCZ gates splits it in halves, and a program with rotations in thirds. The shares are
    rounded down so that their floating-point sum never exceeds `total`.

    Raises:
        InfeasibleBudget: If `total` is not in the open interval (0, 1).
    """
    _check_total(total)

    sources = [True, program.has_magic, program.rotation_count > 0]
    share = total / sum(sources)
    while True:
        logical, factory, synthesis = (share if present else 0.0 for present in sources)
        if logical + factory + synthesis <= total:
            break
        share = math.nextafter(share, 0.0)

    return ErrorBudget(logical=logical, factory=factory, synthesis=synthesis, total=total)
