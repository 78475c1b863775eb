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

from attrs import field, frozen, validators


@frozen
class MagicCount:
    """A count of the non-Clifford resource states consumed by an algorithm.

    Attributes:
        n_t: The number of T states.
        n_ccz: The number of CCZ (Toffoli) states.
    """

    n_t: int = field(default=0, validator=validators.ge(0))
    n_ccz: int = field(default=0, validator=validators.ge(0))

    def __add__(self, other: 'MagicCount') -> 'MagicCount':
        if not isinstance(other, MagicCount):
            raise TypeError(f"Can only add other `MagicCount` objects, not {other}")
        return MagicCount(n_t=self.n_t + other.n_t, n_ccz=self.n_ccz + other.n_ccz)

    def __mul__(self, other: int) -> 'MagicCount':
        return MagicCount(n_t=self.n_t * other, n_ccz=self.n_ccz * other)

    def __rmul__(self, other: int) -> 'MagicCount':
        return self.__mul__(other)

    def __bool__(self):
        return self.n_t > 0 or self.n_ccz > 0

    def n_toffoli_states(self) -> int:
        """The number of Toffoli magic states needed to enact these gates.

        A CCZ state can be catalyzed into two T states, so T gates are paired.

        References:
            [Efficient magic state factories with a catalyzed |CCZ> to 2|T>
            transformation](https://arxiv.org/abs/1812.01238). Gidney and Fowler (2018).
        """
        return self.n_ccz + (self.n_t + 1) // 2
