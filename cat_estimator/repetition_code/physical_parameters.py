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
from typing import Any, Mapping, Tuple

import attrs
from attrs import field, frozen, validators


@frozen
class PhysicalParameters:
    r"""The physical properties of a cat-qubit quantum computer.

    Cat qubits are characterized by the ratio $\kappa_1 / \kappa_2$ between their one- and
    two-photon loss rates, which sets the intrinsic error rate, and by their mean photon
    number $|\alpha|^2$. The mean photon number is not a property of the hardware: it is an
    operating point chosen by the cost model. Larger cats exponentially suppress bit flips
    at the price of more phase flips.

    The hardware error model per physical operation is
    $$
    p_Z = (|\alpha|^2)^{0.86} \frac{\kappa_1}{\kappa_2} \qquad
    p_{CX} = 0.5 e^{-2 |\alpha|^2}
    $$
    where $p_Z$ is the phase-flip rate entering the repetition-code suppression law and
    $p_{CX}$ is the bit-flip probability of a CX gate.

    Attributes:
        k1_k2: The ratio $\kappa_1 / \kappa_2$ of one- to two-photon loss rates.
        t_kappa2_ns: The time $1 / \kappa_2$ in nanoseconds. This sets the gate speed.
        steps_per_round: The number of $1 / \kappa_2$ time steps in one round of the
            repetition code.
        cx_bit_flip_prefactor: Prefactor of the CX bit-flip probability.
        cx_bit_flip_exponent: Exponent coefficient of the CX bit-flip probability.
        photon_number_exponent: Scaling of the phase-flip rate with $|\alpha|^2$.
        min_alpha_sq: Smallest (integer) mean photon number considered.
        max_alpha_sq: Largest (integer) mean photon number considered.
        adiabatic_cx_steps: The number of time steps of the adiabatic CX used in the
            magic state factories, a gate of duration $89.2 / (\kappa_2 |\alpha|^2)$.

    References:
        [Performance analysis of a repetition cat code architecture: computing 256-bit
        elliptic curve logarithm in 9 hours with 126 133 cat qubits](https://arxiv.org/abs/2302.06639).
        Gouzien et. al. (2023).
    """

    k1_k2: float = field(default=1e-5, repr=lambda x: f'{x:g}', validator=validators.gt(0))
    t_kappa2_ns: float = field(default=100.0, validator=validators.gt(0))
    steps_per_round: int = field(default=5, validator=validators.gt(0))
    cx_bit_flip_prefactor: float = field(default=0.5, validator=validators.ge(0))
    cx_bit_flip_exponent: float = field(default=2.0, validator=validators.gt(0))
    photon_number_exponent: float = field(default=0.86, validator=validators.ge(0))
    min_alpha_sq: int = field(default=1, validator=validators.gt(0))
    max_alpha_sq: int = field(default=30, validator=validators.gt(0))
    adiabatic_cx_steps: float = field(default=89.2, validator=validators.gt(0))

    def __attrs_post_init__(self):
        if self.min_alpha_sq > self.max_alpha_sq:
            raise ValueError(
                f"min_alpha_sq={self.min_alpha_sq} is larger than max_alpha_sq={self.max_alpha_sq}"
            )

    @property
    def round_time_ns(self) -> float:
        """The duration of one round of the repetition code in nanoseconds."""
        return self.steps_per_round * self.t_kappa2_ns

    def alpha_sq_range(self) -> Tuple[int, ...]:
        """The mean photon numbers explored by the cost model, in increasing order."""
        return tuple(range(self.min_alpha_sq, self.max_alpha_sq + 1))

    def phase_flip_rate(self, alpha_sq: float) -> float:
        """The physical phase-flip rate of a cat qubit with mean photon number `alpha_sq`."""
        return alpha_sq**self.photon_number_exponent * self.k1_k2

    def cx_bit_flip_probability(self, alpha_sq: float) -> float:
        """The bit-flip probability of a CX gate between cats with `alpha_sq` photons.

        This was estimated numerically with full process tomography (eq. D8 of the
        reference).
        """
        return self.cx_bit_flip_prefactor * math.exp(-self.cx_bit_flip_exponent * alpha_sq)

    @classmethod
    def make_gouzien_et_al(cls, k1_k2: float = 1e-5) -> 'PhysicalParameters':
        """The physical parameters considered in the Gouzien et. al. reference.

        The magic state factory performances of that reference were precomputed at
        $\\kappa_1 / \\kappa_2 = 10^{-5}$ and $1 / \\kappa_2 = 100$ ns. Changing `k1_k2` is
        supported by the repetition-code model, but the precomputed factories keep their
        reported error rates.
        """
        return cls(k1_k2=k1_k2)

    @classmethod
    def from_dict(cls, profile: Mapping[str, Any]) -> 'PhysicalParameters':
        """Load physical parameters from a hardware profile mapping.

        Missing keys take their default value. Unknown keys are rejected so that a typo
        in a profile does not silently fall back to a default.
        """
        known = {a.name for a in attrs.fields(cls)}
        unknown = sorted(set(profile) - known)
        if unknown:
            raise ValueError(f"Unknown physical parameters: {', '.join(unknown)}")
        return cls(**profile)

    def asdict(self):
        return attrs.asdict(self)
