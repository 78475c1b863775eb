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

"""Physical resource estimation for cat-qubit processors protected by a repetition code.

The estimator translates the logical costs of an algorithm (logical qubits, T, CCZ and
rotation counts) into a physical configuration: the repetition-code distance, the mean
photon number of the cat qubits, and the number of Toffoli magic state factories. The
configuration is chosen to minimize a physical cost while meeting a total error budget.

The models live in the `cat_estimator.repetition_code` submodule. Exceptions are
in `cat_estimator.exception`.
"""

from ._version import __version__
