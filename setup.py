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

import re
from typing import List

from setuptools import find_packages, setup


def version_number(path: str) -> str:
    """Get the version number from the package directory"""
    exp = r'__version__[ ]*=[ ]*["|\']([\d]+\.[\d]+\.[\d]+[\.dev[\d]*]?)["|\']'
    version_re = re.compile(exp)

    with open(path, "r") as f:
        version = version_re.search(f.read()).group(1)

    return version


def requirements(path: str) -> List[str]:
    with open(path) as f:
        return [r.strip() for r in f.readlines() if r.strip() and not r.startswith('#')]


def main() -> None:
    version_path = "cat_estimator/_version.py"
    __version__ = version_number(version_path)
    if __version__ is None:
        raise ValueError("Version information not found in " + version_path)

    with open("README.md") as f:
        long_description = f.read()

    setup(
        name="cat-resource-estimator",
        version=__version__,
        description="Physical resource estimation for cat-qubit quantum processors.",
        long_description=long_description,
        long_description_content_type="text/markdown",
        install_requires=requirements("dev_tools/requirements/deps/runtime.txt"),
        extras_require={"test": requirements("dev_tools/requirements/deps/pytest.txt")},
        python_requires=">=3.9",
        license="Apache 2",
        packages=find_packages(include=["cat_estimator", "cat_estimator.*"]),
    )


main()
