"""
Copyright (C) 2022 Red Hat, Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

         http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""
from setuptools import setup, find_packages

version = "0.4.0"

long_description = """
helm-push-artifactory is a helm plugin to push chart packages into
an Artifactory helm repository. It packages chart directories when
needed, can override the chart version, app version and values before
pushing, and triggers the reindex of the repository afterwards.
"""

setup(
    zip_safe=True,
    name="helm-push-artifactory",
    version=version,
    long_description=long_description,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Utilities",
    ],
    keywords="helm chart artifactory push plugin",
    license="APLv2",
    packages=find_packages(exclude=["ez_setup", "examples", "tests", "tests.*"]),
    package_data={'helmpush': ['schemas/*.json']},
    python_requires=">=3.9",
    test_suite="tests",
    entry_points={
        "console_scripts": ["helm-push-artifactory = helmpush.cmd:cli"],
    },
    install_requires=[
        "click>=8.0.0",
        "requests>=2.25.0",
        "PyYAML>=5.4.1",
        "jsonschema>=4.9.1",
        "urllib3>=1.25.10",
        "semantic-version>=2.10.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "flexmock>=0.11",
        ],
    },
)
