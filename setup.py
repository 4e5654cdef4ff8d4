#!/usr/bin/env python
# -*- encoding: utf-8 -*-

"""Setup Module for Custos, document store persistence for user identities"""

import io
import re

from os.path import dirname, join

from setuptools import find_packages, setup


def read(*names, **kwargs):
    """Helper method to read files"""
    return io.open(
        join(dirname(__file__), *names),
        encoding=kwargs.get("encoding", "utf8"),
    ).read()


marshmallow_requires = ["marshmallow>=3.15.0"]

install_requires = marshmallow_requires + [
    "inflection>=0.5.1",
]

testing_requires = [
    "mock==5.1.0",
    "pytest-asyncio>=0.21.1",
    "pytest-cov>=4.1.0",
    "pytest-mock==3.12.0",
    "pytest>=7.4.3",
]

dev_requires = testing_requires + [
    "black>=23.11.0",
    "coverage>=7.3.2",
    "isort>=5.12.0",
    "nox>=2023.4.22",
    "twine>=4.0.2",
]

setup(
    name="custos",
    version="0.1.0",
    license="BSD 3-Clause License",
    description="Document store persistence for user identities",
    long_description="%s\n%s"
    % (
        read("README.rst"),
        re.sub(":[a-z]+:`~?(.*?)`", r"``\1``", read("CHANGELOG.rst")),
    ),
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.11",
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Database",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords=["identity", "authentication", "document database", "unit of work"],
    install_requires=install_requires,
    extras_require={
        "test": testing_requires,
        "tests": testing_requires,
        "testing": testing_requires,
        "dev": dev_requires,
        "all": dev_requires,
    },
)
