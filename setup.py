#!/usr/bin/env python

from setuptools import setup, find_packages
from pathlib import Path


setup(
    name="cachecases",
    version="0.1.0",
    author="David Kyalo",
    description="Binds generated cache scenarios to test function parameters",
    long_description=Path("README.md").read_text(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Framework :: Pytest",
    ],
    packages=find_packages(include=["cachecases", "cachecases.*"]),
    include_package_data=True,
    python_requires=">=3.9",
    zip_safe=False,
    install_requires=[
        "attrs",
        "blinker",
        "typing-extensions",
    ],
    extras_require={
        "pytest": ["pytest"],
        "tests": ["pytest"],
    },
)
