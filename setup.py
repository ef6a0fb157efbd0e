#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="batchwhois",
    version="1.0.0",
    description="Batch domain availability scanner with numeric pattern filters",
    author="batchwhois Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "dnspython",
        "requests",
        "tqdm",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "batchwhois=batchwhois.cli:main",
        ],
    },
    python_requires=">=3.9",
)
