"""
chainfuse: Chainable Functional Utilities with Lazy Iterator Fusion

A fluent wrapper over Python sequences that:
1. Defers array operations into a pipeline instead of running them per call
2. Fuses map/filter/take/drop/while chains into a single pass
3. Short-circuits as soon as a bounded result is complete
4. Falls back to eager evaluation for non-array values and index-aware iteratees
"""

from setuptools import setup, find_packages

setup(
    name="chainfuse",
    version="1.0.0",
    description="Chainable functional utilities with lazy iterator fusion",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="chainfuse contributors",
    python_requires=">=3.10",
    packages=find_packages(include=["chainfuse", "chainfuse.*"]),
    install_requires=[
        "numpy>=1.24.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries",
    ],
)
