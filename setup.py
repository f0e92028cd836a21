"""setuptools setup for BreathFlow.

Install for development:
    pip install -e ".[test]"
    pytest
"""

from setuptools import setup, find_packages

setup(
    name="BreathFlow",
    version="0.1.0",
    description="Guided breathing session engine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=["PyQt6>=6.4"],
    extras_require={"test": ["pytest>=7"]},
)
