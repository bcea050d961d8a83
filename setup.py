"""Setup script for PA10 joint control project."""

from setuptools import find_packages, setup

setup(
    name="pa10-control",
    version="0.1.0",
    description="Tick-driven joint trajectory and angle-pattern controllers for the PA10 manipulator",
    author="PA10 Control Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=2.0.0",
        "scipy>=1.11.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
)
