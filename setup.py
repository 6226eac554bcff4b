# setup.py
from setuptools import setup, find_packages

setup(
    name="mathgen",
    version="0.1.0",
    description="Parameterized math-problem generators with step-by-step solutions",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "sympy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mathgen = mathgen.cli:main",
        ],
    },
)
