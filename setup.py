# setup.py - Build grid_diagrams
from setuptools import setup, find_packages

setup(
    name="grid_diagrams",
    version="0.1.0",
    packages=find_packages(include=["grid_diagrams", "grid_diagrams.*"]),
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
)
