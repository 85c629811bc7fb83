# flake8: noqa
from setuptools import setup, find_packages
from pathlib import Path

long_description = (Path(__file__).parent / "README.md").read_text()

exec(open("dartqc/version.py").read())

setup(
    name="dartqc",
    version=__version__,
    description="Locus quality filters and threshold reports for DArT SNP and presence/absence data",
    author="dartqc developers",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
        "dask[array]>=2021.11.2",
        "xarray",
        "statsmodels",
        "structlog",
        "fire",
        "pyreadr",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["dartqc=dartqc.cli:cli"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Intended Audience :: Science/Research",
    ],
    long_description=long_description,
    long_description_content_type="text/markdown",
)
