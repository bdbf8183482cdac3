"""Setup script for pnm-autocontrast package."""

from setuptools import setup, find_packages

setup(
    name="pnm-autocontrast",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "pyyaml>=6.0",
        "click>=8.0",
        "tqdm>=4.60",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pnm-autocontrast=pnm_autocontrast.cli.autocontrast:main",
            "pnm-autocontrast-batch=pnm_autocontrast.cli.batch:main",
        ],
    },
)
