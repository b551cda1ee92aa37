import re
from pathlib import Path

from setuptools import setup

# Read the version without importing the package, whose dependencies may not be installed yet
__version__ = re.search(
    r'^__version__ = "([^"]+)"', (Path(__file__).parent / "fieldlog" / "__init__.py").read_text(), re.M
).group(1)

setup(
    name="fieldlog",
    long_description="fieldlog is a structured logging facade: named and sensitive fields, "
    "pluggable sinks and optional Sentry error reporting.",
    version=__version__,
    packages=[
        "fieldlog",
    ],
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0.3,<9.0.0",
        "pyserde>=0.12.0",
        "beartype>=0.17.0,<1.0.0",
        "sentry-sdk>=2.0.0,<3.0.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
        ],
    },
    entry_points="""
        [console_scripts]
        fieldlog=fieldlog.cli:cli
    """,
)
