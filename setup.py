import os

from setuptools import find_packages, setup

setup(
    name="validryad",
    version="0.1.0",
    packages=find_packages(include=["validryad", "validryad.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.6,<3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    author="Validryad Contributors",
    description="Composable, path-aware validation of tree-shaped data",
    long_description=open("README.md").read()
    if os.path.exists("README.md")
    else "",
    long_description_content_type="text/markdown",
)
