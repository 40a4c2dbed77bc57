# setup.py
from setuptools import setup, find_packages

setup(
    name="emover",
    version="1.0.0",
    description="Emoji Remover - Remove emojis from files",
    author="emover Team",
    packages=find_packages(include=["emover", "emover.*"]),
    package_data={"emover": ["schemas/*.json"]},
    python_requires=">=3.8",
    install_requires=[
        "ruamel.yaml",
        "pydantic>=2.0",
        "click",
        "jsonschema",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "emover = emover.cli.cli:cli",
        ],
    },
)
