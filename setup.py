# setup.py
from setuptools import setup, find_packages

setup(
    name="pricetracker",
    version="0.1.0",
    description="Concurrency-safe in-memory item price store with an HTTP front end",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "typer>=0.9.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "rich>=10.0.0",
        "tomli>=1.1.0",
        "fastapi>=0.100.0",
        "uvicorn>=0.20.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24",
        ],
    },
    entry_points={
        "console_scripts": [
            "pricetrack=pricetracker.cli:app",
        ],
    },
)
