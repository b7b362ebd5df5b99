"""
Setup script for adaptive-trainer.

Adaptive Decision Trainer is a terminal drill player for baseball and
softball game situations. Scenarios answered poorly come back sooner,
scenarios answered well rest longer.

The 'adaptive-trainer' command is the primary entry point.
"""

from setuptools import find_packages, setup

setup(
    name="adaptive-trainer",
    version="1.0.0",
    description="Situational drill trainer with adaptive spaced repetition",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["adaptive_trainer", "adaptive_trainer.*"]),
    package_data={
        "adaptive_trainer": ["data/*.json"],
    },
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "adaptive-trainer=adaptive_trainer.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="baseball softball drills spaced-repetition cli",
)
