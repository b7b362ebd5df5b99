"""
Entry point for running the trainer as a module.

Usage:
    python -m adaptive_trainer drill
    python -m adaptive_trainer stats
    python -m adaptive_trainer --help
"""
from .cli import main

if __name__ == "__main__":
    main()
