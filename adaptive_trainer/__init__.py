"""
Adaptive Decision Trainer.

Terminal drill practice for baseball and softball game situations, with
spaced repetition follow-up tuned to how well each scenario was answered.
"""

__version__ = "1.0.0"
