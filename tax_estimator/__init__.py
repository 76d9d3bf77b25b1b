"""
Tax estimator for self-employed professionals.

Progressive bracket tax computation and safe-harbour quarterly instalment
scheduling.
"""

__version__ = "0.1.0"
