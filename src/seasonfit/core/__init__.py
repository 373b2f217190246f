"""Numerical core of SeasonFit: models, prior estimation and optimization.

Nothing in this package performs I/O, rendering or console output.
"""
