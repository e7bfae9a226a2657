"""Domain layer for the amendment engine.

Pure models, errors and calculations. Nothing in this package performs I/O.
"""
