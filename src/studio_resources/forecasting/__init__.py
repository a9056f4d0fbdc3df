"""
Forecasting core. Pure functions over in-memory records; no I/O here.
"""
