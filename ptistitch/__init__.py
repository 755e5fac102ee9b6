"""
ptistitch: build Polyend Tracker drum kits from layered samples.
"""
__version__ = "0.1.0"
