"""
Central version constant for as3ts.
"""

__version__ = "0.4.0"
