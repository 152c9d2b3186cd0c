"""
auclimate: Australian City Climate Trend Report.

This package loads daily rainfall and temperature records for Australian
cities, joins and cleans them, and fits yearly trend regressions.
"""

from importlib.metadata import version

__version__ = version("auclimate")

__all__ = ["__version__"]
