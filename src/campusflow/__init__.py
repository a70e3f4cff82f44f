"""
Campus Flow - personal activity registry

Campus Flow logs timed activities against categories, keeps them in a single
persisted registry snapshot, and derives workload and work/life balance views.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
