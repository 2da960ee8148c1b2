"""Score tables, a castle maze game, a disjoint set and a paged data file."""

__version__ = "0.1.0"