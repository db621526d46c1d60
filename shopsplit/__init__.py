"""shopsplit - shopping lists split into groups of target sub-totals."""

__version__ = "1.0.0"
