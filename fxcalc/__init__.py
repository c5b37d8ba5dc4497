"""fxcalc: a spread-aware three-field currency calculator."""

__version__ = "0.1.0"
