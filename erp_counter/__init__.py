"""ERP document counter engine."""

__version__ = "0.1.0"
