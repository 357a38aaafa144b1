"""dibber: SQL buffer splitting and row-edit statement generation."""

__version__ = "0.3.0"
