"""officedev — capability-segregated office device model."""

__version__ = "0.1.0"
