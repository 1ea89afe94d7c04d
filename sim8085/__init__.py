"""Interactive simulator for a subset of the Intel 8085 instruction set."""

__version__ = "0.1.0"

__all__ = ["__version__"]