"""goraph: dependency graphs for Go projects."""

__version__ = "0.1.0"
