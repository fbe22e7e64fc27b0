"""doc-doctor: persistent store for function documentation problems."""

__version__ = "0.1.0"
