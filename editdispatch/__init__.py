"""editdispatch: keep a registry of editors and open files with them."""

__version__ = "0.1.0"
