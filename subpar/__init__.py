"""NYC subway feed descriptors, manifest CSV reading and accessibility data."""

__version__ = "0.1.0"