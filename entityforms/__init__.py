"""List-and-create record forms backed by a remote record service."""

__version__ = "0.1.0"
