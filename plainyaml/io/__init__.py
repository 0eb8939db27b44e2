"""Input/output helpers around the string-only codec."""

from .storage import DocumentStore, dump_json

__all__ = ["DocumentStore", "dump_json"]
