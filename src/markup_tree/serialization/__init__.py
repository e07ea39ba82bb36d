"""Serialization of node trees back into markup text."""

from .serializer import serialize, serialize_end_tag, serialize_start_tag

__all__ = [
    "serialize",
    "serialize_end_tag",
    "serialize_start_tag",
]
