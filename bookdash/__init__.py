"""Book inventory dashboard backed by a REST books collection."""
