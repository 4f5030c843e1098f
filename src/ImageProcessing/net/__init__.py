"""Network access helpers."""
