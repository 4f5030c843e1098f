"""Graphical user interface for ImageProcessing."""
