"""ImageProcessing: pick or download a photo and apply simple modifications."""

__version__ = "0.1.0"
