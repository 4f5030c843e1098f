"""Controllers coordinating widgets, models and background workers."""

from .image_loader import ImageLoader
from .main_controller import MainController
from .processing_controller import ProcessingController

__all__ = ["ImageLoader", "MainController", "ProcessingController"]
