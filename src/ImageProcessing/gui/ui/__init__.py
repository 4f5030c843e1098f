"""Qt widgets, models, controllers and workers of the main window."""
