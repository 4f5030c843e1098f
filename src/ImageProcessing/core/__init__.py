"""Image model and modification kernels independent of the Qt layer."""
