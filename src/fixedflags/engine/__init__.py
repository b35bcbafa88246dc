"""Internal engine for fixedflags."""
