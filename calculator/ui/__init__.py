"""UI components for the calculator."""
