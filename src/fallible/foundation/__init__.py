"""Foundation layer: error values and configuration."""
