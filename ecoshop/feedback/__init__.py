"""Product ratings and comments."""
