"""Domain layer — pure settings, values, and errors. No I/O."""
