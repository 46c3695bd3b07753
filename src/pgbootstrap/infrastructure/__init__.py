"""Infrastructure layer — store writes, data-directory files, binaries."""
