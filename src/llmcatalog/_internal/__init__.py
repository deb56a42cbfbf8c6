"""Internal building blocks not intended for direct import by applications."""
