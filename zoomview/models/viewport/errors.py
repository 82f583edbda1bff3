class InvalidConfiguration(ValueError):
    """Raised when a scale or factor setting would produce an inverted or empty range."""
