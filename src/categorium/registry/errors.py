"""File registry errors."""


class RegistryError(Exception):
    """Raised when registry data cannot be loaded."""
