"""sitefeed: JSON Feed generation for static sites."""
__version__ = "1.0.0"
