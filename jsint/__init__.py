"""Integer types limited to the range a JavaScript Number represents exactly."""

__version__ = "0.2.2"
__all__ = ["errors", "bounds", "signed", "unsigned"]