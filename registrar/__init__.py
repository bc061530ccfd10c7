"""Name registrar service - leased name ownership with fee accounting."""

__version__ = "0.1.0"
