"""Live implied-volatility surface plotting for Deribit BTC options."""

__version__ = "0.1.0"
__all__ = ["__version__"]