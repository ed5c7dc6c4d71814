"""Building blocks for HTTP applications: path cleaning, JSON, log formatting, proxies and redirects."""

__version__ = "0.1.0"