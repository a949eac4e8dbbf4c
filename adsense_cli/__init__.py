"""Command-line interface for the AdSense Management API.

Usage:
    adsense --help
    adsense accounts list
    adsense reports generate pub-1234567890123456 ca-pub-1234567890123456
"""

from adsense_cli.main import app

__all__ = ["app"]

__version__ = "0.1.0"
