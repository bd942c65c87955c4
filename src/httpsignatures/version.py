"""Version information for the httpsignatures package"""

__version__ = "0.1.0"
