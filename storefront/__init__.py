"""
Storefront Backend
REST API for the Rodelas lifestyle storefront and admin back-office
"""
__version__ = "1.0.0"
