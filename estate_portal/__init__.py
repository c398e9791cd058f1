"""
Estate Portal: public listings and admin back-office for a real-estate investment company.
"""

__version__ = "1.0.0"
