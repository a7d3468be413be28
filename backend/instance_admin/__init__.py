"""
Instance Admin - session-authenticated MongoDB instance administration service.
"""
__version__ = "0.1.0"
