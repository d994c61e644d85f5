"""
MyWebApp: an embedded HTTP server bootstrap (Quart on Hypercorn).
"""

__version__ = "0.0.1"
