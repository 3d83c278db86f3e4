"""
Asset Manager: image storage over interchangeable object store backends.
"""

__version__ = "0.1.0"
