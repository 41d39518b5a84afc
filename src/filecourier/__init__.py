"""
File Courier - Core Package

Locates named files under a directory tree, displays one of them and
posts the contents of the other to a configured HTTP endpoint.
"""

__version__ = "0.1.0"
__author__ = "File Courier Team"
