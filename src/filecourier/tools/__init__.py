"""
Tools used by the courier pipeline.

This module contains the directory-tree locator and the HTTP transmitter.
"""
