"""Runnable fieldcopy examples.

This package demonstrates library usage but is not part of the core API.
"""
