# file: scripts/__init__.py
"""
Command-line entry points.
"""
