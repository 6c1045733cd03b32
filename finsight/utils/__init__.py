"""
Numerical helpers, constants and exceptions.
"""
