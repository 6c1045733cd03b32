"""
finsight: forecasting and alerting core for a personal-finance tracker.
"""

__version__ = "1.0.0"
