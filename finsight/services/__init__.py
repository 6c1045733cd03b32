"""
Services: prediction engine, prediction cache and alerting.
"""
from .caching import CacheEntry, CacheKeyBuilder, PredictionCache
from .prediction_engine import MODEL_REGISTRY, PredictionEngine

__all__ = [
    "CacheEntry",
    "CacheKeyBuilder",
    "PredictionCache",
    "PredictionEngine",
    "MODEL_REGISTRY",
]
