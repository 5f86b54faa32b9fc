from .feature_matching import *

__all__ = [
    # Feature Matching
    'Detector',
    'Matcher',
    'MatchHandler'
]
