from .detector import Detector
from .matcher import Matcher
from .match_handler import MatchHandler

__all__ = [
    'Detector',
    'Matcher',
    'MatchHandler'
]
