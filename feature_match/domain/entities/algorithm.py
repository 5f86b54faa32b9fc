from enum import Enum

from feature_match.domain.exceptions import UnknownAlgorithmError


class FeatureAlgorithm(str, Enum):
    SIFT = "sift"
    SURF = "surf"
    ORB = "orb"
    KAZE = "kaze"
    BRISK = "brisk"

    @property
    def is_binary(self) -> bool:
        """Binary descriptors are bit strings compared with Hamming distance."""
        return self in (FeatureAlgorithm.ORB, FeatureAlgorithm.BRISK)

    @classmethod
    def parse(cls, name: str) -> "FeatureAlgorithm":
        return _parse(cls, "feature", name)


class MatcherAlgorithm(str, Enum):
    FLANN = "flann"
    BF = "bf"

    @classmethod
    def parse(cls, name: str) -> "MatcherAlgorithm":
        return _parse(cls, "matcher", name)


def _parse(enum_cls, kind: str, name):
    if isinstance(name, enum_cls):
        return name
    key = str(name).strip().lower()
    try:
        return enum_cls(key)
    except ValueError:
        raise UnknownAlgorithmError(kind, str(name), [member.value for member in enum_cls]) from None
