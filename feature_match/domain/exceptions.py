class FeatureMatchError(Exception):
    """Base class for every error raised by feature_match."""


class UnknownAlgorithmError(FeatureMatchError, ValueError):
    def __init__(self, kind: str, name: str, known):
        self.kind = kind
        self.name = name
        self.known = sorted(known)
        super().__init__(f"Unknown {kind} algorithm '{name}' (expected one of: {', '.join(self.known)})")


class AlgorithmUnavailableError(FeatureMatchError, RuntimeError):
    """The algorithm is known but the installed OpenCV build does not ship it."""


class PipelineConfigError(FeatureMatchError, ValueError):
    pass


class ReferenceNotSetError(FeatureMatchError, RuntimeError):
    pass


class NoMatchResultError(FeatureMatchError, RuntimeError):
    pass
