from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any

from feature_match.domain.entities.algorithm import FeatureAlgorithm, MatcherAlgorithm
from feature_match.domain.exceptions import PipelineConfigError

DEFAULT_ACCEPT_RATIO = 0.5


@dataclass
class PipelineConfig:
    """Feature/matcher pairs plus the acceptance ratio settings of a run."""

    features: List[str] = field(default_factory=lambda: ["orb"])
    matchers: List[str] = field(default_factory=lambda: ["bf"])
    accept_ratio: float = DEFAULT_ACCEPT_RATIO
    ratio_step: float = 0.05
    max_height: int = 1000

    def validate(self) -> "PipelineConfig":
        """Raise PipelineConfigError on the first invalid field, return self otherwise."""
        if len(self.features) != len(self.matchers):
            raise PipelineConfigError(
                f"features and matchers must pair up: got {len(self.features)} features "
                f"and {len(self.matchers)} matchers"
            )
        if not self.features:
            raise PipelineConfigError("At least one feature/matcher pipeline is required")

        # Unknown names surface as UnknownAlgorithmError
        for name in self.features:
            FeatureAlgorithm.parse(name)
        for name in self.matchers:
            MatcherAlgorithm.parse(name)

        if not 0.0 <= self.accept_ratio <= 1.0:
            raise PipelineConfigError(f"accept_ratio must be within [0, 1], got {self.accept_ratio}")
        if self.ratio_step <= 0:
            raise PipelineConfigError(f"ratio_step must be positive, got {self.ratio_step}")
        if self.max_height <= 0:
            raise PipelineConfigError(f"max_height must be positive, got {self.max_height}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        known = {"features", "matchers", "accept_ratio", "ratio_step", "max_height"}
        unknown = set(data) - known
        if unknown:
            raise PipelineConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        for key in ("features", "matchers"):
            if isinstance(data.get(key), str):
                raise PipelineConfigError(f"'{key}' must be a list of names, got a string")
        try:
            config = cls(
                features=list(data.get("features", ["orb"])),
                matchers=list(data.get("matchers", ["bf"])),
                accept_ratio=float(data.get("accept_ratio", DEFAULT_ACCEPT_RATIO)),
                ratio_step=float(data.get("ratio_step", 0.05)),
                max_height=int(data.get("max_height", 1000)),
            )
        except (TypeError, ValueError) as e:
            raise PipelineConfigError(f"Invalid config value: {e}") from e
        return config.validate()
