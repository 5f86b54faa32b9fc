from abc import ABC, abstractmethod

from feature_match.domain.entities.pipeline_config import PipelineConfig


class IConfigRepository(ABC):
    @abstractmethod
    def load(self) -> PipelineConfig:
        pass

    @abstractmethod
    def save(self, config: PipelineConfig) -> str:
        pass
