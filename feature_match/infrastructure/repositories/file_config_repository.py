import json
from pathlib import Path
from feature_match.application.interfaces.config_repository_interface import IConfigRepository
from feature_match.domain.entities.pipeline_config import PipelineConfig
from feature_match.domain.exceptions import PipelineConfigError


class FileConfigRepository(IConfigRepository):
    def __init__(self, config_path: str = "config/pipelines.json"):
        self.config_path = Path(config_path)

    def load(self) -> PipelineConfig:
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise PipelineConfigError(f"Error reading JSON config {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise PipelineConfigError(f"Config root must be an object: {self.config_path}")
        return PipelineConfig.from_dict(data)

    def save(self, config: PipelineConfig) -> str:
        config.validate()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        return str(self.config_path)
