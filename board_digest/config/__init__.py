from .loader import ConfigError, DigestConfig, PipelineConfig, load_config

__all__ = [
    "ConfigError",
    "DigestConfig",
    "PipelineConfig",
    "load_config",
]
