from .config import (
    Config,
    ExtractionSettings,
    MonitoringConfig,
    QualityConfig,
    find_config_file,
    settings,
)

__all__ = [
    "Config",
    "ExtractionSettings",
    "MonitoringConfig",
    "QualityConfig",
    "find_config_file",
    "settings",
]
