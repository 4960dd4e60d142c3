"""Configuration for the governance processor."""

from governance_processor.config.processor_config import (
    ENVIRONMENT_VARIABLES,
    PersisterType,
    ProcessorConfig,
    mask_database_url,
    usage,
)

__all__: list[str] = [
    "ENVIRONMENT_VARIABLES",
    "PersisterType",
    "ProcessorConfig",
    "mask_database_url",
    "usage",
]
