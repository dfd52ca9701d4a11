"""
Configuration for the image access layer.

Settings are read from the environment (prefix ``IMAGE_ACCESS_``, nested
groups separated by ``__``), e.g.::

    IMAGE_ACCESS_SYSTEM__LOG_LEVEL=DEBUG
    IMAGE_ACCESS_ACCESS__COMPARE_TOLERANCE=1e-3
"""

import logging
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from image_access.constants import CompareConstants, RenderConstants
from image_access.enums import DegenerateRangePolicy

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class SystemSettings(BaseModel):
    """Process-wide settings"""

    log_level: str = Field(default="INFO", description="Root logging level")


class AccessSettings(BaseModel):
    """Defaults used by image access operations when the caller passes none"""

    compare_tolerance: float = Field(
        default=CompareConstants.DEFAULT_TOLERANCE,
        ge=0,
        description="Absolute tolerance for element-wise image comparison",
    )
    normalization_tolerance: float = Field(
        default=CompareConstants.DEFAULT_NORMALIZATION_TOLERANCE,
        ge=0,
        description="Tolerance on the ratio when probing for a normalization error",
    )
    visualize_decimals: int = Field(
        default=RenderConstants.DEFAULT_DECIMALS,
        ge=0,
        description="Maximal number of decimals printed by visualize()",
    )
    degenerate_range: DegenerateRangePolicy = Field(
        default=DegenerateRangePolicy.ZERO,
        description="Behaviour of normalize()/to_uint8() on constant images (zero/raise)",
    )


class Settings(BaseSettings):
    """Top-level settings object"""

    model_config = SettingsConfigDict(
        env_prefix="IMAGE_ACCESS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    system: SystemSettings = Field(default_factory=SystemSettings)
    access: AccessSettings = Field(default_factory=AccessSettings)


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance"""
    return Settings()


def configure_logging(settings: Settings = None) -> None:
    """
    Configure root logging from settings.

    The level is applied to the root logger even when handlers were already
    installed and basicConfig() leaves them alone. Unknown level names fall
    back to INFO.

    Args:
        settings: Settings to use, defaults to get_settings()
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.system.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
