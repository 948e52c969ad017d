"""
Placement Service Configuration
Environment-based configuration management
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings

from ..core.exceptions import ConfigurationError
from ..core.placement_models import AccuracyThresholds, PlacementTarget


class Settings(BaseSettings):
    """Placement configuration settings"""

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_DIR: Optional[str] = Field(default=None, description="Directory for rotating log files")

    # Accuracy gating
    HORIZONTAL_ACCURACY_THRESHOLD: float = Field(default=5.0, gt=0, description="Max horizontal accuracy in meters")
    VERTICAL_ACCURACY_THRESHOLD: float = Field(default=1.5, gt=0, description="Max vertical accuracy in meters")
    YAW_ACCURACY_THRESHOLD: float = Field(default=3.0, gt=0, description="Max yaw accuracy in degrees")
    STABILIZATION_DURATION: float = Field(default=2.0, gt=0, description="Seconds accuracy must hold before placing")

    # Tick loop
    TICK_RATE_HZ: float = Field(default=60.0, gt=0, description="Placement tick rate")

    # Placement target
    TARGET_LATITUDE: Optional[float] = Field(default=None, ge=-90, le=90, description="Target latitude")
    TARGET_LONGITUDE: Optional[float] = Field(default=None, ge=-180, le=180, description="Target longitude")
    TARGET_ALTITUDE: Optional[float] = Field(default=None, description="Target altitude in meters")
    PROFILE_PATH: Optional[str] = Field(default=None, description="YAML placement profile")

    # Diagnostics
    DIAGNOSTICS_ENABLED: bool = Field(default=False, description="Log pose diagnostics every tick")
    DIAGNOSTICS_INTERVAL: float = Field(default=1.0, ge=0, description="Seconds between diagnostic snapshots")

    class Config:
        env_file = ".env"
        env_prefix = "PLACEMENT_"
        extra = "ignore"

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.TICK_RATE_HZ

    def to_thresholds(self) -> AccuracyThresholds:
        """Build accuracy thresholds for a placement attempt"""
        return AccuracyThresholds(
            max_horizontal=self.HORIZONTAL_ACCURACY_THRESHOLD,
            max_vertical=self.VERTICAL_ACCURACY_THRESHOLD,
            max_yaw=self.YAW_ACCURACY_THRESHOLD,
            required_stable_duration=self.STABILIZATION_DURATION
        )

    def to_target(self) -> Optional[PlacementTarget]:
        """Build the placement target, None when no coordinates are configured"""
        coordinates = (self.TARGET_LATITUDE, self.TARGET_LONGITUDE, self.TARGET_ALTITUDE)
        if all(value is None for value in coordinates):
            return None
        if any(value is None for value in coordinates):
            raise ConfigurationError(
                "TARGET_LATITUDE, TARGET_LONGITUDE and TARGET_ALTITUDE must be set together"
            )
        return PlacementTarget(*coordinates)


# Global settings instance
_settings = None

def get_settings() -> Settings:
    """Get application settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


__all__ = ["Settings", "get_settings"]
