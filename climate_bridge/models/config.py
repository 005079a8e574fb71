"""
Pydantic models for bridge configuration.
Matches the structure of the add-on options.json.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class BridgeConfig(BaseModel):
    """Top-level bridge configuration."""
    ha_url: str = Field(..., min_length=1)  # Hub base URL, e.g. http://supervisor/core
    climate: str = Field(..., min_length=1)  # Target climate entity id
    token: str = ""
    name: str = "Air Conditioner"
    poll_interval: int = Field(default=5000, gt=0)  # Milliseconds

    # HomeKit identity
    homekit_username: str = Field(
        default="CC:22:3D:E3:CE:30",
        pattern=r"^([0-9A-Fa-f]{2}:){5}[0-9A-Fa-f]{2}$"
    )
    homekit_pincode: str = Field(default="031-45-154", pattern=r"^\d{3}-\d{2}-\d{3}$")
    homekit_port: int = Field(default=51826, gt=0, lt=65536)
    persist_path: str = "/data/homekit"

    # Status API
    status_port: Optional[int] = Field(default=8099, gt=0, lt=65536)
    api_key: Optional[str] = None

    sim_mode: bool = False

    @field_validator("ha_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval / 1000

    class Config:
        """Pydantic config."""
        # Add-on options may carry keys this bridge does not read
        extra = "allow"
