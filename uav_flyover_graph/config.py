from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PlannerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    buffer: float = Field(default=1.0, ge=0)  # meters added to every obstacle radius
    # "flyover": obstacles only raise the edge threshold; "block": they invalidate it
    obstacle_policy: Literal["flyover", "block"] = "flyover"
    virtualize_flyzones: bool = True


class LogConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
