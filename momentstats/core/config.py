"""Centralized configuration using Pydantic models."""
from pydantic import BaseModel, Field, model_validator
from typing import Literal, Optional
import os
from dotenv import load_dotenv

load_dotenv()


class ArraySettings(BaseModel):
    initial_capacity: int = Field(default=16, ge=1)
    expansion_factor: float = Field(default=2.0, gt=1.0)
    contraction_criterion: float = Field(default=2.5, gt=1.0)
    expansion_mode: Literal["multiplicative", "additive"] = "multiplicative"

    @model_validator(mode="after")
    def _check_contract_expand(self) -> "ArraySettings":
        # Contracting below the expansion factor would thrash
        if self.contraction_criterion < self.expansion_factor:
            raise ValueError(
                f"contraction_criterion ({self.contraction_criterion}) must not be "
                f"smaller than expansion_factor ({self.expansion_factor})"
            )
        return self


class LoggingSettings(BaseModel):
    level: str = "INFO"  # "DEBUG", "INFO", "WARNING", "ERROR"
    log_file: Optional[str] = None


class Settings(BaseModel):
    array: ArraySettings = ArraySettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls) -> "Settings":
        """Load from environment variables (a .env file is read on import)."""
        return cls(
            array=ArraySettings(
                initial_capacity=int(os.getenv("MOMENTSTATS_INITIAL_CAPACITY", "16")),
                expansion_factor=float(os.getenv("MOMENTSTATS_EXPANSION_FACTOR", "2.0")),
                contraction_criterion=float(os.getenv("MOMENTSTATS_CONTRACTION_CRITERION", "2.5")),
                expansion_mode=os.getenv("MOMENTSTATS_EXPANSION_MODE", "multiplicative").lower(),
            ),
            logging=LoggingSettings(
                level=os.getenv("MOMENTSTATS_LOG_LEVEL", "INFO"),
                log_file=os.getenv("MOMENTSTATS_LOG_FILE") or None,
            ),
        )
