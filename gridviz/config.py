"""
Backend configuration.

Pydantic models with defaults that match the browser app, optionally
overridden from a YAML file named by the GRIDVIZ_CONFIG environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

CONFIG_ENV_VAR = "GRIDVIZ_CONFIG"


class GridDefaults(BaseModel):
    """Board shown when the page first loads."""
    rows: int = Field(20, gt=0, description="Number of grid rows")
    cols: int = Field(40, gt=0, description="Number of grid columns")
    start: Tuple[int, int] = Field((10, 5), description="Start cell (row, col)")
    goal: Tuple[int, int] = Field((10, 35), description="Goal cell (row, col)")

    @model_validator(mode="after")
    def validate_endpoints(self) -> "GridDefaults":
        for label, (row, col) in (("start", self.start), ("goal", self.goal)):
            if not (0 <= row < self.rows and 0 <= col < self.cols):
                raise ValueError(f"{label} {(row, col)} outside {self.rows}x{self.cols} grid")
        return self


class PlaybackConfig(BaseModel):
    visit_delay_ms: int = Field(10, description="Delay per visited cell (ms)")
    path_delay_ms: int = Field(40, description="Delay per path cell (ms)")

    @field_validator("visit_delay_ms", "path_delay_ms")
    @classmethod
    def validate_delay(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Delay must be >= 0: {v}")
        return v


class ApiConfig(BaseModel):
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    max_visited: int = Field(50000, ge=0, description="Default cap on returned visited cells")
    max_cells: int = Field(10000, gt=0, description="Largest rows*cols accepted per request")
    host: str = "127.0.0.1"
    port: int = Field(8000, gt=0, lt=65536)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_dir: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v


class AppConfig(BaseModel):
    grid: GridDefaults = Field(default_factory=GridDefaults)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Path) -> AppConfig:
    """
    Load configuration from a YAML file.

    Raises:
        FileNotFoundError: the file does not exist
        yaml.YAMLError: the file is not valid YAML
        ValueError: the file is empty
        ValidationError: the values fail validation
    """
    config_path = Path(config_path)
    if not config_path.exists():
        error_msg = f"Config file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("Invalid YAML in {}: {}", config_path, e)
        raise

    if raw_config is None:
        error_msg = f"Config file is empty: {config_path}"
        logger.error(error_msg)
        raise ValueError(error_msg)

    try:
        config = AppConfig(**raw_config)
    except ValidationError as e:
        logger.error("Config validation failed for {}", config_path)
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            logger.error("  {}: {}", field_path, error["msg"])
        raise

    logger.info("Loaded config: {}", config_path)
    return config


def get_config() -> AppConfig:
    path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return AppConfig()
    return load_config(Path(path))
