# sylburst/config/models.py

"""
Pydantic models for defining the structure and validation of the sylburst configuration (sylburst.toml).
Uses Pydantic V2 syntax.
"""

from pathlib import Path
from typing import List, Optional, Union, Any

from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

# --- Helper Functions ---

def _resolve_path(path: Union[str, Path]) -> Path:
    """Resolves and expands user paths."""
    return Path(path).expanduser().resolve()

# --- Model Definitions ---

class SegmentParams(BaseModel):
    """
    Control parameters of syllable and burst segmentation.

    Defaults were optimised against a corpus of 260 human non-linguistic
    vocalizations (Anikin & Persson, 2017).
    """
    model_config = ConfigDict(validate_assignment=True)

    window_length: float = Field(40.0, gt=0, description="Length of the envelope smoothing window, ms.")
    overlap: float = Field(80.0, description="Overlap of smoothing windows, %. Clamped to [0, 99].")
    shortest_syl: float = Field(40.0, ge=0, description="Minimum syllable length, ms.")
    shortest_pause: Optional[float] = Field(40.0, ge=0, description="Syllables separated by shorter pauses (ms) are merged. None disables merging.")
    syl_thres: float = Field(0.9, ge=0, description="Syllable threshold as a proportion of the mean envelope amplitude.")
    interburst: Optional[float] = Field(None, gt=0, description="Minimum time between bursts, ms. Overrides interburst_mult.")
    interburst_mult: float = Field(1.0, gt=0, description="Multiplier of the median syllable length giving the inter-burst window.")
    burst_thres: float = Field(0.075, ge=0, le=1, description="Minimum burst height as a proportion of the global envelope maximum.")
    peak_to_trough: float = Field(3.0, ge=1, description="Minimum ratio of a burst's height to the trough within the inter-burst window.")
    trough_left: bool = Field(True, description="Compare bursts to the trough on their left.")
    trough_right: bool = Field(False, description="Compare bursts to the trough on their right.")

    @model_validator(mode='after')
    def check_trough_sides(self) -> 'SegmentParams':
        """At least one side must be used for the peak-to-trough comparison."""
        if not (self.trough_left or self.trough_right):
            raise ValueError("At least one of trough_left or trough_right must be True.")
        return self

class DefaultsConfig(BaseModel):
    """Default processing parameters."""
    default_output_format: str = Field("csv", description="Format for saving results when -o has no extension ('csv' or 'json').")

    @field_validator('default_output_format')
    @classmethod
    def check_output_format(cls, value: str) -> str:
        allowed = {"csv", "json"}
        lower_value = value.lower()
        if lower_value not in allowed:
            raise ValueError(f"Invalid output format '{value}'. Must be one of {allowed}")
        return lower_value

class PathsConfig(BaseModel):
    """Configuration for file paths used by sylburst."""
    log_directory: Path = Field(default=Path("./sylburst_logs"), description="Directory for log files.")

    @field_validator('log_directory', mode='before')
    @classmethod
    def resolve_paths_before_validation(cls, value: Any) -> Path:
        """Resolves paths before Pydantic validates them."""
        if isinstance(value, (str, Path)):
            return _resolve_path(value)
        return value

class BatchConfig(BaseModel):
    """Folder processing settings."""
    extensions: List[str] = Field(default_factory=lambda: [".wav"], description="Audio file extensions to process.")
    report_every: int = Field(10, ge=1, description="Report progress every N files.")
    verbose: bool = Field(True, description="Report progress and ETA.")

    @field_validator('extensions')
    @classmethod
    def normalise_extensions(cls, value: List[str]) -> List[str]:
        return [ext.lower() if ext.startswith('.') else f".{ext.lower()}" for ext in value]

class LoggingConfig(BaseModel):
    """Logging configuration settings."""
    log_file_enabled: bool = Field(False, description="Enable/disable persistent file logging.")
    log_filename_template: str = Field("sylburst_run_{timestamp:%Y%m%d_%H%M%S}.log", description="Naming pattern for log files.")
    log_level_file: str = Field("DEBUG", description="Minimum level for file logs (DEBUG, INFO, WARNING, ERROR, CRITICAL).")
    log_format: str = Field("%(asctime)s [%(levelname)-8s] %(name)-30s - %(message)s (%(filename)s:%(lineno)d)", description="Format string for file log entries.")

    @field_validator('log_level_file')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """Validate log level strings."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed_levels:
            raise ValueError(f"Invalid log level '{value}'. Must be one of {allowed_levels}")
        return upper_value

class SylburstConfig(BaseModel):
    """Root configuration model for sylburst."""
    model_config = ConfigDict(
        extra='ignore',
        validate_assignment=True
    )

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    segmentation: SegmentParams = Field(default_factory=SegmentParams)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
