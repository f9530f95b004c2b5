"""
lazyiter - Pydantic Models

Configuration and performance-report models shared by the library and its demo.
"""

import logging
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class IterConfig(BaseModel):
    """Library-wide settings"""
    model_config = ConfigDict(validate_assignment=True)

    log_level: str = Field(
        "WARNING",
        description="Level used by setup_logging()",
    )
    tee_reclaim: bool = Field(
        True,
        description="Drop tee cache slots once every live cursor has passed them",
    )
    default_tee_count: int = Field(
        2,
        ge=0,
        description="Number of duplicates tee() returns when n is omitted",
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is a standard logging level name"""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Log level cannot be empty")
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level)


class PerformanceReport(BaseModel):
    """Timing and memory of a single measured operation"""
    operation: str = Field(..., description="Name of the measured operation")
    execution_time_ms: float = Field(..., ge=0, description="Wall time in milliseconds")
    memory_usage_mb: float = Field(..., ge=0, description="Peak traced memory in megabytes")
    success: bool = Field(True, description="Whether the operation completed")
    result_size: Optional[int] = Field(None, description="len() of the result, when it has one")
    error: Optional[str] = Field(None, description="Error message for failed operations")
    timestamp: float = Field(..., description="Unix time the measurement finished")

    def summary_line(self) -> str:
        status = "ok" if self.success else f"failed: {self.error}"
        return (
            f"{self.operation}: {self.execution_time_ms:.2f} ms, "
            f"{self.memory_usage_mb:.3f} MB ({status})"
        )


def report_to_dict(report: PerformanceReport) -> Dict[str, Any]:
    return report.model_dump()
