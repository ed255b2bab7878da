"""
Read-side result models.

These are never stored; they are what the aggregate and the bulk
commands hand back to callers and print as JSON.
"""

from pydantic import BaseModel, ConfigDict, Field

from .domain_models import DemographicCategory


class TimeToRankView(BaseModel):
    """Minimum total time to reach a terminal rank for one category."""

    category: DemographicCategory
    program_id: str
    terminal_level: int = Field(..., description="Highest level included in the total")
    total_months: int = Field(..., ge=0)
    years: int = Field(..., ge=0)
    months: int = Field(..., ge=0, lt=12)
    display: str = Field(..., description="'{years}y {months}m'")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_total(cls, category: DemographicCategory, program_id: str, terminal_level: int, total_months: int) -> 'TimeToRankView':
        years, months = divmod(total_months, 12)
        return cls(
            category=category,
            program_id=program_id,
            terminal_level=terminal_level,
            total_months=total_months,
            years=years,
            months=months,
            display=f"{years}y {months}m",
        )


class SyncReport(BaseModel):
    """Outcome of a bulk load or bulk teardown run."""

    stage: str
    items: int = Field(0, ge=0, description="Operations applied")
    batches: int = Field(0, ge=0, description="Chunks submitted")

    model_config = ConfigDict(frozen=True)
