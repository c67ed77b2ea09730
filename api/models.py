"""
Pydantic response models for the API.

Field names match the JSON served to the dashboard, so ``completionDate``
stays camelCase here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProgramOut(BaseModel):
    """One row of the Programs sheet."""
    id: str = Field(..., description="Positional id, regenerated on every fetch", examples=["program-1"])
    goals: str = Field("", description="Program goal (free text)")
    tasks: str = Field("", description="Tasks under the goal (free text)")
    team: str = Field("", description="Owning team", examples=["Platform"])
    priority: str = Field("", description="P0, P1, P2, or any other label", examples=["P0"])
    owner: str = Field("", description="Person responsible", examples=["Dana"])
    status: str = Field("", description="Progress status", examples=["In Progress"])
    eta: str = Field("", description="Target date as typed in the sheet", examples=["2025-03-01"])
    completionDate: str = Field("", description="Completion date as typed in the sheet")
    links: str = Field("", description="Related URL")
    notes: str = Field("", description="Free-text notes")


class FilterOptionsOut(BaseModel):
    """Distinct values per categorical field, sorted ascending."""
    teams: list[str] = Field(default_factory=list)
    priorities: list[str] = Field(default_factory=list)
    owners: list[str] = Field(default_factory=list)
    statuses: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body returned with a 5xx status."""
    error: str = Field(..., description="Generic error message", examples=["Failed to fetch programs data"])
