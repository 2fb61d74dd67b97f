"""Labyrinth schemas for request/response validation."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.grid import GridFormat


class GridPosition(BaseModel):
    """Schema for a position in a labyrinth grid."""

    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)


class LabyrinthBase(BaseModel):
    """Base labyrinth schema with common fields."""

    name: str
    size: str
    difficulty: int = Field(..., ge=1, le=5)
    remarks: str = ""
    solution_length: int
    creator_name: str


class LabyrinthListItem(LabyrinthBase):
    """Schema for labyrinth list item (without grid data)."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    grid_format: GridFormat
    created_at: datetime


class LabyrinthDetail(LabyrinthBase):
    """Schema for detailed labyrinth response with grid data."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    data: str
    width: int
    height: int
    grid_format: GridFormat
    created_at: datetime


class LabyrinthListResponse(BaseModel):
    """Schema for labyrinth list response."""

    labyrinths: list[LabyrinthListItem]
    total: int


class ValidateRequest(BaseModel):
    """Schema for checking maze text without saving it."""

    data: str = Field(..., max_length=1_000_000)
    compact: bool = False
    grid_format: Optional[GridFormat] = None


class LabyrinthCreateRequest(ValidateRequest):
    """Schema for uploading a new labyrinth."""

    name: str = Field(..., min_length=1, max_length=100)
    difficulty: int = Field(..., ge=1, le=5)
    remarks: str = Field("", max_length=2000)
    creator_name: str = Field(..., min_length=1, max_length=50)


class LabyrinthUpdateRequest(BaseModel):
    """Schema for editing labyrinth metadata. Grid data cannot change."""

    name: str = Field(..., min_length=1, max_length=100)
    difficulty: int = Field(..., ge=1, le=5)
    remarks: str = Field("", max_length=2000)
    creator_name: str = Field(..., min_length=1, max_length=50)


class LabyrinthDeleteRequest(BaseModel):
    """Schema for deleting a labyrinth."""

    creator_name: str = Field(..., min_length=1, max_length=50)


class LabyrinthCreateResponse(BaseModel):
    """Schema for a successful upload."""

    id: uuid.UUID
    message: str
    size: str
    grid_format: GridFormat
    solution_length: int


class EndpointsResponse(BaseModel):
    """Schema for start/end positions."""

    start: Optional[GridPosition] = None
    end: Optional[GridPosition] = None
    inferred: bool = False


class SolutionResponse(BaseModel):
    """Schema for a shortest-path solution."""

    solvable: bool
    path: list[GridPosition]
    step_count: int


class ValidateResponse(BaseModel):
    """Schema for a validation report."""

    ok: bool
    reason: Optional[str] = None
    message: Optional[str] = None
    grid_format: Optional[GridFormat] = None
    size: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    data: Optional[str] = None
    endpoints: Optional[EndpointsResponse] = None
    solution: Optional[SolutionResponse] = None


class SolveRequest(BaseModel):
    """Schema for auto-solving a stored labyrinth."""

    grid_format: Optional[GridFormat] = None


class SolveResponse(SolutionResponse):
    """Schema for an auto-solve response."""

    labyrinth_id: uuid.UUID
    grid_format: GridFormat
    start: Optional[GridPosition] = None
    end: Optional[GridPosition] = None
