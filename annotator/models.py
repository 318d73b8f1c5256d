"""Pydantic models for the image generation API.

The two percentage sets are typed records with exactly the expected keys.
Field declaration order is the iteration order used when picking the
highest value, so it must not be rearranged casually.
"""

from __future__ import annotations

from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Percentage = Union[int, float]


class PercentageSet(BaseModel):
    """Base class for a fixed set of named percentages.

    Values are not clamped: negative numbers or values above 100 are
    rendered as given.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    def as_mapping(self) -> Dict[str, Percentage]:
        """Return the values keyed by category, in declaration order."""
        return self.model_dump()


class AnimalData(PercentageSet):
    lobo: Percentage
    aguia: Percentage
    tubarao: Percentage
    gato: Percentage


class BrainData(PercentageSet):
    pensante: Percentage
    atuante: Percentage
    razao: Percentage
    emocao: Percentage


class GenerateImagesRequest(BaseModel):
    """Body of ``POST /api/generate-images``."""

    animalData: AnimalData
    brainData: BrainData


class GenerateImagesResponse(BaseModel):
    """Both annotated images as ``data:image/png;base64,...`` URIs."""

    animalImage: str
    brainImage: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = Field(default=None)


class HealthResponse(BaseModel):
    status: str
    version: str
