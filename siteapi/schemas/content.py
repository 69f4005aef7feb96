"""Pydantic schemas for the article, contact and weather endpoints.

Request bodies arrive as plain JSON objects and are validated by the
services, which own the error messages and status codes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TagUpdateResponse(BaseModel):
    message: str = "Tags updated successfully."
    tags: list[int] = Field(default_factory=list, description="Term ids now on the article.")


class ContactResponse(BaseModel):
    message: str = "Contact form submitted and email sent successfully."


class WeatherResponse(BaseModel):
    temperature: float = Field(..., description="Temperature in degrees Celsius.")
    wind: float = Field(..., description="Wind speed in km/h.")
    precipitation: float = Field(..., description="Precipitation in mm.")
    city: str
    cached: bool = False
