"""
Feed DTOs - Application Layer

This module defines Data Transfer Objects (DTOs) describing the wire shape of
the hierarchical (JSON) feed. Locations are validated one by one so a bad
entry does not reject the whole document.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, Field, StrictInt, field_validator

FeedCount = Annotated[StrictInt, Field(ge=0)]


class FeedCoordinatesDTO(BaseModel):
    """DTO for the coordinates of a location; values arrive as strings."""

    lat: Optional[Any] = Field(default=None, description="Latitude in degrees")
    long: Optional[Any] = Field(default=None, description="Longitude in degrees")

    model_config = {"json_schema_extra": {"example": {"lat": "15.0", "long": "101.0"}}}


class FeedLocationDTO(BaseModel):
    """DTO for one location entry with its daily history."""

    country: str = Field(description="Country or region name")
    province: Optional[str] = Field(
        default=None, description="Province or state, empty for a country total"
    )
    coordinates: FeedCoordinatesDTO = Field(default_factory=FeedCoordinatesDTO)
    history: Dict[str, FeedCount] = Field(description="Counts keyed by M/D/YY date")

    @field_validator("coordinates", mode="before")
    @classmethod
    def unknown_coordinates_are_empty(cls, value: Any) -> Any:
        """Coordinates that are not an object leave the location unknown."""
        return value if isinstance(value, (dict, FeedCoordinatesDTO)) else {}

    model_config = {
        "json_schema_extra": {
            "example": {
                "country": "Thailand",
                "province": "",
                "coordinates": {"lat": "15.0", "long": "101.0"},
                "history": {"1/22/20": 2, "1/23/20": 3},
            }
        }
    }


class FeedDocumentDTO(BaseModel):
    """DTO for the top-level hierarchical feed document."""

    latest: int = Field(description="Latest worldwide total")
    locations: List[Any] = Field(description="Raw location entries")
