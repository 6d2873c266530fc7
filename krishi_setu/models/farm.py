from typing import Any, List
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, Field, field_validator


class FarmRegistration(BaseModel):
    """Farm details entered in the registration wizard."""

    name: str = Field(min_length=1, description="Name of the farm or any nick name they have.")
    size_acres: float = Field(
        gt=0,
        description="Total area of the farm in acres.",
        validation_alias=AliasChoices("size_acres", "size"),
    )
    main_crops: List[str] = Field(
        min_length=1,
        description="Main crops grown on the farm.",
        validation_alias=AliasChoices("main_crops", "mainCrops"),
    )
    location: str = Field(min_length=1, description="Address of the farm.")
    photos: List[str] = Field(default_factory=list, description="Photo URLs of the farm.")

    @field_validator("name", "location")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("main_crops", mode="before")
    @classmethod
    def _split_main_crops(cls, value: Any) -> Any:
        # The registration form sends crops as "Wheat, Rice".
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, list):
            return [crop.strip() for crop in value if isinstance(crop, str) and crop.strip()]
        return value

    @field_validator("photos", mode="before")
    @classmethod
    def _dedupe_photos(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        photos: List[str] = []
        for url in value:
            if isinstance(url, str) and url.strip() and url.strip() not in photos:
                photos.append(url.strip())
        return photos


class Farm(FarmRegistration):
    id: str = Field(
        description="UUID of the farm",
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    farmer_id: str = Field(
        description="UUID user_id of the farmer owning the farm",
        validation_alias=AliasChoices("farmer_id", "farmerId"),
    )


def largest_farm(farms: List[Farm]) -> Farm | None:
    if not farms:
        return None
    return max(farms, key=lambda farm: farm.size_acres)
