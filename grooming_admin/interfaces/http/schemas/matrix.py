from __future__ import annotations

from pydantic import BaseModel

from grooming_admin.interfaces.http.schemas.breeds import BreedResponse
from grooming_admin.interfaces.http.schemas.dog_categories import DogCategoryResponse
from grooming_admin.interfaces.http.schemas.station_breed_rules import RuleResponse
from grooming_admin.interfaces.http.schemas.stations import StationResponse


class MatrixResponse(BaseModel):
    breeds: list[BreedResponse]
    stations: list[StationResponse]
    rules: list[RuleResponse]
    categories: list[DogCategoryResponse]
    default_times: dict[str, int]
    breeds_per_page: int
    stations_per_view: int
