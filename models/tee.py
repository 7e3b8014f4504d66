from enum import Enum
from pydantic import Field, field_validator, model_validator
from typing import List, Optional

from .base import BaseGolfModel
from .hole import Hole


class TeeSegment(str, Enum):
    """Which part of a tee layout was played."""
    FULL = "full"
    FRONT9 = "front9"
    BACK9 = "back9"
    DOUBLE9 = "double9"   # 9-hole layout played twice


class TeeDefinition(BaseGolfModel):
    """A rated tee box as stored by the course catalogue."""
    id: Optional[str] = None
    name: Optional[str] = None
    number_of_holes: int = 18
    course_rating: Optional[float] = Field(None, ge=25.0, le=85.0)
    slope_rating: Optional[float] = Field(None, ge=55, le=155)
    bogey_rating: Optional[float] = Field(None, ge=25.0, le=120.0)
    par_total: Optional[int] = Field(None, ge=27, le=80)

    # 9-hole ratings for each side of an 18-hole layout
    front_course_rating: Optional[float] = Field(None, ge=25.0, le=45.0)
    front_slope_rating: Optional[float] = Field(None, ge=55, le=155)
    back_course_rating: Optional[float] = Field(None, ge=25.0, le=45.0)
    back_slope_rating: Optional[float] = Field(None, ge=55, le=155)

    holes: List[Hole] = Field(default_factory=list)

    @field_validator('number_of_holes')
    @classmethod
    def validate_number_of_holes(cls, v):
        if v not in (9, 18):
            raise ValueError(f"Tee must have 9 or 18 holes, got {v}")
        return v

    @model_validator(mode='after')
    def validate_hole_list(self):
        numbers = [h.number for h in self.holes]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Duplicate hole numbers in tee layout")
        if numbers and max(numbers) > self.number_of_holes:
            raise ValueError(
                f"Hole {max(numbers)} exceeds the tee's {self.number_of_holes} holes"
            )
        return self

    def sorted_holes(self) -> List[Hole]:
        return sorted(self.holes, key=lambda h: h.number)

    def holes_in_range(self, first: int, last: int) -> List[Hole]:
        """Holes numbered first..last inclusive, in order."""
        return [h for h in self.sorted_holes() if first <= h.number <= last]


class TeeContext(BaseGolfModel):
    """Resolved playing context for one round."""
    segment: TeeSegment = TeeSegment.FULL
    holes_played: int = Field(..., ge=1, le=18)
    course_rating: float
    slope_rating: float
    par_total: int
    non_par3_holes: int = Field(..., ge=0, le=18)
    holes: List[Hole] = Field(default_factory=list)
    bogey_rating: Optional[float] = None

    def normalized_rating(self) -> float:
        """Course rating expressed on an 18-hole scale."""
        if self.holes_played == 18:
            return self.course_rating
        return self.course_rating * 18 / self.holes_played

    @property
    def hole_range(self) -> List[int]:
        return [h.number for h in self.holes]

    @classmethod
    def neutral(cls, holes_played: int = 18) -> "TeeContext":
        """Rating 72 / slope 113 course scaled to the holes played."""
        scale = holes_played / 18
        return cls(
            holes_played=holes_played,
            course_rating=72.0 * scale,
            slope_rating=113.0,
            par_total=round(72 * scale),
            non_par3_holes=round(14 * scale),
        )
