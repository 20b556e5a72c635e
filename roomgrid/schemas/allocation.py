from typing import Dict, List
from pydantic import BaseModel, ConfigDict, computed_field


class TimeSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    start: int
    end: int
    highlight: bool = False

    @property
    def duration(self) -> int:
        return self.end - self.start


class Segment(BaseModel):
    start: float
    end: float


class DetailRecord(BaseModel):
    title: str
    instructor: str
    schedule: str
    room: str
    pyb: str


class RoomCell(BaseModel):
    segments: List[Segment] = []
    details: List[DetailRecord] = []

    @computed_field
    @property
    def is_occupied(self) -> bool:
        return len(self.segments) > 0


class SlotAllocation(BaseModel):
    label: str
    start: int
    end: int
    highlight: bool = False
    occupied_count: int
    vacant_count: int
    per_room: Dict[str, RoomCell]


class DayAllocation(BaseModel):
    day: str
    slots: List[SlotAllocation]


class AllocationGrid(BaseModel):
    rooms: List[str]
    days: List[DayAllocation]
