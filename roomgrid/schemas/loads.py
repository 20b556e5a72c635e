from typing import Dict, List
from pydantic import BaseModel

from roomgrid.schemas.entry import Category


class ScheduleEntry(BaseModel):
    start: int
    end: int
    title: str
    subject_code: str
    pyb: str
    schedule_label: str
    room: str
    rooms: List[str] = []   # every room the row was split over
    category: Category
    course_units: float = 0
    ojt_units: float = 0
    competency_appraisal_units: float = 0


class LoadSummary(BaseModel):
    course_units: float = 0
    ojt_units: float = 0
    competency_appraisal_units: float = 0
    total: float = 0


class InstructorLoad(BaseModel):
    name: str
    schedule: Dict[str, List[ScheduleEntry]]   # "Monday".."Sunday"
    summary: LoadSummary


class TeachingLoadReport(BaseModel):
    instructors: List[InstructorLoad]
    days: List[str]


class InstructorCell(BaseModel):
    instructor: str
    day: str
    slot: str
    has_schedule: bool
    rooms: List[str] = []
    details: List[ScheduleEntry] = []
