from typing import FrozenSet, Literal
from pydantic import BaseModel, ConfigDict

Category = Literal["course", "ojt", "competency_appraisal"]


class NormalizedEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    days: FrozenSet[int]
    room: str = ""             # "" = exempted OJT / appraisal row without a room
    start_minutes: int
    end_minutes: int
    title: str
    subject_code: str = ""
    instructor: str = ""
    schedule_label: str
    pyb: str = ""
    category: Category = "course"
    course_units: float = 0
    ojt_units: float = 0
    competency_appraisal_units: float = 0


class SkippedRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    reason: str
