from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseDigest(BaseModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, coerce_numbers_to_str=True
    )

    title: str = Field(alias="科目")
    dayPeriod: str = Field(alias="曜日・時限")
    timetableCode: str = Field(alias="時間割コード")
    term: str = Field(alias="学期")
    courseCode: str = ""
    description: str = ""

    def __str__(self) -> str:
        return f"{self.title} ({self.timetableCode})"


class SyllabusNode(BaseModel):
    title: str
    contents: dict[str, str] = {}
    children: list["SyllabusNode"] = []


class SyllabusRecord(BaseModel):
    digest: dict[str, Any]
    contentTree: list[SyllabusNode] = []
    source: Optional[str] = None
