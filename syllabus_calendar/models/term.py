import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class TermLabel(Enum):
    FIRST = "前学期"
    SECOND = "後学期"

    @classmethod
    def parse(cls, text: str) -> "TermLabel":
        value = text.strip()
        for label in cls:
            if value == label.value or value.upper() == label.name:
                return label
        raise ValueError(f"unknown term label: {text!r}")


class AcademicTerm(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    label: TermLabel
    startDate: datetime.date
    endDate: datetime.date

    @model_validator(mode="after")
    def _check_window(self) -> "AcademicTerm":
        if self.startDate >= self.endDate:
            raise ValueError(
                f"term {self.year}/{self.label.value} starts on or after its end"
            )
        return self

    def __str__(self) -> str:
        return (
            f"AcademicTerm({self.year} {self.label.value}, "
            f"{self.startDate.isoformat()} - {self.endDate.isoformat()})"
        )
