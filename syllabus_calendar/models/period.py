import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PeriodSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    periodNumber: int = Field(ge=1)
    startTime: datetime.time
    endTime: datetime.time

    @model_validator(mode="after")
    def _check_times(self) -> "PeriodSlot":
        if self.startTime >= self.endTime:
            raise ValueError(f"period {self.periodNumber} ends before it starts")
        return self
