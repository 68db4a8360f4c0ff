from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    accommodations: Optional[str] = None
    lesson_plan: Optional[str] = Field(default=None, alias="lessonPlan")


class AnalyzeReceived(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    accommodations: Optional[str] = None
    lesson_plan: Optional[str] = Field(default=None, alias="lessonPlan")


class AnalyzeResponse(BaseModel):
    message: str
    summary: str
    received: AnalyzeReceived
