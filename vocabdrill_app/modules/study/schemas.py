from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class StartSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    semester_ids: List[int] = Field(alias='semesterIds')
    kind: Literal['normal', 'extra'] = 'normal'
    daily_limit: Optional[int] = Field(default=None, alias='dailyLimit', ge=0)


class QuizAnswer(BaseModel):
    model_config = ConfigDict(extra='ignore')

    choice: Optional[str] = None


class SpellingAnswer(BaseModel):
    model_config = ConfigDict(extra='ignore')

    answer: str = ''
