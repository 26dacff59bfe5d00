from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProgressUpdate(BaseModel):
    """One upsert of a user's progress on a word.

    Accepts both the camelCase keys of the JSON API and snake_case.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    word_id: int = Field(alias='wordId')
    semester_id: int = Field(alias='semesterId')
    state: Literal['new', 'learning', 'review'] = 'new'
    next_review: Optional[datetime] = Field(default=None, alias='nextReview')
    ef: int = 25
    interval: int = 0
    failure_count: int = Field(default=0, alias='failureCount')
    penalty_progress: int = Field(default=0, alias='penaltyProgress')
    in_penalty: bool = Field(default=False, alias='inPenalty')

    @field_validator('ef')
    @classmethod
    def clamp_ef(cls, value: int) -> int:
        return max(13, min(25, value))

    @field_validator('interval', 'failure_count', 'penalty_progress')
    @classmethod
    def not_negative(cls, value: int) -> int:
        return max(0, value)


class SaveProgressRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    progress: List[ProgressUpdate]


class RecordStatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    semester_id: int = Field(alias='semesterId')
    date: Optional[str] = None
    kind: Literal['new', 'review'] = Field(alias='type')

    @field_validator('date')
    @classmethod
    def check_date(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        datetime.strptime(value, '%Y-%m-%d')
        return value
