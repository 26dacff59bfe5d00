"""
Request and import schemas for vocabulary content.

``RawWordImport`` is the versioned record format of word imports. Version 1
accepts these aliases (first one wins when several are present):

=============  ==========================================
field          accepted keys
=============  ==========================================
word           ``w``, ``word``
phonetic       ``p``, ``phonetic``
meaning        ``m``, ``meaning``
example_en     ``ex``, ``exampleEn``, ``example_en``
example_cn     ``exc``, ``exampleCn``, ``example_cn``
=============  ==========================================
"""

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

IMPORT_FORMAT_VERSION = 1


class RawWordImport(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    word: str = Field(validation_alias=AliasChoices('w', 'word'), min_length=1, max_length=200)
    phonetic: Optional[str] = Field(default=None, validation_alias=AliasChoices('p', 'phonetic'))
    meaning: str = Field(validation_alias=AliasChoices('m', 'meaning'), min_length=1)
    example_en: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('ex', 'exampleEn', 'example_en')
    )
    example_cn: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('exc', 'exampleCn', 'example_cn')
    )

    @field_validator('word', 'phonetic', 'meaning', 'example_en', 'example_cn', mode='before')
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        # Spreadsheet cells arrive as numbers or NaN.
        if value is None:
            return None
        if isinstance(value, float) and value != value:
            return None
        if not isinstance(value, str):
            return str(value)
        return value

    @field_validator('phonetic', 'example_en', 'example_cn')
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class ImportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    semester_id: int = Field(alias='semesterId')
    words: List[Any]
    clear_existing: bool = Field(default=False, alias='clearExisting')
    version: int = IMPORT_FORMAT_VERSION

    @field_validator('version')
    @classmethod
    def known_version(cls, value: int) -> int:
        if value != IMPORT_FORMAT_VERSION:
            raise ValueError(f'Unsupported import format version {value}')
        return value


class SemesterCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore', str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    slug: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = None
    order: Optional[int] = None
