# models/levels.py

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Levels keep the numeric type Finnhub sent (105 stays 105, not 105.0)
Level = Union[int, float]


class Quote(BaseModel):
    o: float
    h: float
    l: float
    c: float


class ParsedResults(BaseModel):
    quote: Quote
    support_resistance: List[Level]


class LevelBreak(BaseModel):
    """
    A support/resistance level and how it was broken.
    A broken support is reported under `resistance` and vice versa:
    the field names the role the level plays after the break.
    """

    model_config = ConfigDict(populate_by_name=True)

    broke: bool
    resistance: Optional[Level] = None
    support: Optional[Level] = None
    closed_broken: Optional[bool] = Field(default=None, alias="closedBroken")


class ScanResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    broken_levels: List[LevelBreak] = Field(default_factory=list, alias="brokenLevels")
