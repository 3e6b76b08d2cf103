# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Query-string validation for the web API.

Each endpoint's parameters are described by a small pydantic model.
:func:`parse_query` builds the model from request args and converts a
pydantic ``ValidationError`` into a :class:`QueryValidationError` whose
message lists every offending field.
"""

from __future__ import annotations

import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from models import StatGroup, TransactionType

FIRST_SEASON = 1876
LAST_SEASON = 2100


def current_season() -> int:
    return datetime.date.today().year


class QueryValidationError(ValueError):
    """Raised when request parameters fail validation."""

    def __init__(self, message: str, validation_errors: list[dict[str, Any]]):
        self.validation_errors = validation_errors
        self.details = [f"{e['loc']}: {e['msg']}" for e in validation_errors]
        super().__init__(message)


# ---------------------------------------------------------------------------
# Query models
# ---------------------------------------------------------------------------

class SeasonQuery(BaseModel):
    season: int = Field(default_factory=current_season, ge=FIRST_SEASON, le=LAST_SEASON)


class CardQuery(SeasonQuery):
    # None means "detect from the player's primary position"
    group: Optional[StatGroup] = None


class TeamCardQuery(SeasonQuery):
    group: StatGroup = StatGroup.HITTING


class CareerQuery(BaseModel):
    group: Optional[StatGroup] = None


class CompareQuery(SeasonQuery):
    left: int = Field(gt=0)
    right: int = Field(gt=0)
    group: StatGroup = StatGroup.HITTING


class LeadersQuery(SeasonQuery):
    group: StatGroup = StatGroup.HITTING
    limit: int = Field(default=20, ge=1, le=100)


class ScheduleQuery(BaseModel):
    date: datetime.date = Field(default_factory=datetime.date.today)


class GameLogQuery(SeasonQuery):
    group: Optional[StatGroup] = None


class TransactionsQuery(SeasonQuery):
    type: TransactionType = TransactionType.ALL
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=50, ge=1, le=100)


class SearchQuery(BaseModel):
    q: str = Field(default="", max_length=100)


def parse_query(model: type[BaseModel], args: Mapping[str, Any]) -> Any:
    """Validate *args* (e.g. ``request.args``) against *model*.

    Empty-string parameters are treated as absent so that ``?season=``
    falls back to the default.

    Raises:
        QueryValidationError: If any parameter is invalid.
    """
    values = {key: value for key, value in dict(args).items() if value != ""}
    try:
        return model(**values)
    except ValidationError as exc:
        errors = [
            {
                "loc": ".".join(str(part) for part in e.get("loc", ())),
                "msg": e.get("msg", ""),
                "type": e.get("type", ""),
            }
            for e in exc.errors()
        ]
        raise QueryValidationError(
            "Invalid parameters: " + "; ".join(f"{e['loc']}: {e['msg']}" for e in errors),
            validation_errors=errors,
        ) from exc
