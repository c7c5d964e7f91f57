"""Data contracts for the projection endpoints."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.models import InputParameters


class SummaryRequest(BaseModel):
    """Inputs plus the locale used to render the display strings."""

    model_config = ConfigDict(extra="forbid")

    parameters: InputParameters
    locale: Optional[str] = Field(
        None,
        description="Display locale, e.g. 'pt-BR' or 'en-US'. Falls back to the app's LOCALE setting.",
    )


class ExportRequest(BaseModel):
    """Which point series of a projection to download as a spreadsheet."""

    model_config = ConfigDict(extra="forbid")

    parameters: InputParameters
    phase: Literal["accumulation", "retirement"] = "accumulation"
    granularity: Literal["yearly", "monthly"] = "yearly"


class StatCard(BaseModel):
    """One headline figure, nominal and in today's money."""

    label: str
    nominal: float
    deflated: float
    nominalDisplay: str
    deflatedDisplay: str
    highlight: bool = False
