"""Spreadsheet export of projection point series."""

from __future__ import annotations

from io import BytesIO
from typing import Dict, List, Literal, Sequence, Tuple

import pandas as pd
from openpyxl.utils import get_column_letter
from pydantic import BaseModel

from backend.models import ProjectionResult

Phase = Literal["accumulation", "retirement"]
Granularity = Literal["yearly", "monthly"]

SHEET_NAME = "Data"
MIN_COLUMN_WIDTH = 14

ACCUMULATION_COLUMNS: Dict[str, str] = {
    "year": "Year",
    "month": "Month",
    "periodContribution": "Period contribution",
    "periodReturn": "Period return",
    "cumulativeContributions": "Total contributed",
    "cumulativeContributionsDeflated": "Total contributed (today)",
    "gains": "Accumulated gains",
    "portfolioValue": "Portfolio",
    "portfolioValueDeflated": "Portfolio (today)",
}

RETIREMENT_COLUMNS: Dict[str, str] = {
    "year": "Year",
    "month": "Month",
    "periodWithdrawal": "Period withdrawal",
    "periodReturn": "Period return",
    "balance": "Balance",
    "balanceDeflated": "Balance (today)",
}


def select_points(result: ProjectionResult, phase: Phase, granularity: Granularity) -> List[BaseModel]:
    if phase == "accumulation":
        return list(result.accumulationYearly if granularity == "yearly" else result.accumulationMonthly)
    return list(result.retirementYearly if granularity == "yearly" else result.retirementMonthly)


def points_table(points: Sequence[BaseModel], phase: Phase, granularity: Granularity) -> pd.DataFrame:
    """One row per point, one named column per field. Yearly tables drop the month."""
    columns = dict(ACCUMULATION_COLUMNS if phase == "accumulation" else RETIREMENT_COLUMNS)
    if granularity == "yearly":
        columns.pop("month")

    df = pd.DataFrame([point.model_dump() for point in points], columns=list(columns))
    return df.rename(columns=columns)


def export_filename(phase: Phase, granularity: Granularity) -> str:
    return f"{phase}_{granularity}.xlsx"


def table_to_xlsx(df: pd.DataFrame) -> bytes:
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        sheet = writer.sheets[SHEET_NAME]
        for index, header in enumerate(df.columns, start=1):
            width = max(len(str(header)) + 2, MIN_COLUMN_WIDTH)
            sheet.column_dimensions[get_column_letter(index)].width = width
    return buffer.getvalue()


def export_projection(
    result: ProjectionResult,
    phase: Phase,
    granularity: Granularity,
) -> Tuple[str, bytes]:
    """Return ``(filename, xlsx bytes)`` for one phase at one granularity."""
    df = points_table(select_points(result, phase, granularity), phase, granularity)
    return export_filename(phase, granularity), table_to_xlsx(df)
