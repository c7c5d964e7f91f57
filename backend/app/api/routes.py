"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from io import BytesIO
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request, send_file
from pydantic import ValidationError

from backend.config import DEFAULTS
from backend.core.export import export_projection
from backend.core.formatting import UnsupportedLocaleError
from backend.core.projection import project
from backend.core.summary import summary_cards
from backend.models import InputParameters
from backend.schemas.projection import ExportRequest, SummaryRequest

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected payload: %d validation error(s)", exc.error_count())
    errors = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(UnsupportedLocaleError)
def _handle_locale_error(exc: UnsupportedLocaleError):
    return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify({"message": "pong"})


@api_bp.get("/defaults")
def defaults() -> Any:
    """Inputs the calculator starts with."""
    return jsonify(InputParameters.model_validate(DEFAULTS).model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Full projection: point series for both phases plus the summary figures."""
    result = project(InputParameters.model_validate(_payload()))
    return jsonify(result.model_dump())


@api_bp.post("/projection/summary")
def projection_summary() -> Any:
    payload = SummaryRequest.model_validate(_payload())
    locale = payload.locale or current_app.config["LOCALE"]
    cards = summary_cards(project(payload.parameters), locale=locale)
    return jsonify([card.model_dump() for card in cards])


@api_bp.post("/projection/export")
def projection_export() -> Any:
    """Download one phase of the projection as an .xlsx workbook."""
    payload = ExportRequest.model_validate(_payload())
    filename, blob = export_projection(project(payload.parameters), payload.phase, payload.granularity)
    logger.info("exporting %s (%d bytes)", filename, len(blob))
    return send_file(
        BytesIO(blob),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=filename,
    )
