# scoreboard/services/transfer.py
"""
JSON export/import envelopes shared by leaderboards and activeness boards.

An export is `{<container>: {...}, <records>: [...]}`. An import reads the
same envelope back and inserts the records one by one. There is no
transaction around an import: a failure part-way leaves the records inserted
so far in place.
"""
import json
import re
from datetime import date
from typing import Any, List, Optional

from fastapi import HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

IMPORT_ERROR_MESSAGE = "Failed to import file. Please check the format."


def export_filename(name: str, suffix: str) -> str:
    stem = re.sub(r"\s+", "_", name)
    return f"{stem}_{suffix}.json"


def export_response(payload: BaseModel, filename: str) -> Response:
    """Serve an export as a JSON file download."""
    return Response(
        content=payload.model_dump_json(indent=2),
        media_type="application/json; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def parse_import(raw: bytes, records_key: str) -> List[Any]:
    """
    Decode an uploaded envelope and return its record list.

    A body that decodes but carries no list under `records_key` imports
    nothing.
    """
    try:
        envelope = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise HTTPException(status_code=400, detail=IMPORT_ERROR_MESSAGE)

    if not isinstance(envelope, dict):
        return []

    records = envelope.get(records_key)
    if not isinstance(records, list):
        return []
    return records


def parse_date(value: Any, default: Optional[date] = None) -> date:
    """Accept `YYYY-MM-DD` or a full ISO timestamp."""
    if value in (None, ""):
        if default is None:
            raise ValueError("Missing date")
        return default
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
