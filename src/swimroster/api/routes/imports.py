"""Bulk import endpoints.

Rows are sent already split into cells; reading CSV text is the client's job.
"""

import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from swimroster.api.dependencies import ImportServiceDep
from swimroster.services.import_schemas import ImportKind, ImportResult

router = APIRouter(prefix="/import", tags=["import"])


class ImportRequest(BaseModel):
    rows: list[list[str]]
    has_header: bool = False
    default_date: datetime.date | None = None


@router.post("/{kind}", response_model=ImportResult)
def import_rows(kind: ImportKind, data: ImportRequest, importer: ImportServiceDep) -> ImportResult:
    """Import swimmers, meets, or PR baselines. Bad rows are skipped and listed."""
    return importer.import_rows(kind, data.rows, data.has_header, data.default_date)
