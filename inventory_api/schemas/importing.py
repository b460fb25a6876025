from pydantic import BaseModel


class ImportRowError(BaseModel):
    row: int
    error: str


class ImportSummary(BaseModel):
    message: str = "Import completed"
    added: int
    skipped: int
    errors: list[ImportRowError] | None = None
