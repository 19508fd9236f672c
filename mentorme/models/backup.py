from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExportEnvelope(BaseModel):
    """Top level of an exported backup file"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_version: int = Field(..., alias="schemaVersion", ge=1)
    export_date: str = Field(..., alias="exportDate")
    app_version: Optional[str] = Field(None, alias="appVersion")
    build_number: Optional[str] = Field(None, alias="buildNumber")

    @field_validator("export_date")
    @classmethod
    def validate_export_date(cls, v):
        try:
            datetime.fromisoformat(v.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"exportDate is not an ISO-8601 timestamp: {v!r}")
        return v

    @field_validator("build_number", mode="before")
    @classmethod
    def coerce_build_number(cls, v):
        return str(v) if v is not None else None

    def collections(self) -> Dict[str, Any]:
        """Extra top-level fields (the data collections)"""
        return dict(self.model_extra or {})
