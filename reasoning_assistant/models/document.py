from pydantic import BaseModel, Field
from enum import Enum


class DocumentFormat(str, Enum):
    CSV = "csv"
    TXT = "txt"
    XLSX = "xlsx"
    XLS = "xls"
    PDF = "pdf"


class RawDocument(BaseModel):
    file_name: str = Field(..., description="Original upload file name")
    format: DocumentFormat = Field(..., description="Format derived from the file extension")
    content: bytes = Field(..., description="Raw file bytes")

    @property
    def size(self) -> int:
        return len(self.content)
