import io
from datetime import date, datetime, time
from typing import List

import fitz  # PyMuPDF
import pandas as pd
from fastapi import UploadFile

from reasoning_assistant.utils.logger import get_logger
from reasoning_assistant.utils.validators import (
    validate_file_size,
    validate_file_extension,
    UNSUPPORTED_FORMAT_MESSAGE,
)
from reasoning_assistant.utils.exceptions import ExtractionError, UnsupportedFormatError
from reasoning_assistant.models.document import DocumentFormat, RawDocument

logger = get_logger(__name__)

SHEET_MARKER = "--- Sheet: {name} ---"


def format_cell(value) -> str:
    """Render a workbook cell the way a spreadsheet displays it"""
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value != value:
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


class DocumentExtractor:
    """
    Turns an uploaded CSV/TXT, Excel or PDF file into one normalized text blob.
    Either the full text is returned or an ExtractionError is raised.
    """

    def __init__(self):
        self.logger = logger

    def to_raw_document(self, file_name: str, content: bytes) -> RawDocument:
        """Validate extension and size, rejecting before any parsing"""
        extension = validate_file_extension(file_name)
        try:
            document_format = DocumentFormat(extension)
        except ValueError:
            raise UnsupportedFormatError(UNSUPPORTED_FORMAT_MESSAGE)
        validate_file_size(len(content))
        return RawDocument(file_name=file_name, format=document_format, content=content)

    def extract(self, file_name: str, content: bytes) -> str:
        document = self.to_raw_document(file_name, content)
        self.logger.info(f"Extracting {document.format.value} document: {file_name} ({document.size:,} bytes)")

        if document.format in (DocumentFormat.CSV, DocumentFormat.TXT):
            text = self.extract_text(document.content)
        elif document.format in (DocumentFormat.XLSX, DocumentFormat.XLS):
            text = self.extract_workbook(document.content, document.format)
        else:
            text = self.extract_pdf(document.content)

        self.logger.info(f"Extracted {len(text):,} characters from {file_name}")
        return text

    async def extract_upload(self, file: UploadFile) -> str:
        """
        Read an uploaded file and extract its text
        """
        content = await file.read()
        return self.extract(file.filename, content)

    def extract_text(self, content: bytes) -> str:
        """Plain text and CSV are passed through unmodified"""
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            self.logger.error(f"Error decoding text file: {str(e)}")
            raise ExtractionError(f"Failed to decode text file: {str(e)}")

    def extract_workbook(self, content: bytes, file_format: DocumentFormat) -> str:
        """
        Render every sheet as a CSV block headed by a sheet marker, in workbook order
        """
        engine = "xlrd" if file_format == DocumentFormat.XLS else "openpyxl"
        try:
            sheets = pd.read_excel(
                io.BytesIO(content), sheet_name=None, header=None, dtype=object, engine=engine
            )
            blocks: List[str] = []
            for sheet_name, df in sheets.items():
                self.logger.debug(f"Rendering sheet: {sheet_name} ({len(df)} rows)")
                csv_text = df.map(format_cell).to_csv(index=False, header=False, lineterminator="\n").rstrip("\n")
                blocks.append(f"{SHEET_MARKER.format(name=sheet_name)}\n{csv_text}\n\n")
        except Exception as e:
            self.logger.error(f"Error reading workbook: {str(e)}")
            raise ExtractionError(f"Failed to read workbook: {str(e)}")

        self.logger.info(f"Successfully read {len(blocks)} sheets")
        return "".join(blocks).strip()

    def extract_pdf(self, content: bytes) -> str:
        """
        One output line per page: the page's text spans joined by single spaces
        """
        try:
            with fitz.open(stream=content, filetype="pdf") as pdf:
                if pdf.page_count == 0:
                    raise ValueError("document has no pages")
                lines = [" ".join(self._page_runs(page)) for page in pdf]
        except Exception as e:
            self.logger.error(f"Error reading PDF: {str(e)}")
            raise ExtractionError(f"Failed to read PDF: {str(e)}")

        self.logger.info(f"Successfully read {len(lines)} pages")
        return "\n".join(lines).strip()

    def _page_runs(self, page) -> List[str]:
        runs = []
        for block in page.get_text("dict")["blocks"]:
            # Image blocks carry no lines
            for line in block.get("lines", []):
                for span in line["spans"]:
                    runs.append(span["text"])
        return runs
