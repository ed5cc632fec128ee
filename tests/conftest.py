import os

# Keep test runs from writing log files
os.environ.setdefault("LOG_FILE", "")

import io
import json
import pytest
import fitz  # PyMuPDF
from openpyxl import Workbook


class FakeBackend:
    """LLM backend double that records calls and replays a canned response"""
    name = "fake"

    def __init__(self, response_text: str = "", error: Exception = None):
        self.response_text = response_text
        self.error = error
        self.calls = []

    async def generate_json(self, prompt, schema, task):
        self.calls.append({"prompt": prompt, "schema": schema, "task": task})
        if self.error is not None:
            raise self.error
        return self.response_text


@pytest.fixture
def analysis_payload():
    """A well-formed analysis response as the model would return it"""
    return {
        "summary": "North revenue rose between Q1 and Q2; no South figures are present.",
        "overallConfidence": 0.72,
        "keyDecisionRecommendation": "Keep investing in North and collect South regional data before comparing.",
        "evaluations": [
            {
                "assumption": "North grew quarter over quarter",
                "status": "SUPPORTED",
                "reasoning": "Fact: North revenue is 100 in Q1 and 150 in Q2.",
                "supportingFacts": ["North revenue went from 100 (Q1) to 150 (Q2)"],
                "conflictingFacts": [],
                "missingDataPoints": []
            },
            {
                "assumption": "South region outperformed North",
                "status": "INSUFFICIENT_DATA",
                "reasoning": "The dataset has no South rows.",
                "missingDataPoints": ["South revenue for Q1 and Q2"]
            }
        ]
    }


@pytest.fixture
def fake_backend(analysis_payload):
    return FakeBackend(json.dumps(analysis_payload))


@pytest.fixture
def sample_workbook_bytes():
    """Create a two-sheet Excel workbook in memory"""
    wb = Workbook()

    ws1 = wb.active
    ws1.title = "Revenue"
    ws1.append(["Region", "Q1", "Q2"])
    ws1.append(["North", 100, 150])
    ws1.append(["South", 80, None])

    ws2 = wb.create_sheet("Notes")
    ws2.append(["Comment"])
    ws2.append(["Contains, comma"])
    ws2.append(['Say "hi"'])

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_pdf_bytes():
    """Create a three-page PDF with known text runs"""
    doc = fitz.open()

    page = doc.new_page()
    page.insert_text((72, 72), "Quarterly report")
    page.insert_text((72, 144), "Revenue grew")

    page = doc.new_page()
    page.insert_text((72, 72), "North 150")

    page = doc.new_page()
    page.insert_text((72, 72), "Closing remarks")

    content = doc.tobytes()
    doc.close()
    return content
