import datetime as dt
import pytest
from formdoc.config import Settings

class RecordingUI:
    """FormUI that remembers every call."""

    def __init__(self):
        self.alerts = []
        self.focused = []
        self.previews = []

    def alert(self, message):
        self.alerts.append(message)

    def focus(self, field):
        self.focused.append(field)

    def show_preview(self, text):
        self.previews.append(text)

@pytest.fixture
def ui():
    return RecordingUI()

@pytest.fixture
def settings(tmp_path):
    return Settings(out_dir=str(tmp_path))

@pytest.fixture
def jane():
    return {
        "full_name": "Jane Doe",
        "company": "Acme",
        "email": "jane@acme.test",
        "address": "1 Main St",
        "date": "2024-03-05",
        "notes": "",
        "format": "pdf",
    }

@pytest.fixture
def fixed_date():
    return dt.date(2024, 3, 5)
