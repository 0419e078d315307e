import os

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture(autouse=True)
def run_from_project_root(monkeypatch):
    # example programs are opened relative to the project root
    monkeypatch.chdir(PROJECT_ROOT)
