"""
Integration test fixtures.

Real passbook PDFs are personal data and never committed. Point
EPF_TEST_PASSBOOK at one (and EPF_TEST_PASSWORD if it is encrypted) to run
the PDF tests; they skip otherwise.
"""

import os
from pathlib import Path

import pytest

PASSBOOK_ENV_VAR = "EPF_TEST_PASSBOOK"
PASSWORD_ENV_VAR = "EPF_TEST_PASSWORD"


@pytest.fixture(scope="session")
def epf_file() -> Path:
    """Path to a real EPF passbook PDF, or skip."""
    value = os.environ.get(PASSBOOK_ENV_VAR)
    if not value:
        pytest.skip(f"Set {PASSBOOK_ENV_VAR} to an EPF passbook PDF to run this test.")

    path = Path(value)
    if not path.exists():
        pytest.skip(f"EPF passbook not found: {path}")

    print(f"\n[FIXTURE] Selected EPF passbook: {path.name}")
    return path


@pytest.fixture(scope="session")
def epf_password():
    return os.environ.get(PASSWORD_ENV_VAR)
