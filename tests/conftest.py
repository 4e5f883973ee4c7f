"""Test configuration before everything runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


SURVEY_XYZ = """\
/ survey header
/ X Y MAG
LINE 100
1.0 2.00 3.5
4.0 5.00 6.5
LINE 200
7.0 * 9.5
"""

FLIGHT_XYZ = """\
/ Example airborne gravity survey
//FLIGHT 12
//DATE 2019/03/21
/ FLIGHT TIME X Y MAG
LINE 10
12 0.0 0.0 0.0 1.1
12 1.0 3.0 4.0 1.2
12 2.0 3.0 10.0 1.3
TIE 900
12 3.0 100.0 100.0 *
12 4.0 100.0 200.0 2.0
"""


@pytest.fixture(autouse=True)
def _no_progress_bar(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tqdm output out of the captured test output."""
    monkeypatch.setenv("WHIZZ__IMPORT__PROGRESS", "false")


@pytest.fixture
def write_xyz(tmp_path: Path):  # noqa: ANN201
    """Write XYZ text to a file in the test's temp directory and return its path."""

    def _write(text: str, name: str = "survey.xyz") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def survey_xyz(write_xyz) -> Path:  # noqa: ANN001
    """Two header records, line 100 with two fiducials, line 200 with one dummy."""
    return write_xyz(SURVEY_XYZ)


@pytest.fixture
def flight_xyz(write_xyz) -> Path:  # noqa: ANN001
    """Flight annotated survey with time and position channels, one line and one tie line."""
    return write_xyz(FLIGHT_XYZ, name="flight.xyz")
