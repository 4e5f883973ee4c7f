"""Conversion from Geosoft XYZ to Whizz format."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from upath import UPath

from whizz.constants import WHIZZ_SUFFIX
from whizz.schemas.metadata import WhizzMetadata

if TYPE_CHECKING:
    from pathlib import Path

    from whizz.ingestion.session import ConversionSummary


def default_whizz_path(xyz_path: UPath | Path | str) -> UPath:
    """Whizz dataset path next to the XYZ file, ``survey.xyz`` becomes ``survey.whizz``."""
    return UPath(xyz_path).with_suffix(WHIZZ_SUFFIX)


def xyz_to_whizz(  # noqa: PLR0913
    xyz_path: UPath | Path | str,
    whizz_path: UPath | Path | str | None = None,
    *,
    line_style: str = "",
    missing_value: float | None = None,
    metadata: WhizzMetadata | dict[str, Any] | None = None,
    overwrite: bool = False,
) -> ConversionSummary:
    """Create a Whizz airborne survey dataset from a Geosoft XYZ file.

    Args:
        xyz_path: The universal path of the XYZ file.
        whizz_path: The universal path of the Whizz dataset. Defaults to the XYZ path with a
            ``.whizz`` suffix.
        line_style: The line numbering style used by the data acquirer. Defaults to unknown.
        missing_value: The value written in place of dummies. Defaults to
            ``WHIZZ__IMPORT__MISSING_VALUE`` (-1.0e-64).
        metadata: Project attributes of the dataset. Can be a WhizzMetadata instance or a dict.
        overwrite: Whether to overwrite the dataset if it already exists. Defaults to False.

    Returns:
        Summary of what was found and written.

    Raises:
        FileExistsError: If the output location already exists and overwrite is False.
    """
    if isinstance(metadata, dict):
        metadata = WhizzMetadata.model_validate(metadata)

    if whizz_path is None:
        whizz_path = default_whizz_path(xyz_path)

    from whizz.ingestion.pipeline import run_xyz_ingestion

    session = run_xyz_ingestion(
        input_path=xyz_path,
        output_path=whizz_path,
        metadata=metadata,
        missing_value=missing_value,
        line_style=line_style,
        overwrite=overwrite,
    )
    return session.summary()
