"""Ingestion Pipeline for XYZ to Whizz.

The pipeline runs in phases, each reading the XYZ file from the start:

1. Structural scan: header, line and channel counts, channel precision
2. Channel resolution: channel names from the header records
3. Line inventory: identifier and fiducial count of every line
4. Dataset building: one group per line, one array per channel
5. Data writing: streaming pass that fills the channels line by line

Phases 1 to 3 only read the input, so a malformed file fails before anything is written.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from upath import UPath

from whizz.core.config import get_settings
from whizz.ingestion.session import ConversionSession
from whizz.ingestion.validation import line_count_qc
from whizz.schemas.metadata import LineAttributes
from whizz.schemas.metadata import WhizzMetadata
from whizz.store.zarr_store import create_whizz
from whizz.xyz.channels import build_channel_schema
from whizz.xyz.inventory import build_line_inventory
from whizz.xyz.materializer import materialize_records
from whizz.xyz.scanner import scan_structure

if TYPE_CHECKING:
    from pathlib import Path

    from whizz.store.sink import WhizzSink

logger = logging.getLogger(__name__)


def analyze_xyz(
    input_path: UPath | Path | str,
    missing_value: float | None = None,
    line_style: str = "",
) -> ConversionSession:
    """Run the read-only phases and return a session ready for writing.

    Args:
        input_path: Universal path of the XYZ file.
        missing_value: Value replacing dummies. Defaults to ``WHIZZ__IMPORT__MISSING_VALUE``.
        line_style: Line numbering style used by the data acquirer.

    Returns:
        Session holding the file structure, channel schema and line inventory.
    """
    settings = get_settings()
    input_path = UPath(input_path)
    if missing_value is None:
        missing_value = settings.missing_value

    # ============================================================
    # PHASE 1: Structural Scan
    # ============================================================
    logger.info("Phase 1: Scanning XYZ structure")
    structure = scan_structure(input_path, preview_records=settings.preview_records)

    # ============================================================
    # PHASE 2: Channel Resolution
    # ============================================================
    logger.info("Phase 2: Resolving channel names")
    channels = build_channel_schema(input_path, structure)
    logger.info("Channels: %s", list(channels.names))

    # ============================================================
    # PHASE 3: Line Inventory
    # ============================================================
    logger.info("Phase 3: Building line inventory")
    inventory = build_line_inventory(input_path)
    line_count_qc(inventory, structure, ignore_checks=settings.ignore_checks)
    logger.info("Lines: %s", inventory.line_ids)

    return ConversionSession(
        structure=structure,
        channels=channels,
        inventory=inventory,
        missing_value=missing_value,
        line_style=line_style,
    )


def build_dataset(session: ConversionSession, sink: WhizzSink) -> None:
    """Create every line and channel of the session in the sink."""
    for line in session.inventory:
        attributes = LineAttributes(
            line_id=line.line_id,
            num_fiducials=line.num_fiducials,
            is_tie=line.is_tie,
            flight=line.flight,
            date=line.date,
            line_style=session.line_style,
            channels=list(session.channels.names),
        )
        sink.create_line(line.line_id, line.num_fiducials, attributes)
        for channel_name, precision in session.channels.items():
            sink.create_channel(line.line_id, channel_name, precision)

    logger.info("Added %d lines, each of %d channels", session.num_lines, session.num_channels)


def run_xyz_ingestion(
    input_path: UPath | Path | str,
    output_path: UPath | Path | str,
    metadata: WhizzMetadata | None = None,
    missing_value: float | None = None,
    line_style: str = "",
    overwrite: bool = False,
) -> ConversionSession:
    """Convert a Geosoft XYZ file to a Whizz dataset.

    Args:
        input_path: Universal path of the XYZ file.
        output_path: Universal path of the Whizz dataset.
        metadata: Global attributes of the dataset.
        missing_value: Value replacing dummies. Defaults to ``WHIZZ__IMPORT__MISSING_VALUE``.
        line_style: Line numbering style used by the data acquirer.
        overwrite: Whether to overwrite the output if it already exists. Defaults to False.

    Returns:
        The finished conversion session.

    Raises:
        FileExistsError: If the output location already exists and overwrite is False.
    """
    settings = get_settings()
    input_path = UPath(input_path)
    output_path = UPath(output_path)

    logger.info("Running ingestion pipeline")

    if not overwrite and output_path.exists():
        err = f"Output location '{output_path.as_posix()}' exists. Set `overwrite=True` if intended."
        raise FileExistsError(err)

    session = analyze_xyz(input_path, missing_value=missing_value, line_style=line_style)

    # ============================================================
    # PHASE 4: Dataset Building
    # ============================================================
    logger.info("Phase 4: Building dataset")
    if metadata is None:
        metadata = WhizzMetadata()
    metadata = metadata.model_copy(
        update={
            "missing_value": session.missing_value,
            "line_style": line_style or metadata.line_style,
            "source_file": metadata.source_file or input_path.name,
            "line_ids": session.inventory.line_ids,
        }
    )
    session.line_style = metadata.line_style

    store = create_whizz(output_path, metadata, overwrite=overwrite, chunk_size=settings.chunk_size)
    build_dataset(session, store)

    # ============================================================
    # PHASE 5: Data Writing
    # ============================================================
    logger.info("Phase 5: Writing data to Zarr store")
    materialize_records(input_path, session, store, progress=settings.progress)

    logger.info("Ingestion complete!")
    return session
