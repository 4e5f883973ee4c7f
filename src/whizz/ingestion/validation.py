"""Validation utilities for Whizz ingestion."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whizz.exceptions import InventoryMismatchError

if TYPE_CHECKING:
    from whizz.xyz.inventory import LineInventory
    from whizz.xyz.scanner import XYZStructure

logger = logging.getLogger(__name__)


def line_count_qc(inventory: LineInventory, structure: XYZStructure, ignore_checks: bool = False) -> None:
    """Check the line inventory against the line count of the structural scan.

    Both passes classify records the same way, so a difference means the file changed between
    passes or a marker was read differently. Set ``WHIZZ_IGNORE_CHECKS=1`` to only log it.

    Args:
        inventory: Lines found by the inventory pass.
        structure: Structure found by the scan pass.
        ignore_checks: Log a warning instead of raising.

    Raises:
        InventoryMismatchError: If the counts differ and checks are not ignored.
    """
    if len(inventory) == structure.num_lines:
        return

    msg = (
        f"Line inventory has {len(inventory)} lines but the structural scan found "
        f"{structure.num_lines} line markers."
    )
    if ignore_checks:
        logger.warning(msg)
        return
    raise InventoryMismatchError(msg)
