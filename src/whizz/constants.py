"""Constant values used across Whizz."""

from enum import StrEnum

import numpy as np

WHIZZ_VERSION = "1.0"

# Reserved tokens of the Geosoft XYZ format
COMMENT_MARKER = "/"
ANNOTATION_MARKER = "//"
DUMMY_MARKER = "*"
LINE_KEYWORD = "line"
TIE_KEYWORD = "tie"

# Shorter records are skipped by every pass
MIN_RECORD_LENGTH = 1

DEFAULT_MISSING_VALUE = -1.0e-64
DEFAULT_PREVIEW_RECORDS = 5
DEFAULT_CHUNK_SIZE = 65536

WHIZZ_SUFFIX = ".whizz"
LINES_GROUP = "Lines"
FIDUCIAL_DIM = "fiducial"
CHANNEL_DTYPE = np.dtype("float64")

PLACEHOLDER_CHANNEL_PREFIX = "CH"


class AnnotationKind(StrEnum):
    """Structured annotations carried by doubled comment markers."""

    FLIGHT = "flight"
    DATE = "date"
