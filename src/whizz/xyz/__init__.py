"""Reading of Geosoft XYZ columnar text files."""

from whizz.xyz.channels import ChannelSchema
from whizz.xyz.channels import build_channel_schema
from whizz.xyz.channels import resolve_channel_names
from whizz.xyz.inventory import LineInventory
from whizz.xyz.inventory import LineRecord
from whizz.xyz.inventory import build_line_inventory
from whizz.xyz.materializer import materialize_records
from whizz.xyz.records import RecordKind
from whizz.xyz.records import XYZRecord
from whizz.xyz.records import classify_record
from whizz.xyz.scanner import XYZStructure
from whizz.xyz.scanner import scan_structure

__all__ = [
    "ChannelSchema",
    "LineInventory",
    "LineRecord",
    "RecordKind",
    "XYZRecord",
    "XYZStructure",
    "build_channel_schema",
    "build_line_inventory",
    "classify_record",
    "materialize_records",
    "resolve_channel_names",
    "scan_structure",
]
