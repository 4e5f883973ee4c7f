"""Storage of Whizz datasets."""

from whizz.store.sink import WhizzSink
from whizz.store.zarr_store import WhizzStore
from whizz.store.zarr_store import create_whizz

__all__ = ["WhizzSink", "WhizzStore", "create_whizz"]
