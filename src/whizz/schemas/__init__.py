"""Attribute schemas of Whizz datasets."""

from whizz.schemas.metadata import ChannelAttributes
from whizz.schemas.metadata import LineAttributes
from whizz.schemas.metadata import WhizzMetadata

__all__ = ["ChannelAttributes", "LineAttributes", "WhizzMetadata"]
