"""Sync engine for pydroidsync - mirror a device directory tree locally."""

from .comparator import (
    FileComparator,
    SyncAction,
    SyncDecision,
    timestamps_equivalent,
)
from .config import DEFAULT_IGNORE_PATTERNS, SyncConfig, split_ignore_patterns
from .engine import SyncEngine
from .ignore import IgnoreMatcher, IgnorePattern, compile_pattern
from .listing import DirectoryEntry, extract_file_size, parse_listing

__all__ = [
    "SyncEngine",
    "SyncConfig",
    "DEFAULT_IGNORE_PATTERNS",
    "split_ignore_patterns",
    "FileComparator",
    "SyncAction",
    "SyncDecision",
    "timestamps_equivalent",
    "IgnoreMatcher",
    "IgnorePattern",
    "compile_pattern",
    "DirectoryEntry",
    "extract_file_size",
    "parse_listing",
]
