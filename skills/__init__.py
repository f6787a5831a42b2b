"""Skill bundle discovery and enable/disable handling."""

from .parser import NO_DESCRIPTION, extract_description
from .registry import SkillRegistry
from .types import (
    MANIFEST_NAME,
    AssetEntry,
    CommandEntry,
    ScanIssue,
    ScanReport,
    SkillEntry,
    SkillState,
    check_entry_name,
)

__all__ = [
    "AssetEntry",
    "CommandEntry",
    "MANIFEST_NAME",
    "NO_DESCRIPTION",
    "ScanIssue",
    "ScanReport",
    "SkillEntry",
    "SkillRegistry",
    "SkillState",
    "check_entry_name",
    "extract_description",
]
