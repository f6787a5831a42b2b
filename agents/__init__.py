"""Agent ownership, cross-agent copies and self-relocation."""

from .locator import (
    AGENT_KINDS,
    AgentContext,
    AgentKind,
    BundleLocator,
    FlatLocator,
    PackageLocator,
    default_locator,
    is_installed_in_agent_tree,
    list_available_agents,
    resolve_agent_context,
)
from .propagation import ConflictInfo, check_conflict, copy_skill_to_other_agent
from .relocation import (
    Launcher,
    RelocationResult,
    SubprocessLauncher,
    install_into,
    launch_staged,
    stage_package_copy,
    switch_agent_type,
)
from .shortcut import can_offer_command_shortcut, install_command_shortcut

__all__ = [
    "AGENT_KINDS",
    "AgentContext",
    "AgentKind",
    "BundleLocator",
    "ConflictInfo",
    "FlatLocator",
    "Launcher",
    "PackageLocator",
    "RelocationResult",
    "SubprocessLauncher",
    "can_offer_command_shortcut",
    "check_conflict",
    "copy_skill_to_other_agent",
    "default_locator",
    "install_command_shortcut",
    "install_into",
    "is_installed_in_agent_tree",
    "launch_staged",
    "list_available_agents",
    "resolve_agent_context",
    "stage_package_copy",
    "switch_agent_type",
]
