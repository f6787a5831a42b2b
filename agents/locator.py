"""Find the agent root that hosts the running application.

The installed package sits directly inside an agent root::

    macOS:   <project>/.claude/Skill Manager.app/Contents/MacOS/<exe>
    others:  <project>/.claude/<exe>

The basename of that root decides which agent owns the installation.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from errors import InvalidStateError


class AgentKind(Enum):
    CLAUDE = "claude"
    CODEX = "codex"
    NONE = "none"

    @property
    def root_name(self) -> str | None:
        return {AgentKind.CLAUDE: ".claude", AgentKind.CODEX: ".codex"}.get(self)

    @property
    def directory_name(self) -> str:
        """Root directory name for a real agent; NONE has none."""
        name = self.root_name
        if name is None:
            raise InvalidStateError(f"Agent kind '{self.value}' has no root directory")
        return name

    @property
    def other(self) -> "AgentKind":
        return {
            AgentKind.CLAUDE: AgentKind.CODEX,
            AgentKind.CODEX: AgentKind.CLAUDE,
        }.get(self, AgentKind.NONE)

    @property
    def display_name(self) -> str:
        return {AgentKind.CLAUDE: "Claude Code", AgentKind.CODEX: "Codex"}.get(self, "none")

    @classmethod
    def from_root_name(cls, name: str) -> "AgentKind":
        for kind in (cls.CLAUDE, cls.CODEX):
            if kind.root_name == name:
                return kind
        return cls.NONE


AGENT_KINDS = (AgentKind.CLAUDE, AgentKind.CODEX)


@dataclass(frozen=True)
class AgentContext:
    kind: AgentKind
    base_dir: Path
    project_root: Path | None

    @property
    def installed(self) -> bool:
        return self.kind is not AgentKind.NONE

    def agent_root(self, kind: AgentKind) -> Path | None:
        """Root of ``kind`` inside the same project (may not exist)."""
        if self.project_root is None or kind.root_name is None:
            return None
        return self.project_root / kind.root_name


class PackageLocator:
    """Where the running application's package lives on disk."""

    # Directories between the package root and the executable
    package_depth = 0

    def __init__(self, executable: str | Path) -> None:
        self.executable = Path(executable).resolve()

    def locate_own_package(self) -> Path:
        return self.locate_package_parent(self.package_depth)

    def locate_package_parent(self, levels: int) -> Path:
        """Directory ``levels`` steps above the executable's own directory."""
        path = self.executable.parent
        for _ in range(levels):
            path = path.parent
        return path

    def agent_root(self) -> Path:
        return self.locate_own_package().parent

    @property
    def is_bundle(self) -> bool:
        return self.package_depth > 0


class BundleLocator(PackageLocator):
    """macOS application bundle: ``X.app/Contents/MacOS/<exe>``."""

    package_depth = 2


class FlatLocator(PackageLocator):
    """Single executable file; its directory is the agent root."""

    def locate_own_package(self) -> Path:
        return self.executable


def _running_executable() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable)
    return Path(sys.argv[0] or sys.executable)


def default_locator(platform: str | None = None, executable: str | Path | None = None) -> PackageLocator:
    platform = platform or sys.platform
    executable = executable or _running_executable()
    if platform == "darwin" and ".app/Contents/MacOS" in Path(executable).resolve().as_posix():
        return BundleLocator(executable)
    return FlatLocator(executable)


def resolve_agent_context(locator: PackageLocator | None = None) -> AgentContext:
    """Compute the agent context from the package location (never cached)."""
    locator = locator or default_locator()
    base_dir = locator.agent_root()
    kind = AgentKind.from_root_name(base_dir.name)
    project_root = base_dir.parent if kind is not AgentKind.NONE else None
    return AgentContext(kind=kind, base_dir=base_dir, project_root=project_root)


def is_installed_in_agent_tree(locator: PackageLocator | None = None) -> bool:
    return resolve_agent_context(locator).installed


def list_available_agents(locator: PackageLocator | None = None) -> set[AgentKind]:
    """Agent roots that exist next to each other in the current project."""
    context = resolve_agent_context(locator)
    available: set[AgentKind] = set()
    for kind in AGENT_KINDS:
        root = context.agent_root(kind)
        if root is not None and root.is_dir():
            available.add(kind)
    return available
