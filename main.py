"""Main entry point for skill-manager."""

import argparse
import asyncio
import importlib.metadata
import sys

from agents import AgentKind
from config import Config
from errors import ConflictError, InvalidStateError, NotFoundError, SkillManagerError
from service import SkillService
from skills import check_entry_name
from utils import get_log_file_path, setup_logger, terminal_ui
from utils.runtime import ensure_runtime_dirs


async def _cmd_list(service: SkillService, args) -> None:
    report = await service.scan_skills()
    skills = report.skills
    if args.enabled:
        skills = [s for s in skills if s.enabled]
    elif args.disabled:
        skills = [s for s in skills if not s.enabled]

    config = await service.load_categories()
    by_skill = {skill: cat for cat, names in config.categories.items() for skill in names}
    terminal_ui.print_skills(skills, categories=by_skill)
    for issue in report.issues:
        terminal_ui.print_warning(f"{issue.path}: {issue.reason}")


async def _cmd_show(service: SkillService, args) -> None:
    matches = [s for s in await service.list_skills() if s.name == args.name]
    if not matches:
        raise NotFoundError(f"Skill '{args.name}' not found")
    for skill in matches:
        terminal_ui.print_skill_detail(skill)


async def _cmd_toggle(service: SkillService, args, enabled: bool) -> None:
    if args.category:
        config = await service.load_categories()
        if args.category not in config.categories:
            raise NotFoundError(f"Category '{args.category}' does not exist")
        names = config.categories[args.category]
    elif args.names:
        names = args.names
    else:
        raise InvalidStateError("Name at least one skill or pass --category")
    moved = await service.set_skills_enabled(names, enabled)
    state = "enabled" if enabled else "disabled"
    for name in names:
        if name in moved:
            terminal_ui.print_success(f"{name} {state}")
        else:
            terminal_ui.print_info(f"{name} already {state} or not found")


async def _cmd_delete(service: SkillService, args) -> None:
    await service.delete_skill(args.name, enabled=not args.disabled)
    terminal_ui.print_success(f"Deleted {args.name}")


async def _cmd_categories(service: SkillService, args) -> None:
    config = await service.load_categories()
    action = args.action or "list"

    if action == "list":
        skills = await service.list_skills()
        shown = config.normalized(s.name for s in skills)
        terminal_ui.print_categories(shown.category_order, shown.categories)
        missing, unknown = config.order_divergence()
        if missing or unknown:
            terminal_ui.print_warning(
                "Category order is out of step with the stored categories; "
                "run `skill-manager categories order` to fix it."
            )
        return

    try:
        if action == "add":
            updated = config.add_category(args.name)
        elif action == "remove":
            updated = config.remove_category(args.name)
        elif action == "rename":
            updated = config.rename_category(args.old, args.new)
        elif action == "order":
            updated = config.reorder(args.names) if args.names else config.normalized()
        elif action == "assign":
            updated = config
            for skill in args.skills:
                updated = updated.assign_skill(check_entry_name(skill), args.category)
        else:
            raise ValueError(f"Unknown action: {action}")
    except KeyError as e:
        raise NotFoundError(e.args[0]) from e
    except ValueError as e:
        raise InvalidStateError(str(e)) from e

    await service.save_categories(updated)
    terminal_ui.print_categories(updated.category_order, updated.categories)


async def _cmd_agent(service: SkillService, args) -> None:
    context = service.get_agent_context()
    available = service.list_available_agent_kinds()
    terminal_ui.print_config(
        {
            "Agent": context.kind.value,
            "Agent root": context.base_dir if context.installed else "-",
            "Project": service.get_project_path() or "-",
            "Available agents": ", ".join(sorted(k.value for k in available)) or "-",
            "Command shortcut": "available" if service.can_offer_command_shortcut() else "-",
        }
    )


async def _cmd_switch(service: SkillService, args) -> None:
    kind = AgentKind(args.kind)
    result = await service.switch_agent_type(kind)
    if result is None:
        terminal_ui.print_info(f"Already running as {kind.display_name}")
        return
    terminal_ui.print_success(f"Started {kind.display_name} copy from {result.staged_path}")


async def _cmd_copy(service: SkillService, args) -> None:
    enabled = not args.disabled
    conflict = await service.check_skill_conflict(args.name, enabled)
    try:
        destination = await service.copy_skill_to_other_agent(args.name, enabled)
    except ConflictError:
        if conflict.exists:
            terminal_ui.print_config(
                {
                    "Source modified": conflict.source_modified or "-",
                    "Target modified": conflict.target_modified or "-",
                }
            )
        raise
    terminal_ui.print_success(f"Copied {args.name} to {destination}")


async def _cmd_install(service: SkillService, args) -> None:
    result = await service.install_into(args.path)
    terminal_ui.print_success(f"Installed and started {result.staged_path}")


async def _cmd_shortcut(service: SkillService, args) -> None:
    if not service.can_offer_command_shortcut() and not args.force:
        terminal_ui.print_info("Command shortcut is not available or already installed")
        return
    path = await service.install_command_shortcut()
    terminal_ui.print_success(f"Wrote {path}")


async def _cmd_project(service: SkillService, args) -> None:
    if args.path:
        path = service.set_project_path(args.path)
        terminal_ui.print_success(f"Project set to {path}")
        return
    terminal_ui.print_config({"Project": service.get_project_path() or "-"})


async def _cmd_commands(service: SkillService, args) -> None:
    if args.enable or args.disable:
        name = args.enable or args.disable
        moved = await service.set_command_enabled(name, enabled=bool(args.enable))
        if not moved:
            terminal_ui.print_info(f"/{name} unchanged")
    terminal_ui.print_commands(await service.list_commands())


_HANDLERS = {
    "list": _cmd_list,
    "show": _cmd_show,
    "enable": lambda service, args: _cmd_toggle(service, args, True),
    "disable": lambda service, args: _cmd_toggle(service, args, False),
    "delete": _cmd_delete,
    "categories": _cmd_categories,
    "agent": _cmd_agent,
    "switch": _cmd_switch,
    "copy-to-other": _cmd_copy,
    "install": _cmd_install,
    "shortcut": _cmd_shortcut,
    "project": _cmd_project,
    "commands": _cmd_commands,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skill-manager",
        description="Manage the skills of a .claude / .codex project directory",
    )

    try:
        version = importlib.metadata.version("skill-manager")
    except importlib.metadata.PackageNotFoundError:
        version = "dev"
    parser.add_argument("--version", "-V", action="version", version=f"skill-manager {version}")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging to ~/.skill-manager/logs/",
    )

    sub = parser.add_subparsers(dest="command")

    p_list = sub.add_parser("list", help="List skills")
    state = p_list.add_mutually_exclusive_group()
    state.add_argument("--enabled", action="store_true", help="Only enabled skills")
    state.add_argument("--disabled", action="store_true", help="Only disabled skills")

    p_show = sub.add_parser("show", help="Show a skill's manifest and files")
    p_show.add_argument("name")

    for name, verb in (("enable", "Enable"), ("disable", "Disable")):
        p = sub.add_parser(name, help=f"{verb} skills")
        p.add_argument("names", nargs="*", help="Skill names")
        p.add_argument("--category", "-c", help=f"{verb} every skill in this category")

    p_delete = sub.add_parser("delete", help="Delete a skill bundle")
    p_delete.add_argument("name")
    p_delete.add_argument("--disabled", action="store_true", help="Delete from disabled skills")

    p_cat = sub.add_parser("categories", help="Show or edit categories")
    cat_sub = p_cat.add_subparsers(dest="action")
    cat_sub.add_parser("list", help="Show categories in display order")
    cat_sub.add_parser("add", help="Add a category").add_argument("name")
    cat_sub.add_parser("remove", help="Remove a category").add_argument("name")
    p_rename = cat_sub.add_parser("rename", help="Rename a category")
    p_rename.add_argument("old")
    p_rename.add_argument("new")
    cat_sub.add_parser(
        "order", help="Set display order (no names: repair the stored order)"
    ).add_argument("names", nargs="*")
    p_assign = cat_sub.add_parser("assign", help="Move skills into a category")
    p_assign.add_argument("category")
    p_assign.add_argument("skills", nargs="+")

    sub.add_parser("agent", help="Show which agent owns this installation")

    p_switch = sub.add_parser("switch", help="Install into the other agent directory and start it")
    p_switch.add_argument("kind", choices=[k.value for k in (AgentKind.CLAUDE, AgentKind.CODEX)])

    p_copy = sub.add_parser("copy-to-other", help="Copy a skill to the other agent")
    p_copy.add_argument("name")
    p_copy.add_argument("--disabled", action="store_true", help="Source skill is disabled")

    p_install = sub.add_parser("install", help="Install into <path>/.claude and start it")
    p_install.add_argument("path")

    p_shortcut = sub.add_parser("shortcut", help="Add a launcher slash command")
    p_shortcut.add_argument("--force", action="store_true", help="Rewrite an existing shortcut")

    p_project = sub.add_parser("project", help="Show or set the project used outside agent trees")
    p_project.add_argument("path", nargs="?")

    p_commands = sub.add_parser("commands", help="List slash commands")
    toggle = p_commands.add_mutually_exclusive_group()
    toggle.add_argument("--enable", metavar="NAME")
    toggle.add_argument("--disable", metavar="NAME")

    return parser


async def run(args, service: SkillService | None = None) -> int:
    service = service or SkillService()
    handler = _HANDLERS[args.command or "list"]
    if args.command is None:
        args = argparse.Namespace(**vars(args), enabled=False, disabled=False)
    try:
        await handler(service, args)
    except SkillManagerError as e:
        terminal_ui.print_error(str(e), title=type(e).__name__)
        return 1
    except OSError as e:
        terminal_ui.print_error(str(e), title="File Error")
        return 1
    return 0


def main():
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    # Initialize runtime directories (create logs dir only in verbose mode)
    ensure_runtime_dirs(create_logs=args.verbose)

    if args.verbose:
        setup_logger()

    try:
        Config.validate()
    except ValueError as e:
        terminal_ui.print_error(str(e), title="Configuration Error")
        sys.exit(1)

    exit_code = asyncio.run(run(args))

    log_file = get_log_file_path()
    if log_file:
        terminal_ui.print_log_location(log_file)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
