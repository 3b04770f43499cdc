import argparse
import sys
from typing import Callable, Iterable

from . import __version__
from .admin import RoleAdmin
from .controller import TagController
from .env import Settings, load_env
from .errors import InvalidTagError, RoletaggerError
from .logger import get_logger
from .navigation import Key
from .notes import NotesRepository
from .registry import TagRegistry
from .storage import RegistryRepository
from .suggest import suggest
from .workspace import TaggingWorkspace

HELP_TEXT = """Type text to search roles. Commands:
  :down / :up        move the highlight
  :enter             commit the highlighted suggestion or the typed text
  :esc               hide suggestions
  :dismiss           same as clicking outside the input
  :click N / :hover N
  :remove ROLE       remove a role from the candidate
  :quit"""

KEY_COMMANDS = {
    ":down": Key.ARROW_DOWN,
    ":up": Key.ARROW_UP,
    ":enter": Key.ENTER,
    ":esc": Key.ESCAPE,
}


def render(controller: TagController) -> str:
    lines = [f"Roles: {', '.join(controller.selection) or '(none)'}"]
    if controller.input_text:
        lines.append(f"Input: {controller.input_text}")
    for i, suggestion in enumerate(controller.suggestions):
        marker = ">" if i == controller.active_index else " "
        lines.append(f" {marker} [{i}] {suggestion.label}")
    return "\n".join(lines)


def run_tag_session(controller: TagController, lines: Iterable[str], out: Callable[[str], None] = print) -> None:
    """
    Drive a controller from text lines, one event per line.

    Plain text replaces the input; lines starting with ':' are commands.
    """
    out(render(controller))
    for line in lines:
        line = line.rstrip("\n")
        command, _, arg = line.partition(" ")
        if command == ":quit":
            break
        if command == ":help":
            out(HELP_TEXT)
            continue
        if command in KEY_COMMANDS:
            controller.on_key(KEY_COMMANDS[command])
        elif command == ":dismiss":
            controller.dismiss()
        elif command in (":click", ":hover"):
            try:
                index = int(arg)
            except ValueError:
                out(f"Expected a suggestion number, got {arg!r}")
                continue
            if command == ":click":
                controller.on_suggestion_clicked(index)
            else:
                controller.on_suggestion_hovered(index)
        elif command == ":remove":
            controller.on_remove(arg)
        elif line.startswith(":"):
            out(f"Unknown command: {command} (try :help)")
            continue
        else:
            controller.on_input_changed(line)
        out(render(controller))


def _settings(args: argparse.Namespace) -> Settings:
    try:
        return Settings.from_env(backend=args.backend, store=args.store)
    except ValueError as e:
        raise SystemExit(str(e))


def cmd_roles_list(args: argparse.Namespace) -> None:
    store = _settings(args).open_store()
    roles = TagRegistry(RegistryRepository(store).load(seed=False)).to_list()
    if not roles:
        print("No roles registered.")
        return
    for role in roles:
        print(role)


def cmd_roles_add(args: argparse.Namespace) -> None:
    store = _settings(args).open_store()
    admin = RoleAdmin(RegistryRepository(store))
    try:
        added = admin.add_role(args.name)
    except InvalidTagError as e:
        raise SystemExit(str(e))
    print("Added" if added else "Already registered")


def cmd_roles_remove(args: argparse.Namespace) -> None:
    store = _settings(args).open_store()
    admin = RoleAdmin(RegistryRepository(store))
    removed = admin.remove_role(args.name)
    print("Removed" if removed else "Not registered")


def cmd_notes_show(args: argparse.Namespace) -> None:
    store = _settings(args).open_store()
    notes = NotesRepository(store).load(args.candidate)
    print(f"Candidate: {args.candidate}")
    print(f"  Roles: {', '.join(notes.potential_roles) or '(none)'}")
    print(f"  Salary range: {notes.salary_range}")
    print(f"  Potential contracts: {notes.potential_contracts}")
    print(f"  Notes: {notes.general_notes}")


def cmd_suggest(args: argparse.Namespace) -> None:
    store = _settings(args).open_store()
    registry = RegistryRepository(store).load(seed=False)
    selection = NotesRepository(store).load(args.candidate).potential_roles
    suggestions = suggest(args.text, selection, TagRegistry(registry))
    if not suggestions:
        print("No suggestions.")
        return
    for i, suggestion in enumerate(suggestions):
        print(f"[{i}] {suggestion.label}")


def cmd_tag(args: argparse.Namespace) -> None:
    store = _settings(args).open_store()
    workspace = TaggingWorkspace(store)
    controller = workspace.open(args.candidate)
    print(HELP_TEXT)
    try:
        run_tag_session(controller, sys.stdin)
    finally:
        workspace.close(args.candidate)
        get_logger().log_metrics_summary()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roletagger", description="Attach potential roles to candidates")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--backend", choices=["json", "sqlite"], help="Store backend (or set ROLETAGGER_BACKEND)")
    parser.add_argument("--store", help="Path to store file (or set ROLETAGGER_STORE)")

    subparsers = parser.add_subparsers(dest="command")

    roles = subparsers.add_parser("roles", help="Manage the shared role list")
    roles_sub = roles.add_subparsers(dest="roles_command", required=True)
    rl = roles_sub.add_parser("list", help="List registered roles")
    rl.set_defaults(func=cmd_roles_list)
    ra = roles_sub.add_parser("add", help="Register a role (stored upper-case)")
    ra.add_argument("name", help="Role name, e.g. SRE")
    ra.set_defaults(func=cmd_roles_add)
    rr = roles_sub.add_parser("remove", help="Remove a role from the registry")
    rr.add_argument("name", help="Role name")
    rr.set_defaults(func=cmd_roles_remove)

    notes = subparsers.add_parser("notes", help="Show a candidate's notes and roles")
    notes.add_argument("--candidate", required=True, help="Candidate ID")
    notes.set_defaults(func=cmd_notes_show)

    sug = subparsers.add_parser("suggest", help="Print role suggestions for some input text")
    sug.add_argument("--candidate", required=True, help="Candidate ID")
    sug.add_argument("--text", required=True, help="Input text")
    sug.set_defaults(func=cmd_suggest)

    tag = subparsers.add_parser("tag", help="Interactively tag a candidate with roles")
    tag.add_argument("--candidate", required=True, help="Candidate ID")
    tag.set_defaults(func=cmd_tag)

    return parser


def main(argv=None):
    load_env()
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return

    settings = _settings(args)
    get_logger(level=settings.log_level, log_dir=settings.log_dir)

    if hasattr(args, "func"):
        try:
            args.func(args)
        except RoletaggerError as e:
            raise SystemExit(f"Error: {e}")
        return

    build_parser().print_help()


if __name__ == "__main__":
    main()
