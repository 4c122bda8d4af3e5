"""api-gen command-line interface.

Usage::

    api-gen create my-api
    api-gen create my-api --template auth --output ./projects
    api-gen status
    api-gen upgrade
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Sequence

from jinja2 import TemplateError
from rich.markup import escape

from api_gen import __version__
from api_gen.config import Config
from api_gen.scaffolder import ProjectGenerator, ScaffoldError, TemplateKind
from api_gen.usage import FREE_TIER_LIMIT, JsonFileUsageStore, UsageGate
from api_gen.utils import (
    console,
    create_progress,
    print_banner,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

CONTACT = "contact@kasbahcode.com"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_create(args: argparse.Namespace, config: Config, gate: UsageGate) -> int:
    """Generate a project if the free-tier gate allows it."""
    if not gate.may_proceed():
        print_error("\nFREE VERSION LIMIT REACHED")
        print_warning(f"You've generated {gate.limit} projects with the free version.")
        console.print(f"[cyan]Upgrade to PRO for unlimited generations: {CONTACT}[/cyan]\n")
        return 1

    output_dir = Path(args.output) if args.output else config.output_dir
    generator = ProjectGenerator()
    try:
        with create_progress() as progress:
            progress.add_task(f"Creating {args.template} template...", total=None)
            project_root = asyncio.run(
                generator.generate(args.project_name, args.template, output_dir)
            )
    except (ScaffoldError, OSError, TemplateError) as exc:
        print_error(f"Error creating project: {escape(str(exc))}")
        return 1

    gate.record_usage()

    print_success(f'\nAPI boilerplate "{project_root.name}" created successfully!')
    console.print("[yellow]\nNext steps:[/yellow]")
    console.print(f"  cd {project_root.name}")
    console.print("  npm install")
    console.print("  cp .env.example .env")
    console.print("  npm run dev\n")
    return 0


def cmd_status(args: argparse.Namespace, config: Config, gate: UsageGate) -> int:
    """Show how many free generations are used and left."""
    status = gate.status()
    print_summary_table(
        {
            "Projects generated": f"{status.used}/{status.limit}",
            "Remaining": str(status.remaining),
        },
        title="Usage Status (FREE Version)",
    )
    if status.limit_reached:
        print_error("Limit reached! Upgrade to PRO for unlimited access.")
        print_warning(f"Contact: {CONTACT}\n")
    else:
        print_success(f"You can generate {status.remaining} more projects.\n")
    return 0


def cmd_upgrade(args: argparse.Namespace, config: Config, gate: UsageGate) -> int:
    console.print("[cyan]\nUpgrade to PRO Version:[/cyan]")
    for line in (
        "Unlimited project generation",
        "Advanced templates (e-commerce, microservices)",
        "Database migration scripts",
        "6 months email support",
        "All future updates for 1 year",
    ):
        console.print(f"  • {line}")
    console.print("[yellow]\nOnly $49 - Pay once, use forever![/yellow]")
    console.print(f"[green]Contact: {CONTACT}[/green]\n")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="api-gen",
        description="Generate production-ready Node.js/Express API boilerplates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  api-gen create my-api\n"
            "  api-gen create my-api --template auth\n"
            "  api-gen status\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser("create", help="Create a new API boilerplate project")
    create.add_argument("project_name", metavar="project-name")
    create.add_argument(
        "--template", "-t",
        default=config.default_template,
        choices=[k.value for k in TemplateKind],
        help="Template type (default: %(default)s)",
    )
    create.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    create.set_defaults(handler=cmd_create)

    status = subparsers.add_parser("status", help="Check your usage status")
    status.set_defaults(handler=cmd_status)

    upgrade = subparsers.add_parser("upgrade", help="Get upgrade information")
    upgrade.set_defaults(handler=cmd_upgrade)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``api-gen`` and ``python -m api_gen``."""
    config = Config.from_env()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    print_banner("API Generator", f"FREE Version (Limited to {FREE_TIER_LIMIT} projects)")

    if args.command is None:
        parser.print_help()
        return 0

    gate = UsageGate(JsonFileUsageStore(config.usage_file))
    return args.handler(args, config, gate)


if __name__ == "__main__":
    raise SystemExit(main())
