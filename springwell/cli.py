"""
Command-line interface for SpringWell.

Builds the argparse parser and dispatches each subcommand to
:class:`CLIHandler`, which the interactive mode reuses.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import requests
from rich.console import Console
from rich.table import Table
from rich import box

from . import __version__
from .build import BuildRunner, check_project_health
from .codegen.core.generator import GenerationRequest, GenerationResult, write_artifacts
from .codegen.languages.java.generator import COMPONENT_ARTIFACTS, create_spring_generator
from .config import load_config
from .errors import SpringWellError
from .logging_config import get_logger
from .output import OutputSink
from .project import (
    AUTH_TYPES,
    CLOUD_PROVIDERS,
    DATABASES,
    PROJECT_TEMPLATES,
    ProjectError,
    ProjectOptions,
    ProjectScaffolder,
)
from .utils import is_spring_boot_project

logger = get_logger(__name__)

STANDALONE_COMPONENTS = [kind for kind in COMPONENT_ARTIFACTS if kind != "entity"]


class CLIHandler:
    """Run SpringWell operations against a working directory."""

    def __init__(
        self,
        output: OutputSink,
        project_dir: Path = Path("."),
        console: Console | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.output = output
        self.project_dir = Path(project_dir)
        self.console = console or Console()
        self.session = session
        logger.debug("CLIHandler initialized for %s", self.project_dir)

    def run(self, args: argparse.Namespace) -> int:
        """Dispatch parsed arguments to the matching command.

        Returns:
            Exit code (0 for success, 1 for failure, or the build tool's status).
        """
        handler = getattr(args, "handler", None)
        if handler is None:
            return 0
        try:
            return handler(self, args)
        except SpringWellError as e:
            logger.debug("Command failed", exc_info=True)
            self.output.error(str(e))
            return 1

    # Operations shared with the interactive mode

    def new_project(self, options: ProjectOptions) -> Path:
        self.output.info(f"Creating project {options.name} with template {options.template}...")
        scaffolder = ProjectScaffolder(self.output, self.project_dir, self.session)
        return scaffolder.create(options)

    def require_project(self) -> None:
        if not is_spring_boot_project(self.project_dir):
            raise ProjectError("Current directory is not a Spring Boot project")

    def generate_entity(
        self, name: str, fields: str = "", relations: str = "", **options: Any
    ) -> GenerationResult:
        """Parse, render and write an entity with its companion artifacts."""
        self.require_project()
        config = load_config(self.project_dir)
        if options.get("lombok") is None:
            options["lombok"] = config.code.lombok

        request = GenerationRequest.from_specs(name, fields, relations, **options)
        generator = create_spring_generator(config, self.project_dir)
        result = generator.generate_entity(request)
        self._write(result)
        self.output.success(
            f"Successfully generated {request.entity_name} entity and related components"
        )
        return result

    def generate_component(self, kind: str, name: str) -> GenerationResult:
        self.require_project()
        config = load_config(self.project_dir)
        generator = create_spring_generator(config, self.project_dir)
        result = generator.generate_component(kind, name)
        self._write(result)
        self.output.success(f"Successfully generated {name} {kind}")
        return result

    def dev(self, port: int = 8080, profile: str = "dev", debug: bool = False) -> int:
        self.output.info(f"Starting development server on port {port} with profile {profile}...")
        return BuildRunner(self.project_dir).dev(port, profile, debug)

    def build(self) -> int:
        self.output.info("Building project...")
        return BuildRunner(self.project_dir).build()

    def test(self, test_name: str = "") -> int:
        self.output.info(f"Running test {test_name}..." if test_name else "Running tests...")
        return BuildRunner(self.project_dir).test(test_name)

    def doctor(self) -> int:
        report = check_project_health(self.project_dir)
        if report.healthy:
            self.output.success("Project looks healthy!")
            return 0

        table = Table(title="Project Health", box=box.ROUNDED, title_style="bold cyan")
        table.add_column("Status", no_wrap=True)
        table.add_column("Item")
        for item in report.missing:
            table.add_row("[red]missing[/red]", item)
        for warning in report.warnings:
            table.add_row("[yellow]warning[/yellow]", warning)
        self.console.print(table)

        if report.missing:
            self.output.error(f"{len(report.missing)} essential item(s) missing")
            return 1
        self.output.warning("Project is usable but has warnings")
        return 0

    def _write(self, result: GenerationResult) -> None:
        for warning in result.warnings:
            self.output.warning(warning)
        write_artifacts(result.artifacts, self.output)


def _handle_new(handler: CLIHandler, args: argparse.Namespace) -> int:
    options = ProjectOptions(
        name=args.name,
        package=args.package or "",
        db=args.db,
        auth=args.auth,
        cloud=args.cloud,
        features=args.features,
        template=args.template,
    )
    handler.new_project(options)
    return 0


def _handle_generate_entity(handler: CLIHandler, args: argparse.Namespace) -> int:
    handler.generate_entity(
        args.name,
        args.fields or "",
        args.relations or "",
        table_name=args.table or "",
        audit=args.audit,
        lombok=args.lombok,
        generate_dto=args.dto,
        generate_repository=not args.no_repository,
        generate_service=not args.no_service,
        generate_controller=not args.no_controller,
    )
    return 0


def _handle_generate_component(handler: CLIHandler, args: argparse.Namespace) -> int:
    handler.generate_component(args.component, args.name)
    return 0


def _handle_dev(handler: CLIHandler, args: argparse.Namespace) -> int:
    return handler.dev(args.port, args.profile, args.debug)


def _handle_build(handler: CLIHandler, args: argparse.Namespace) -> int:
    return handler.build()


def _handle_test(handler: CLIHandler, args: argparse.Namespace) -> int:
    return handler.test(args.test or "")


def _handle_doctor(handler: CLIHandler, args: argparse.Namespace) -> int:
    return handler.doctor()


def _handle_interactive(handler: CLIHandler, args: argparse.Namespace) -> int:
    from .interactive import InteractiveHandler

    return InteractiveHandler(handler).run()


def _add_generate_parser(subparsers) -> None:
    generate = subparsers.add_parser(
        "generate",
        aliases=["g"],
        help="Generate code components",
        description="Generate entities and other Spring Boot components",
    )
    components = generate.add_subparsers(dest="component", metavar="COMPONENT")
    components.required = True

    entity = components.add_parser(
        "entity",
        help="Generate an entity and its related components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  springwell generate entity BlogPost -f "title:String content:Text:nullable"
  springwell generate entity Order -r "manyToOne:customer:Customer" --no-dto
        """.strip(),
    )
    entity.add_argument("name", help="Entity name")
    entity.add_argument(
        "--fields", "-f", help='Field definitions (format: "name:type[:modifier]")'
    )
    entity.add_argument(
        "--relations", "-r", help='Relationship definitions (format: "type:field:entity")'
    )
    entity.add_argument(
        "--table", "-t", help="Database table name (default: derived from entity name)"
    )
    entity.add_argument(
        "--audit",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Add auditing fields (created/updated timestamps)",
    )
    entity.add_argument(
        "--lombok",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use Lombok annotations (default: from .springwell.yml)",
    )
    entity.add_argument(
        "--dto",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Generate DTO classes",
    )
    entity.add_argument(
        "--no-repository", action="store_true", help="Skip repository generation"
    )
    entity.add_argument("--no-service", action="store_true", help="Skip service generation")
    entity.add_argument(
        "--no-controller", action="store_true", help="Skip controller generation"
    )
    entity.set_defaults(handler=_handle_generate_entity)

    descriptions = {
        "controller": "Generate a REST controller",
        "service": "Generate a service class",
        "repository": "Generate a repository interface",
        "dto": "Generate a DTO class",
        "workflow": "Generate a Temporal workflow with its activity",
        "activity": "Generate a Temporal activity",
    }
    for kind in STANDALONE_COMPONENTS:
        component = components.add_parser(kind, help=descriptions.get(kind, kind))
        component.add_argument("name", help=f"{kind.title()} name")
        component.set_defaults(handler=_handle_generate_component)


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="springwell",
        description="SpringWell - your Spring Boot companion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  springwell new my-service --template aws-temporal-auth0
  springwell generate entity Product -f "name:String price:BigDecimal"
  springwell dev --port 9090
  springwell interactive
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--quiet", "-q", action="store_true", help="Only print errors"
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    output_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show informational log records"
    )
    output_group.add_argument(
        "--debug-log", action="store_true", help="Show debug log records"
    )
    output_group.add_argument("--log-file", metavar="FILE", help="Also write logs to FILE")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    new = subparsers.add_parser("new", help="Create a new Spring Boot project")
    new.add_argument("name", help="Project name")
    new.add_argument(
        "--package", "-p", help="Base package name (default: com.<project name>)"
    )
    new.add_argument("--db", choices=DATABASES, default="postgres", help="Database type")
    new.add_argument("--auth", choices=AUTH_TYPES, default="jwt", help="Authentication type")
    new.add_argument("--cloud", choices=CLOUD_PROVIDERS, default="aws", help="Cloud provider")
    new.add_argument(
        "--features", default="swagger,actuator", help="Comma-separated list of features"
    )
    new.add_argument(
        "--template", choices=PROJECT_TEMPLATES, default="basic", help="Project template"
    )
    new.set_defaults(handler=_handle_new)

    dev = subparsers.add_parser("dev", help="Run the application in development mode")
    dev.add_argument("--port", type=int, default=8080, help="Server port")
    dev.add_argument("--profile", default="dev", help="Spring profile")
    dev.add_argument("--debug", action="store_true", help="Enable debug mode")
    dev.set_defaults(handler=_handle_dev)

    build = subparsers.add_parser("build", help="Build the application")
    build.set_defaults(handler=_handle_build)

    test = subparsers.add_parser("test", help="Run tests")
    test.add_argument("--test", help="Specific test to run")
    test.set_defaults(handler=_handle_test)

    doctor = subparsers.add_parser("doctor", help="Check project health and suggest fixes")
    doctor.set_defaults(handler=_handle_doctor)

    _add_generate_parser(subparsers)

    interactive = subparsers.add_parser(
        "interactive", aliases=["i"], help="Run the CLI in interactive mode"
    )
    interactive.set_defaults(handler=_handle_interactive)

    return parser
