from __future__ import annotations

from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt

from .cli import CLIHandler
from .errors import SpringWellError
from .logging_config import get_logger
from .project import AWS_TEMPORAL_AUTH0_TEMPLATE, BASIC_TEMPLATE, ProjectOptions

logger = get_logger(__name__)

COMPONENT_CHOICES = {
    "1": "entity",
    "2": "controller",
    "3": "service",
    "4": "repository",
    "5": "dto",
    "6": "workflow",
    "7": "activity",
}
DATABASE_CHOICES = {"1": "postgres", "2": "mysql", "3": "h2"}
TEMPLATE_CHOICES = {"1": BASIC_TEMPLATE, "2": AWS_TEMPORAL_AUTH0_TEMPLATE}


class InteractiveHandler:
    """Menu-driven front end over :class:`CLIHandler`."""

    def __init__(self, handler: CLIHandler) -> None:
        self.handler = handler
        self.console = handler.console
        self.output = handler.output
        logger.debug("InteractiveHandler initialized")

    def run(self) -> int:
        """Run the menu loop until the user exits.

        Returns:
            Exit code (always 0).
        """
        self.console.print(
            Panel.fit(
                "[bold green]Welcome to SpringWell CLI[/bold green]\n"
                "[cyan]Your Spring Boot Companion[/cyan]",
                border_style="green",
            )
        )

        actions = {
            "1": self._generate_project,
            "2": self._generate_components,
            "3": self._run_dev,
            "4": self.handler.build,
            "5": self._run_tests,
            "6": self.handler.doctor,
        }

        while True:
            self._show_main_menu()
            choice = Prompt.ask(
                "\n[bold]Enter your choice[/bold]",
                choices=["0", "1", "2", "3", "4", "5", "6"],
                default="0",
            )

            if choice == "0":
                self.output.info("Exiting SpringWell CLI. Goodbye!")
                break

            try:
                actions[choice]()
            except SpringWellError as e:
                logger.debug("Interactive action %s failed", choice, exc_info=True)
                self.output.error(str(e))

        return 0

    def _show_main_menu(self) -> None:
        menu_panel = Panel.fit(
            """[bold blue]Main Menu[/bold blue]

[cyan]1.[/cyan] Generate a brand new project
[cyan]2.[/cyan] Generate components (entity, workflow, etc.)
[cyan]3.[/cyan] Run development server
[cyan]4.[/cyan] Build project
[cyan]5.[/cyan] Run tests
[cyan]6.[/cyan] Check project health
[cyan]0.[/cyan] Exit""",
            border_style="blue",
        )
        self.console.print(menu_panel)

    def _generate_project(self) -> None:
        self.console.print("\n[bold]Generate New Project[/bold]")
        name = Prompt.ask("Enter project name").strip()
        if not name:
            self.output.error("Project name is required")
            return
        package = Prompt.ask("Enter package name (leave blank for default)", default="")

        self.console.print("\n1. Basic Spring Boot\n2. AWS + Temporal + Auth0")
        template = TEMPLATE_CHOICES[
            Prompt.ask("Select project template", choices=list(TEMPLATE_CHOICES), default="1")
        ]

        self.console.print("\n1. PostgreSQL\n2. MySQL\n3. H2 (in-memory)")
        db = DATABASE_CHOICES[
            Prompt.ask("Select database", choices=list(DATABASE_CHOICES), default="1")
        ]

        self.handler.new_project(
            ProjectOptions(name=name, package=package.strip(), db=db, template=template)
        )

    def _generate_components(self) -> None:
        self.console.print("\n[bold]Generate Components[/bold]")
        self.handler.require_project()

        self.console.print(
            "\n".join(f"{key}. {kind.title()}" for key, kind in COMPONENT_CHOICES.items())
            + "\n0. Back to main menu"
        )
        choice = Prompt.ask(
            "Select component to generate",
            choices=["0", *COMPONENT_CHOICES],
            default="0",
        )
        if choice == "0":
            return

        name = Prompt.ask("Enter component name").strip()
        if not name:
            self.output.error("Component name is required")
            return

        kind = COMPONENT_CHOICES[choice]
        if kind == "entity":
            self._generate_entity(name)
        else:
            self.handler.generate_component(kind, name)

    def _generate_entity(self, name: str) -> None:
        self.console.print(
            "[dim]Fields: name:type[:nullable], space separated. "
            "Relations: kind:field:Entity (oneToOne, oneToMany, manyToOne, manyToMany)[/dim]"
        )
        fields = Prompt.ask("Enter fields", default="")
        relations = Prompt.ask("Enter relations", default="")
        audit = Confirm.ask("Add audit timestamps?", default=True)
        dto = Confirm.ask("Generate DTO?", default=True)

        self.handler.generate_entity(
            name, fields, relations, audit=audit, generate_dto=dto, lombok=None
        )

    def _run_dev(self) -> int:
        self.console.print("\n[bold]Run Development Server[/bold]")
        self.handler.require_project()
        port = IntPrompt.ask("Enter port", default=8080)
        profile = Prompt.ask("Enter profile", default="dev")
        self.output.info("Starting application in development mode... (Ctrl+C to stop)")
        return self.handler.dev(port, profile)

    def _run_tests(self) -> int:
        self.console.print("\n[bold]Run Tests[/bold]")
        self.handler.require_project()
        test_name = Prompt.ask("Enter specific test to run (leave blank for all tests)", default="")
        return self.handler.test(test_name.strip())
