"""Maven/Gradle wrapper delegation and project health checks."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import SpringWellError
from .logging_config import get_logger
from .project import ProjectError
from .utils import is_spring_boot_project

logger = get_logger(__name__)

ESSENTIAL_DIRECTORIES = ("src/main/java", "src/main/resources", "src/test")
APPLICATION_CONFIG_FILES = (
    "src/main/resources/application.properties",
    "src/main/resources/application.yml",
)


class BuildError(SpringWellError):
    """Exception raised when the build tool cannot be run."""

    pass


class BuildTool(Enum):
    MAVEN = "maven"
    GRADLE = "gradle"

    @property
    def wrapper(self) -> str:
        return "./mvnw" if self is BuildTool.MAVEN else "./gradlew"

    @property
    def build_file(self) -> str:
        return "pom.xml" if self is BuildTool.MAVEN else "build.gradle"


def detect_build_tool(project_dir: str | Path = ".") -> BuildTool:
    """Gradle when ``build.gradle`` exists, Maven otherwise."""
    if (Path(project_dir) / BuildTool.GRADLE.build_file).exists():
        return BuildTool.GRADLE
    return BuildTool.MAVEN


def dev_command(tool: BuildTool, port: int = 8080, profile: str = "dev") -> list[str]:
    if tool is BuildTool.GRADLE:
        return [
            tool.wrapper,
            "bootRun",
            f"-Dspring.profiles.active={profile}",
            f"-Dserver.port={port}",
        ]
    return [
        tool.wrapper,
        "spring-boot:run",
        f"-Dspring-boot.run.profiles={profile}",
        f"-Dserver.port={port}",
    ]


def build_command(tool: BuildTool) -> list[str]:
    if tool is BuildTool.GRADLE:
        return [tool.wrapper, "clean", "build", "-x", "test"]
    return [tool.wrapper, "clean", "package", "-DskipTests"]


def test_command(tool: BuildTool, test_name: str = "") -> list[str]:
    """Command running the whole suite, or a single test when ``test_name`` is set."""
    command = [tool.wrapper, "test"]
    if test_name:
        if tool is BuildTool.GRADLE:
            command += ["--tests", test_name]
        else:
            command.append(f"-Dtest={test_name}")
    return command


class BuildRunner:
    """Run build tool commands inside a Spring Boot project."""

    def __init__(self, project_dir: str | Path = "."):
        self.project_dir = Path(project_dir)

    @property
    def tool(self) -> BuildTool:
        return detect_build_tool(self.project_dir)

    def ensure_project(self) -> None:
        """
        Raises:
            ProjectError: If ``project_dir`` is not a Spring Boot project.
        """
        if not is_spring_boot_project(self.project_dir):
            raise ProjectError(
                "Not in a Spring Boot project directory (no pom.xml or build.gradle)"
            )

    def dev(self, port: int = 8080, profile: str = "dev", debug: bool = False) -> int:
        self.ensure_project()
        env = {"DEBUG": "true"} if debug else None
        return self.run(dev_command(self.tool, port, profile), env)

    def build(self) -> int:
        self.ensure_project()
        return self.run(build_command(self.tool))

    def test(self, test_name: str = "") -> int:
        self.ensure_project()
        return self.run(test_command(self.tool, test_name))

    def run(self, command: list[str], extra_env: dict[str, str] | None = None) -> int:
        """Run ``command`` with inherited stdio and return its exit status.

        Raises:
            BuildError: If the wrapper script is missing or cannot be started.
        """
        wrapper = self.project_dir / command[0]
        if not wrapper.exists():
            raise BuildError(f"Build wrapper {command[0]} not found in {self.project_dir}")

        env = None
        if extra_env:
            env = {**os.environ, **extra_env}

        logger.info("Running %s in %s", " ".join(command), self.project_dir)
        try:
            completed = subprocess.run(command, cwd=self.project_dir, env=env, check=False)
        except OSError as e:
            raise BuildError(f"Failed to run {command[0]}: {e}") from e

        logger.debug("%s exited with status %d", command[0], completed.returncode)
        return completed.returncode


@dataclass
class HealthReport:
    """Outcome of ``doctor``."""

    missing: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def healthy(self) -> bool:
        return not self.missing and not self.warnings


def check_project_health(project_dir: str | Path = ".") -> HealthReport:
    """Look for the files and directories every Spring Boot project needs."""
    project_dir = Path(project_dir)
    report = HealthReport()

    if not is_spring_boot_project(project_dir):
        report.missing.append("pom.xml or build.gradle")
    for directory in ESSENTIAL_DIRECTORIES:
        if not (project_dir / directory).is_dir():
            report.missing.append(directory)

    if not any((project_dir / name).exists() for name in APPLICATION_CONFIG_FILES):
        report.warnings.append("No application.properties or application.yml found")

    logger.info(
        "Health check of %s: %d missing, %d warnings",
        project_dir,
        len(report.missing),
        len(report.warnings),
    )
    return report
