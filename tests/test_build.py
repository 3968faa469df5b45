"""
Tests for build tool delegation and health checks (springwell/build.py).

Run: pytest tests/test_build.py -v
"""

from unittest.mock import MagicMock, patch

import pytest

from springwell.build import (
    BuildError,
    BuildRunner,
    BuildTool,
    build_command,
    check_project_health,
    detect_build_tool,
    dev_command,
    test_command as make_test_command,
)
from springwell.project import ProjectError


class TestDetection:
    def test_maven_by_default(self, spring_project):
        assert detect_build_tool(spring_project) is BuildTool.MAVEN

    def test_gradle_preferred(self, spring_project):
        (spring_project / "build.gradle").write_text("", encoding="utf-8")
        assert detect_build_tool(spring_project) is BuildTool.GRADLE


class TestCommands:
    def test_dev(self):
        assert dev_command(BuildTool.MAVEN, 9090, "local") == [
            "./mvnw",
            "spring-boot:run",
            "-Dspring-boot.run.profiles=local",
            "-Dserver.port=9090",
        ]
        assert dev_command(BuildTool.GRADLE) == [
            "./gradlew",
            "bootRun",
            "-Dspring.profiles.active=dev",
            "-Dserver.port=8080",
        ]

    def test_build(self):
        assert build_command(BuildTool.MAVEN) == ["./mvnw", "clean", "package", "-DskipTests"]
        assert build_command(BuildTool.GRADLE) == ["./gradlew", "clean", "build", "-x", "test"]

    def test_test(self):
        assert make_test_command(BuildTool.MAVEN) == ["./mvnw", "test"]
        assert make_test_command(BuildTool.MAVEN, "UserTest") == ["./mvnw", "test", "-Dtest=UserTest"]
        assert make_test_command(BuildTool.GRADLE, "UserTest") == [
            "./gradlew",
            "test",
            "--tests",
            "UserTest",
        ]


class TestRunner:
    def test_outside_project(self, tmp_path):
        with pytest.raises(ProjectError):
            BuildRunner(tmp_path).build()

    def test_missing_wrapper(self, spring_project):
        with pytest.raises(BuildError, match="mvnw"):
            BuildRunner(spring_project).build()

    def test_returns_child_status(self, spring_project):
        (spring_project / "mvnw").write_text("#!/bin/sh\n", encoding="utf-8")
        with patch("springwell.build.subprocess.run", return_value=MagicMock(returncode=3)) as run:
            assert BuildRunner(spring_project).test("UserTest") == 3
        command = run.call_args.args[0]
        assert command == ["./mvnw", "test", "-Dtest=UserTest"]
        assert run.call_args.kwargs["cwd"] == spring_project

    def test_debug_sets_environment(self, spring_project):
        (spring_project / "mvnw").write_text("#!/bin/sh\n", encoding="utf-8")
        with patch("springwell.build.subprocess.run", return_value=MagicMock(returncode=0)) as run:
            BuildRunner(spring_project).dev(debug=True)
        assert run.call_args.kwargs["env"]["DEBUG"] == "true"

    def test_os_error_wrapped(self, spring_project):
        (spring_project / "mvnw").write_text("", encoding="utf-8")
        with patch("springwell.build.subprocess.run", side_effect=PermissionError("denied")):
            with pytest.raises(BuildError, match="denied"):
                BuildRunner(spring_project).build()


class TestHealth:
    def test_reports_missing(self, tmp_path):
        report = check_project_health(tmp_path)
        assert report.missing == [
            "pom.xml or build.gradle",
            "src/main/java",
            "src/main/resources",
            "src/test",
        ]
        assert report.warnings
        assert not report.healthy

    def test_healthy_project(self, spring_project):
        for directory in ("src/main/java", "src/main/resources", "src/test"):
            (spring_project / directory).mkdir(parents=True)
        (spring_project / "src/main/resources/application.yml").write_text("", encoding="utf-8")
        assert check_project_health(spring_project).healthy
