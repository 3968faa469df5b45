"""
Tests for new-project scaffolding (springwell/project.py).

The Spring Initializr download is replaced by a mocked requests session
serving an in-memory starter archive.

Run: pytest tests/test_project.py -v
"""

import io
import os
import zipfile
from unittest.mock import MagicMock

import pytest
import requests
import yaml

from springwell.project import (
    INITIALIZR_URL,
    ProjectError,
    ProjectOptions,
    ProjectScaffolder,
    download_starter,
    extract_archive,
    initializr_dependencies,
    initializr_params,
)


def _starter_zip(root: str = "demo/") -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        if root:
            archive.writestr(root, "")
        archive.writestr(f"{root}pom.xml", "<project/>")
        archive.writestr(f"{root}mvnw", "#!/bin/sh\n")
        archive.writestr(f"{root}src/main/java/App.java", "class App {}")
    return buffer.getvalue()


def _session(content: bytes = b"") -> MagicMock:
    session = MagicMock(spec=requests.Session)
    response = MagicMock()
    response.content = content or _starter_zip()
    session.get.return_value = response
    return session


class TestInitializrRequest:
    def test_default_package(self):
        assert ProjectOptions("my-app").package_name == "com.my.app"
        assert ProjectOptions("svc", package="org.acme").package_name == "org.acme"

    def test_dependencies(self):
        assert initializr_dependencies("postgres", "jwt", "swagger,actuator") == [
            "web",
            "data-jpa",
            "validation",
            "lombok",
            "postgresql",
            "security",
            "oauth2-resource-server",
            "actuator",
        ]

    def test_dependencies_are_deduplicated(self):
        deps = initializr_dependencies("h2", "basic", "security, lombok,webflux")
        assert deps == ["web", "data-jpa", "validation", "lombok", "h2", "security", "webflux"]

    def test_auth0_adds_no_auth_dependency(self):
        assert "security" not in initializr_dependencies("mysql", "auth0", "")

    def test_params(self):
        params = initializr_params(ProjectOptions("orders", db="h2"))
        assert ("groupId", "com.orders") in params
        assert ("packageName", "com.orders") in params
        assert ("javaVersion", "17") in params
        assert ("type", "maven-project") in params
        assert ("dependencies", "h2") in params


class TestDownload:
    def test_success(self):
        session = _session(b"zip-bytes")
        assert download_starter([("name", "x")], session) == b"zip-bytes"
        session.get.assert_called_once()
        assert session.get.call_args.args[0] == INITIALIZR_URL
        assert session.get.call_args.kwargs["timeout"] == 60

    def test_http_error(self):
        session = _session()
        error_response = MagicMock(status_code=400)
        session.get.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError(
            response=error_response
        )
        with pytest.raises(ProjectError, match="400"):
            download_starter([], session)

    def test_connection_error(self):
        session = _session()
        session.get.side_effect = requests.exceptions.ConnectionError("offline")
        with pytest.raises(ProjectError, match="Connection error"):
            download_starter([], session)


class TestExtract:
    def test_strips_single_top_level_folder(self, tmp_path):
        extract_archive(_starter_zip(), tmp_path)
        assert (tmp_path / "pom.xml").read_text() == "<project/>"
        assert (tmp_path / "src/main/java/App.java").exists()
        assert not (tmp_path / "demo").exists()

    def test_flat_archive(self, tmp_path):
        extract_archive(_starter_zip(root=""), tmp_path)
        assert (tmp_path / "pom.xml").exists()

    def test_invalid_archive(self, tmp_path):
        with pytest.raises(ProjectError, match="invalid archive"):
            extract_archive(b"not a zip", tmp_path)


class TestScaffolder:
    def test_basic_project(self, tmp_path, output):
        scaffolder = ProjectScaffolder(output, tmp_path, _session())
        project = scaffolder.create(ProjectOptions("orders"))

        assert project == tmp_path / "orders"
        assert (project / "pom.xml").exists()
        assert os.access(project / "mvnw", os.X_OK)
        config = yaml.safe_load((project / ".springwell.yml").read_text(encoding="utf-8"))
        assert config["project"]["package"] == "com.orders"
        assert any("Created orders" in m for m in output.of_level("success"))

    def test_layered_project(self, tmp_path, output):
        session = _session()
        scaffolder = ProjectScaffolder(output, tmp_path, session)
        project = scaffolder.create(
            ProjectOptions("billing", package="com.acme.billing", template="aws-temporal-auth0")
        )

        sources = project / "src/main/java/com/acme/billing"
        assert (sources / "temporal/workflow").is_dir()
        assert (sources / "util/mapper/EntityMapper.java").exists()
        assert (project / "helm/billing/Chart.yaml").exists()
        assert (project / "src/main/resources/db/migration/V1__initial_schema.sql").exists()
        assert (project / ".github/workflows/ci.yml").exists()

        readme = (project / "README.md").read_text(encoding="utf-8")
        assert "billing" in readme
        application = (project / "src/main/resources/application.yml").read_text(encoding="utf-8")
        assert "us-east-1" in application

        params = session.get.call_args.kwargs["params"]
        assert ("dependencies", "webflux") in params

    def test_unknown_template(self, tmp_path, output):
        scaffolder = ProjectScaffolder(output, tmp_path, _session())
        with pytest.raises(ProjectError, match="Unknown project template"):
            scaffolder.create(ProjectOptions("x", template="kotlin"))

    def test_empty_name(self, tmp_path, output):
        with pytest.raises(ProjectError):
            ProjectScaffolder(output, tmp_path, _session()).create(ProjectOptions(" "))
