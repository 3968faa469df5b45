"""New Spring Boot project scaffolding.

Creates the project directory, writes ``.springwell.yml``, downloads a
starter from Spring Initializr and optionally lays out the
AWS + Temporal + Auth0 project structure.
"""

from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass
from pathlib import Path

import requests

from .codegen.core.naming import to_dotted_package_name
from .codegen.core.templates import create_template_engine
from .codegen.languages.java.generator import BUILTIN_TEMPLATE_DIR
from .config import get_default_config, save_config
from .errors import SpringWellError
from .logging_config import get_logger
from .output import OutputSink
from .utils import create_directory, java_package_dir, make_executable, package_path, write_file

logger = get_logger(__name__)

INITIALIZR_URL = "https://start.spring.io/starter.zip"
DEFAULT_JAVA_VERSION = "17"
DOWNLOAD_TIMEOUT = 60

BASIC_TEMPLATE = "basic"
AWS_TEMPORAL_AUTH0_TEMPLATE = "aws-temporal-auth0"
PROJECT_TEMPLATES = (BASIC_TEMPLATE, AWS_TEMPORAL_AUTH0_TEMPLATE)

DATABASES = ("postgres", "mysql", "h2")
AUTH_TYPES = ("jwt", "oauth2", "basic", "auth0")
CLOUD_PROVIDERS = ("aws", "azure", "gcp")

BASE_DEPENDENCIES = ["web", "data-jpa", "validation", "lombok"]
DATABASE_DEPENDENCIES = {"postgres": ["postgresql"], "mysql": ["mysql"], "h2": ["h2"]}
AUTH_DEPENDENCIES = {
    "jwt": ["security", "oauth2-resource-server"],
    "oauth2": ["security", "oauth2-client"],
    "basic": ["security"],
}
# Feature names that map directly onto Initializr dependency ids
FEATURE_DEPENDENCIES = {
    "actuator": "actuator",
    "webflux": "webflux",
    "security": "security",
    "lombok": "lombok",
    "data-jpa": "data-jpa",
    "validation": "validation",
    "flyway": "flyway",
    "cache": "cache",
}

# Package-relative directories of the layered AWS + Temporal + Auth0 layout
LAYERED_PACKAGES = [
    "config",
    "controller",
    "domain/audit",
    "domain/dto",
    "domain/entity",
    "exception",
    "messaging/consumer",
    "middleware",
    "repository",
    "security",
    "service",
    "temporal/activity",
    "temporal/workflow",
    "temporal/worker",
    "util",
    "util/mapper",
    "util/validation",
    "util/logging",
]

# Project-relative directories of the layered layout ({name} is the project)
LAYERED_DIRECTORIES = [
    "src/main/resources/datadog",
    "src/main/resources/db/migration",
    "src/main/resources/templates/email",
    "src/main/resources/openapi",
    "aws/cloudformation",
    "aws/codebuild",
    ".github/workflows",
    "scripts",
    "docker/datadog-agent",
    "helm/{name}/templates",
    "helm/{name}/charts",
]

# Template -> destination relative to the project root
LAYERED_FILES = {
    "project/README.md.j2": "README.md",
    "project/application.yml.j2": "src/main/resources/application.yml",
    "project/Dockerfile.j2": "docker/Dockerfile",
    "project/docker-compose.yml.j2": "docker/docker-compose.yml",
    "project/compose.yaml.j2": "compose.yaml",
    "project/ci.yml.j2": ".github/workflows/ci.yml",
    "project/helm/Chart.yaml.j2": "helm/{name}/Chart.yaml",
    "project/helm/values.yaml.j2": "helm/{name}/values.yaml",
    "project/helm/deployment.yaml.j2": "helm/{name}/templates/deployment.yaml",
    "project/helm/service.yaml.j2": "helm/{name}/templates/service.yaml",
    "project/helm/_helpers.tpl.j2": "helm/{name}/templates/_helpers.tpl",
    "project/V1__initial_schema.sql.j2": "src/main/resources/db/migration/V1__initial_schema.sql",
    "project/V2__temporal_tables.sql.j2": "src/main/resources/db/migration/V2__temporal_tables.sql",
    "project/api.yaml.j2": "src/main/resources/openapi/api.yaml",
    "project/openapi-generator.yaml.j2": "openapi-generator.yaml",
}


class ProjectError(SpringWellError):
    """Exception raised when a project cannot be created or used."""

    pass


@dataclass
class ProjectOptions:
    """Options for ``springwell new``."""

    name: str
    package: str = ""
    db: str = "postgres"
    auth: str = "jwt"
    cloud: str = "aws"
    features: str = "swagger,actuator"
    template: str = BASIC_TEMPLATE
    java_version: str = DEFAULT_JAVA_VERSION

    @property
    def package_name(self) -> str:
        """Explicit package, or ``com.<name>`` derived from the project name."""
        return self.package or f"com.{to_dotted_package_name(self.name)}"


@dataclass(frozen=True)
class ProjectBindings:
    """Values available to project scaffold templates."""

    name: str
    package: str
    package_path: str
    aws_region: str


def initializr_dependencies(db: str, auth: str, features: str = "") -> list[str]:
    """Build the Initializr dependency list for the chosen options.

    Args:
        db: Database type.
        auth: Authentication type.
        features: Comma-separated feature names.

    Returns:
        Ordered, de-duplicated dependency ids.
    """
    dependencies = list(BASE_DEPENDENCIES)
    dependencies += DATABASE_DEPENDENCIES.get(db, DATABASE_DEPENDENCIES["h2"])
    dependencies += AUTH_DEPENDENCIES.get(auth, [])

    for feature in (f.strip() for f in features.split(",")):
        if not feature:
            continue
        if feature in FEATURE_DEPENDENCIES:
            dependencies.append(FEATURE_DEPENDENCIES[feature])
        else:
            logger.debug("Feature %r has no Initializr dependency", feature)

    return list(dict.fromkeys(dependencies))


def initializr_params(options: ProjectOptions) -> list[tuple[str, str]]:
    """Query parameters for the Spring Initializr starter download."""
    package = options.package_name
    params = [
        ("name", options.name),
        ("groupId", package),
        ("artifactId", options.name),
        ("packageName", package),
        ("language", "java"),
        ("javaVersion", options.java_version),
        ("type", "maven-project"),
    ]
    for dependency in initializr_dependencies(options.db, options.auth, options.features):
        params.append(("dependencies", dependency))
    return params


def download_starter(
    params: list[tuple[str, str]],
    session: requests.Session | None = None,
    timeout: int = DOWNLOAD_TIMEOUT,
) -> bytes:
    """Download a starter archive from Spring Initializr.

    Raises:
        ProjectError: If the request fails.
    """
    http = session or requests.Session()
    logger.debug(f"Requesting starter from {INITIALIZR_URL} with {params}")

    try:
        response = http.get(INITIALIZR_URL, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {INITIALIZR_URL}")
        raise ProjectError(f"Request timeout for URL: {INITIALIZR_URL}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {INITIALIZR_URL}: {e}")
        raise ProjectError(f"Connection error for URL: {INITIALIZR_URL}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error(f"HTTP error {status} for URL: {INITIALIZR_URL}")
        raise ProjectError(f"HTTP error {status} from Spring Initializr") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {INITIALIZR_URL}: {e}", exc_info=True)
        raise ProjectError(f"Request error for URL {INITIALIZR_URL}: {e}") from e

    return response.content


def extract_archive(content: bytes, destination: Path) -> list[Path]:
    """Extract a starter zip into ``destination``.

    A single top-level folder shared by every entry is stripped so the
    project files land directly in ``destination``.

    Raises:
        ProjectError: If the archive is invalid.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(content))
    except zipfile.BadZipFile as e:
        raise ProjectError(f"Spring Initializr returned an invalid archive: {e}") from e

    with archive:
        members = [m for m in archive.infolist() if m.filename.strip("/")]
        roots = {m.filename.split("/", 1)[0] for m in members}
        strip = len(roots) == 1 and all("/" in m.filename for m in members)

        destination = destination.resolve()
        extracted = []
        for member in members:
            parts = member.filename.split("/")
            if strip:
                parts = parts[1:]
            relative = Path(*[p for p in parts if p]) if any(parts) else None
            if relative is None:
                continue
            target = (destination / relative).resolve()
            if destination not in target.parents and target != destination:
                raise ProjectError(f"Unsafe path in archive: {member.filename}")
            if member.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(archive.read(member))
            extracted.append(target)

    logger.info("Extracted %d files into %s", len(extracted), destination)
    return extracted


class ProjectScaffolder:
    """Create new Spring Boot projects."""

    def __init__(
        self,
        output: OutputSink,
        base_dir: Path = Path("."),
        session: requests.Session | None = None,
    ):
        self.output = output
        self.base_dir = Path(base_dir)
        self.session = session

    def create(self, options: ProjectOptions) -> Path:
        """Create a project according to ``options``.

        Returns:
            The new project directory.

        Raises:
            ProjectError: If the options are invalid or creation fails.
        """
        if not options.name or not options.name.strip():
            raise ProjectError("project name is required")
        if options.template not in PROJECT_TEMPLATES:
            raise ProjectError(
                f"Unknown project template: {options.template}. "
                f"Available: {', '.join(PROJECT_TEMPLATES)}"
            )

        project_dir = create_directory(self.base_dir / options.name)

        config = get_default_config()
        config.project.package = options.package_name
        save_config(config, project_dir)

        if options.template == AWS_TEMPORAL_AUTH0_TEMPLATE:
            starter = ProjectOptions(
                name=options.name,
                package=options.package_name,
                db=options.db,
                auth="auth0",
                cloud=options.cloud,
                features="swagger,actuator,webflux,security,lombok,data-jpa",
                java_version=options.java_version,
            )
            self.create_spring_boot_project(starter, project_dir)
            self.add_layered_structure(options, project_dir, config.aws.region)
        else:
            self.create_spring_boot_project(options, project_dir)

        return project_dir

    def create_spring_boot_project(self, options: ProjectOptions, project_dir: Path) -> None:
        """Download and unpack an Initializr starter into ``project_dir``."""
        self.output.info("Downloading Spring Boot template...")
        content = download_starter(initializr_params(options), self.session)

        self.output.info("Extracting template...")
        extract_archive(content, project_dir)

        for wrapper in ("mvnw", "gradlew"):
            if (project_dir / wrapper).exists():
                make_executable(project_dir / wrapper)

        self.output.success(f"Created {options.name} at {project_dir}")

    def add_layered_structure(
        self, options: ProjectOptions, project_dir: Path, aws_region: str = "us-east-1"
    ) -> list[Path]:
        """Add the AWS + Temporal + Auth0 directories and files."""
        self.output.info(
            "Enhancing project with AWS, Temporal, Auth0, Helm, DB migrations, and OpenAPI..."
        )
        package = options.package_name

        for subpackage in LAYERED_PACKAGES:
            create_directory(java_package_dir(project_dir, package, subpackage))
        for directory in LAYERED_DIRECTORIES:
            create_directory(project_dir / directory.format(name=options.name))

        engine = create_template_engine(BUILTIN_TEMPLATE_DIR)
        bindings = ProjectBindings(
            name=options.name,
            package=package,
            package_path=package_path(package).as_posix(),
            aws_region=aws_region,
        )

        written = []
        for template, destination in LAYERED_FILES.items():
            target = project_dir / destination.format(name=options.name)
            written.append(write_file(target, engine.render(template, bindings)))

        mapper = java_package_dir(project_dir, package, "util/mapper") / "EntityMapper.java"
        written.append(write_file(mapper, engine.render("project/EntityMapper.java.j2", bindings)))

        self.output.success(
            "Successfully created AWS+Temporal+Auth0 project structure with Helm Charts, "
            f"DB migrations, OpenAPI, and utilities at {project_dir}"
        )
        return written
