"""Filesystem helpers shared by the generators and project commands.

This module provides functions for writing generated files and locating
sources inside a Spring Boot project with proper error handling.
"""

import os
from pathlib import Path

from .logging_config import get_logger

logger = get_logger(__name__)

JAVA_SOURCE_ROOT = Path("src", "main", "java")
BUILD_FILES = ("pom.xml", "build.gradle")


def create_directory(path: str | Path) -> Path:
    """Create a directory (and parents) if it doesn't exist.

    Args:
        path: Directory to create.

    Returns:
        The directory path.
    """
    path = Path(path)
    if not path.is_dir():
        logger.debug(f"Creating directory: {path}")
        path.mkdir(parents=True, exist_ok=True)
    return path


def write_file(path: str | Path, content: str) -> Path:
    """Write text to a file, creating parent directories as needed.

    Args:
        path: Destination file.
        content: Text to write.

    Returns:
        The written path.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(path)
    create_directory(path.parent)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {len(content)} characters to {path}")
    return path


def make_executable(path: str | Path) -> None:
    """Mark a file as executable (``0o755``)."""
    os.chmod(path, 0o755)


def is_spring_boot_project(project_dir: str | Path = ".") -> bool:
    """Check whether a directory looks like a Maven or Gradle project."""
    project_dir = Path(project_dir)
    return any((project_dir / name).exists() for name in BUILD_FILES)


def package_path(package: str) -> Path:
    """Convert a Java package name to a relative directory path.

    ``com.example.app`` becomes ``com/example/app``.
    """
    return Path(*[segment for segment in package.split(".") if segment])


def java_package_dir(project_dir: str | Path, package: str, *subpackages: str) -> Path:
    """Directory for a Java (sub)package inside a project's main sources."""
    directory = Path(project_dir) / JAVA_SOURCE_ROOT / package_path(package)
    for sub in subpackages:
        directory = directory / Path(*sub.split("/"))
    return directory
