"""SpringWell - a command-line companion for Spring Boot projects."""

__version__ = "0.1.0"
