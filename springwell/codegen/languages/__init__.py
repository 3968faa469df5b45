"""
Language-specific code generators.
"""

from .java import SpringGenerator, create_spring_generator

__all__ = ["SpringGenerator", "create_spring_generator"]
