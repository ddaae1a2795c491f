"""Code generators for the Swift and TypeScript bindings.

Primary Classes:
    SwiftGenerator: Type constants, characteristic wrappers, service classes
    TypeScriptGenerator: Type enums, characteristic aliases, service interfaces
    IdentifierAllocator: Collision-free identifier policy shared by both

Both generators render a ``{relative_path: contents}`` mapping first and then
swap it into the output directory in one step.
"""

from homekit_catalog.generators.base import CodeGenerator
from homekit_catalog.generators.naming import (
    IdentifierAllocator,
    lower_camel_identifier,
    sanitize,
    screaming_snake_identifier,
    type_name,
    upper_camel_identifier,
)
from homekit_catalog.generators.swift_generator import SwiftGenerator
from homekit_catalog.generators.typescript_generator import TypeScriptGenerator

__all__ = [
    "CodeGenerator",
    "IdentifierAllocator",
    "SwiftGenerator",
    "TypeScriptGenerator",
    "lower_camel_identifier",
    "sanitize",
    "screaming_snake_identifier",
    "type_name",
    "upper_camel_identifier",
]
