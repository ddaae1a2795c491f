"""homekit-catalog: HomeKit service/characteristic catalog extractor and code generator.

This package provides tools for:
- Extracting services and characteristics from iOS SDK headers
- Reconciling service/characteristic relationships from HomeKit metadata
- Serializing the result to a stable YAML catalog file
- Generating Swift and TypeScript bindings from that catalog

Quick Start:
    >>> from pathlib import Path
    >>> from homekit_catalog.extract import CatalogExtractor
    >>> from homekit_catalog.converters import CatalogReader, CatalogWriter
    >>> from homekit_catalog.generators import SwiftGenerator, TypeScriptGenerator
    >>>
    >>> catalog = CatalogExtractor(Path("iPhoneOS.sdk")).extract()
    >>> CatalogWriter().write(catalog, Path("homekit-services.yaml"))
    >>> decoded = CatalogReader().read(Path("homekit-services.yaml"))
    >>> SwiftGenerator().generate(decoded, Path("Generated"))
    >>> TypeScriptGenerator().generate(decoded, Path("generated-ts"))

Modules:
    models: Catalog data model and metadata record models
    extract: SDK parsing, relationship loading and reconciliation
    converters: Catalog file writer and reader
    generators: Swift and TypeScript code generators
    diagnostics: Injected diagnostics sink
    cli: Command-line helpers
"""

__version__ = "0.1.0"
