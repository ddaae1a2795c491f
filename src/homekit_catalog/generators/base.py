"""Common contract of the code generators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path

from homekit_catalog.common.fileio import replace_directory
from homekit_catalog.converters.catalog_writer import format_timestamp
from homekit_catalog.diagnostics import DiagnosticCodes, DiagnosticsReport
from homekit_catalog.errors import GenerationError
from homekit_catalog.models.catalog import Catalog, CharacteristicEntry, ServiceEntry

logger = logging.getLogger(__name__)


class CodeGenerator(ABC):
    """Render a catalog into a source tree and install it crash-safely.

    Subclasses implement :meth:`render`. The output directory is always
    replaced as a whole: files from a previous run that the current catalog
    no longer produces disappear.
    """

    #: Human-readable backend name used in messages
    target = ""

    def __init__(
        self,
        diagnostics: DiagnosticsReport | None = None,
        generated_at: datetime | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
        ----
            diagnostics: Sink for skipped references and replaced output.
            generated_at: Timestamp written into file headers. Defaults to
                the time of each render.

        """
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticsReport()
        self.generated_at = generated_at

    @abstractmethod
    def render(self, catalog: Catalog) -> dict[str, str]:
        """Render every output file.

        Returns
        -------
            Mapping of POSIX relative path to file contents. Identical input
            yields identical output apart from the timestamp line.

        """

    def generate(self, catalog: Catalog, output_dir: Path) -> dict[str, str]:
        """Render ``catalog`` and replace ``output_dir`` with the result.

        Returns:
        -------
            The rendered files, keyed by relative path.

        Raises:
        ------
            GenerationError: If the output tree cannot be written.

        """
        files = self.render(catalog)
        if output_dir.exists():
            self.diagnostics.add_warning(
                DiagnosticCodes.W011_OUTPUT_REPLACED,
                f"Replacing existing {self.target} output directory: {output_dir}",
                path=str(output_dir),
            )
        try:
            replace_directory(output_dir, files)
        except OSError as e:
            raise GenerationError(f"Cannot write {self.target} output: {e}", output_dir) from e
        logger.info("Wrote %d %s files to %s", len(files), self.target, output_dir)
        return files

    def timestamp(self) -> str:
        """Timestamp for the current render."""
        return format_timestamp(self.generated_at or datetime.now(timezone.utc))

    def resolve_characteristics(
        self,
        service: ServiceEntry,
        characteristics_by_name: dict[str, CharacteristicEntry],
    ) -> list[tuple[CharacteristicEntry, bool]]:
        """Resolve a service's references as ``(characteristic, is_required)`` pairs.

        Required names come first, then optional ones, each in catalog order
        and each name once. Names absent from the catalog are skipped with a
        warning.
        """
        seen: set[str] = set()
        resolved: list[tuple[CharacteristicEntry, bool]] = []
        for names, required in (
            (service.required_characteristics, True),
            (service.optional_characteristics, False),
        ):
            for name in names:
                if name in seen:
                    continue
                seen.add(name)
                characteristic = characteristics_by_name.get(name)
                if characteristic is None:
                    self.diagnostics.add_warning(
                        DiagnosticCodes.W010_UNKNOWN_CHARACTERISTIC,
                        f"Skipping unknown characteristic {name} for service {service.name}",
                        service=service.name,
                        characteristic=name,
                    )
                    continue
                resolved.append((characteristic, required))
        return resolved
