"""Build driver: discover register documents, validate, build, and write.

Layout::

    <source>/<manufacturer>/*.json
    <builds>/<manufacturer>/homeassistant/<stem>.yaml
    <builds>/<manufacturer>/homeassistant/<stem>-unlock-automation.yaml
    <builds>/<manufacturer>/esphome/<stem>.yaml

``<stem>`` is the manufacturer name, or ``<manufacturer>-<file stem>``
when a manufacturer directory holds more than one document. Every
document writes only to paths derived from its own identity.
"""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from regdb.exceptions import (
    ConfigurationError,
    DocumentDecodeError,
    DocumentLoadError,
    SourceDirectoryError,
)
from regdb.render.yaml import ESPHOME_STYLE, HOMEASSISTANT_STYLE, serialize
from regdb.schema.core import validate
from regdb.schema.diagnostics import Diagnostic, ValidationResult
from regdb.schema.models import RegisterDocument
from regdb.targets.esphome import build_esphome, render_header
from regdb.targets.homeassistant import build_homeassistant, build_unlock_automation

logger = logging.getLogger(__name__)


class Target(str, Enum):
    """Configuration dialects regdb can generate."""

    HOMEASSISTANT = "homeassistant"
    ESPHOME = "esphome"


ALL_TARGETS = (Target.HOMEASSISTANT, Target.ESPHOME)


@dataclass
class DocumentReport:
    """Outcome of building one source document."""

    source: str
    validation: ValidationResult | None = None
    outputs: list[Path] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        if self.error is not None:
            return False
        return self.validation is None or self.validation.buildable


@dataclass
class BuildReport:
    """Outcome of a build run."""

    documents: list[DocumentReport] = field(default_factory=list)

    @property
    def failed(self) -> list[DocumentReport]:
        return [d for d in self.documents if not d.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def outputs(self) -> list[Path]:
        return [path for d in self.documents for path in d.outputs]


# =============================================================================
# DISCOVERY / LOADING
# =============================================================================


def find_manufacturers(source_dir: Path) -> list[str]:
    """Return the manufacturer directory names under ``source_dir``, sorted.

    Raises:
        SourceDirectoryError: If ``source_dir`` is not a directory.
    """
    _require_directory(source_dir)
    return sorted(p.name for p in source_dir.iterdir() if p.is_dir())


def find_documents(source_dir: Path) -> list[Path]:
    """Return every JSON document below ``source_dir``, recursively and sorted.

    Raises:
        SourceDirectoryError: If ``source_dir`` is not a directory.
    """
    _require_directory(source_dir)
    return sorted(p for p in source_dir.rglob("*.json") if p.is_file())


def load_document(path: Path, *, source: str | None = None) -> Any:
    """Read and decode a JSON document.

    Raises:
        DocumentLoadError: If the file cannot be read or is not valid JSON.
    """
    source = source or str(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"Cannot read file: {exc}", source=source) from exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise DocumentLoadError(f"Invalid JSON: {exc}", source=source) from exc


# =============================================================================
# VALIDATE
# =============================================================================


def validate_file(path: Path, *, root: Path | None = None) -> ValidationResult:
    """Validate one document file; load failures become a single fatal error."""
    source = _relative(path, root)
    try:
        data = load_document(path, source=source)
    except DocumentLoadError as exc:
        return ValidationResult(
            source=source,
            errors=(Diagnostic(source=source, message=str(exc)),),
        )
    return validate(data, source=source)


def validate_all(source_dir: Path) -> list[ValidationResult]:
    """Validate every JSON document below ``source_dir``.

    Raises:
        SourceDirectoryError: If ``source_dir`` is not a directory.
    """
    return [validate_file(path, root=source_dir) for path in find_documents(source_dir)]


# =============================================================================
# BUILD
# =============================================================================


def check_layout(source_dir: Path, builds_dir: Path) -> None:
    """Ensure generated files can never overwrite or clean away the sources.

    Raises:
        ConfigurationError: If ``builds_dir`` is ``source_dir`` or one of
            its parents.
    """
    source = source_dir.resolve()
    builds = builds_dir.resolve()
    if builds == source or builds in source.parents:
        raise ConfigurationError(
            f"Builds directory '{builds_dir}' must not contain the source directory '{source_dir}'",
            source=str(builds_dir),
        )


def clean_builds(builds_dir: Path) -> bool:
    """Remove everything inside ``builds_dir``.

    Returns:
        False when there was nothing to clean.
    """
    if not builds_dir.is_dir():
        return False
    for child in builds_dir.iterdir():
        if child.is_dir():
            shutil.rmtree(child)
        else:
            child.unlink()
    logger.info("Cleaned %s", builds_dir)
    return True


def build_all(
    source_dir: Path,
    builds_dir: Path,
    targets: tuple[Target, ...] = ALL_TARGETS,
    *,
    generated_at: datetime | None = None,
) -> BuildReport:
    """Build every manufacturer's documents for the given targets.

    Documents that fail to load, validate, or decode are reported and
    skipped; the remaining documents are still written.

    Raises:
        SourceDirectoryError: If ``source_dir`` is not a directory.
        ConfigurationError: If ``builds_dir`` contains ``source_dir``.
    """
    check_layout(source_dir, builds_dir)
    generated_at = generated_at or datetime.now()
    report = BuildReport()

    for manufacturer in find_manufacturers(source_dir):
        paths = sorted((source_dir / manufacturer).glob("*.json"))
        for path in paths:
            stem = manufacturer if len(paths) == 1 else f"{manufacturer}-{path.stem}"
            report.documents.append(
                _build_file(
                    path,
                    manufacturer=manufacturer,
                    stem=stem,
                    source_dir=source_dir,
                    builds_dir=builds_dir,
                    targets=targets,
                    generated_at=generated_at,
                )
            )

    return report


def write_outputs(
    document: RegisterDocument,
    *,
    manufacturer: str,
    stem: str,
    builds_dir: Path,
    targets: tuple[Target, ...] = ALL_TARGETS,
    generated_at: datetime,
) -> list[Path]:
    """Render a decoded document for each target and write the files.

    Returns:
        Paths written, in target order.
    """
    written: list[Path] = []

    if Target.HOMEASSISTANT in targets:
        out_dir = builds_dir / manufacturer / Target.HOMEASSISTANT.value
        written.append(
            _write(
                out_dir / f"{stem}.yaml",
                serialize(build_homeassistant(document), HOMEASSISTANT_STYLE),
            )
        )
        unlock = build_unlock_automation(document)
        if unlock is not None:
            written.append(
                _write(
                    out_dir / f"{stem}-unlock-automation.yaml",
                    serialize(unlock, HOMEASSISTANT_STYLE),
                )
            )

    if Target.ESPHOME in targets:
        out_dir = builds_dir / manufacturer / Target.ESPHOME.value
        written.append(
            _write(
                out_dir / f"{stem}.yaml",
                render_header(generated_at) + serialize(build_esphome(document), ESPHOME_STYLE),
            )
        )

    return written


def _build_file(
    path: Path,
    *,
    manufacturer: str,
    stem: str,
    source_dir: Path,
    builds_dir: Path,
    targets: tuple[Target, ...],
    generated_at: datetime,
) -> DocumentReport:
    source = _relative(path, source_dir)
    report = DocumentReport(source=source)

    try:
        data = load_document(path, source=source)
    except DocumentLoadError as exc:
        logger.error("Failed to load %s: %s", source, exc)
        report.error = str(exc)
        return report

    report.validation = validate(data, source=source)
    if not report.validation.buildable:
        logger.warning(
            "Skipping %s: %d validation errors", source, len(report.validation.errors)
        )
        return report

    try:
        document = RegisterDocument.from_raw(data, source=source)
    except DocumentDecodeError as exc:
        logger.error("Failed to decode %s: %s", source, exc)
        report.error = str(exc)
        return report

    report.outputs = write_outputs(
        document,
        manufacturer=manufacturer,
        stem=stem,
        builds_dir=builds_dir,
        targets=targets,
        generated_at=generated_at,
    )
    return report


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def _require_directory(path: Path) -> None:
    if not path.is_dir():
        raise SourceDirectoryError(f"Source directory '{path}' does not exist", source=str(path))


def _relative(path: Path, root: Path | None) -> str:
    if root is None:
        return str(path)
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
