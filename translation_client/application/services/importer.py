"""Import legacy translation files into the remote service.

Source layout (flat):       {base}/{locale}/{group}.json|yaml
Source layout (modular):    {base}/{Module}/[{Sub}/]Lang/{locale}/{group}.json|yaml

Each file becomes one group. Nested keys are flattened with '.', except
that a mapping whose values are all strings is kept whole as one value
(validation messages, plural forms). Keys that are empty or numeric are
skipped. Modular files are pushed under '{Namespace}::{group}' where the
namespace concatenates the path segments between base and 'Lang'
(Translation/Views/Lang -> TranslationViews).
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from translation_client.core.constants import (
    DEFAULT_LANG_PATTERN,
    FALLBACK_LANG_PATTERNS,
    KEY_DELIMITER,
    LANG_DIR_MARKER,
    SKIPPED_LOCALE_DIRS,
    SOURCE_FILE_SUFFIXES,
)
from translation_client.core.tenant_context import TranslationContext
from translation_client.domain.entities import PushResult, TranslationRecord
from translation_client.domain.exceptions import (
    ConfigurationError,
    MalformedSourceFile,
    RemoteWriteError,
)
from translation_client.infrastructure.cache.keys import namespaced_group, prefix_group
from translation_client.infrastructure.external.translation_api import TranslationGateway
from translation_client.shared.telemetry.logging import get_channel_logger

# Numeric keys come from list-shaped sources; they are not translation keys.
_NUMERIC_KEY_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def is_valid_key(key: Any) -> bool:
    """False for empty, numeric, or non-string keys."""
    if isinstance(key, bool) or not isinstance(key, str):
        return False
    return bool(key) and not _NUMERIC_KEY_RE.match(key)


def is_translatable_leaf(value: Any) -> bool:
    """A mapping is a leaf if every value is a string.

    The check passes vacuously for an empty mapping, so {} is a leaf.
    """
    return isinstance(value, Mapping) and all(isinstance(v, str) for v in value.values())


def flatten(data: Mapping[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield (dotted_key, value) pairs for a nested translation tree."""
    for key, value in data.items():
        if not is_valid_key(key):
            continue
        full_key = f"{prefix}{KEY_DELIMITER}{key}" if prefix else key
        if isinstance(value, Mapping) and not is_translatable_leaf(value):
            yield from flatten(value, full_key)
        elif isinstance(value, Mapping):
            yield full_key, dict(value)
        else:
            yield full_key, value


def read_source_file(path: Path) -> dict[str, Any]:
    """Decode a JSON or YAML translation file into a mapping.

    Raises:
        MalformedSourceFile: If the file cannot be parsed or is not a mapping.
    """
    try:
        with path.open(encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise MalformedSourceFile(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise MalformedSourceFile(str(path))
    return data


def discover_locales(lang_path: Path) -> list[str]:
    """Locale subdirectories of lang_path ('vendor' excluded)."""
    return sorted(
        p.name for p in lang_path.iterdir() if p.is_dir() and p.name not in SKIPPED_LOCALE_DIRS
    )


def find_lang_directories(base_path: Path, pattern: str = DEFAULT_LANG_PATTERN) -> list[Path]:
    """Directories under base_path matching pattern.

    When pattern matches nothing, */Lang, */*/Lang and */*/*/Lang are tried.
    """
    found = [p for p in sorted(base_path.glob(pattern)) if p.is_dir()]
    if not found:
        for fallback in FALLBACK_LANG_PATTERNS:
            found.extend(p for p in sorted(base_path.glob(fallback)) if p.is_dir())
    return list(dict.fromkeys(found))


def namespace_from_path(lang_dir: Path, base_path: Path) -> str:
    """Concatenate the segments between base_path and the Lang marker."""
    parts = list(lang_dir.relative_to(base_path).parts)
    if parts and parts[-1] == LANG_DIR_MARKER:
        parts.pop()
    return "".join(p for p in parts if p)


@dataclass
class UnitResult:
    """Outcome of importing one locale or one Lang directory."""

    name: str
    created: int = 0
    updated: int = 0
    total: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ImportReport:
    """Per-unit results of a multi-unit import."""

    units: list[UnitResult] = field(default_factory=list)

    def add(self, name: str, result: PushResult) -> UnitResult:
        unit = UnitResult(name, result.created, result.updated, result.total)
        self.units.append(unit)
        return unit

    def fail(self, name: str, error: Exception) -> UnitResult:
        unit = UnitResult(name, error=str(error))
        self.units.append(unit)
        return unit

    @property
    def total_created(self) -> int:
        return sum(u.created for u in self.units)

    @property
    def total_updated(self) -> int:
        return sum(u.updated for u in self.units)

    @property
    def failures(self) -> list[UnitResult]:
        return [u for u in self.units if not u.ok]

    @property
    def ok(self) -> bool:
        return not self.failures


class Importer:
    """Builds TranslationRecords from legacy files and pushes them."""

    def __init__(
        self,
        gateway: TranslationGateway,
        context: TranslationContext,
        log: logging.LoggerAdapter | logging.Logger | None = None,
    ) -> None:
        self.gateway = gateway
        self.context = context
        self.log = log or get_channel_logger()

    def build_records(
        self, data: Mapping[str, Any], locale: str, group: str
    ) -> list[TranslationRecord]:
        """Flatten one group's tree into records (app prefix applied to group)."""
        final_group = prefix_group(group, self.context.app_prefix)
        return [
            TranslationRecord(
                tenant=self.context.tenant,
                locale=locale,
                group=final_group,
                key=key,
                value=value,
                client=self.context.client,
                is_active=True,
            )
            for key, value in flatten(data)
        ]

    def collect_locale(
        self, locale_dir: Path, locale: str, namespace: str | None = None
    ) -> list[TranslationRecord]:
        """Records for every source file in one locale directory."""
        records: list[TranslationRecord] = []
        for path in sorted(locale_dir.iterdir()):
            if not path.is_file() or path.suffix not in SOURCE_FILE_SUFFIXES:
                continue
            try:
                data = read_source_file(path)
            except MalformedSourceFile as e:
                self.log.debug("Skipping %s", e.message)
                continue
            records.extend(
                self.build_records(data, locale, namespaced_group(path.stem, namespace))
            )
        return records

    def _push(self, records: list[TranslationRecord], where: str) -> PushResult:
        if not records:
            self.log.warning("No translations found in %s", where)
            return PushResult()
        return self.gateway.push_records(records)

    def import_from_files(self, locale: str, base_path: str | Path) -> dict[str, int]:
        """Import {base_path}/{locale}/* as plain groups.

        Returns:
            {'created', 'updated', 'total'}; zeros when nothing was found.

        Raises:
            RemoteWriteError: If the push fails.
        """
        locale_dir = Path(base_path) / locale
        if not locale_dir.is_dir():
            self.log.warning("No translations found in %s", locale_dir)
            return PushResult().as_dict()
        return self._push(self.collect_locale(locale_dir, locale), str(locale_dir)).as_dict()

    def import_locales(
        self, base_path: str | Path, locales: Iterable[str] | None = None
    ) -> ImportReport:
        """Import each locale as its own unit; a failed locale does not stop the rest.

        Raises:
            ConfigurationError: If base_path is missing or has no locales.
        """
        base = Path(base_path)
        if not base.is_dir():
            raise ConfigurationError(f"Lang directory not found: {base}", option="path")
        locale_list = list(locales) if locales else discover_locales(base)
        if not locale_list:
            raise ConfigurationError("No locales found to import.", option="locale")

        report = ImportReport()
        for locale in locale_list:
            try:
                report.add(locale, PushResult(**self.import_from_files(locale, base)))
            except RemoteWriteError as e:
                self.log.error("Import of locale %s failed: %s", locale, e.message)
                report.fail(locale, e)
        return report

    def import_directory(
        self, lang_dir: Path, namespace: str, locale: str | None = None
    ) -> PushResult:
        """Import every locale (or one) under a Lang directory as namespaced groups."""
        locales = [locale] if locale else discover_locales(lang_dir)
        records: list[TranslationRecord] = []
        for loc in locales:
            locale_dir = lang_dir / loc
            if locale_dir.is_dir():
                records.extend(self.collect_locale(locale_dir, loc, namespace))
        return self._push(records, str(lang_dir))

    def import_namespaced(
        self,
        base_path: str | Path,
        pattern: str = DEFAULT_LANG_PATTERN,
        locale: str | None = None,
    ) -> ImportReport:
        """Import every Lang directory under base_path, one unit per directory.

        Raises:
            ConfigurationError: If base_path is missing or has no Lang directories.
        """
        base = Path(base_path)
        if not base.is_dir():
            raise ConfigurationError(f"Base path not found: {base}", option="path")
        lang_dirs = find_lang_directories(base, pattern)
        if not lang_dirs:
            raise ConfigurationError(f"No Lang directories found in: {base}", option="pattern")

        report = ImportReport()
        for lang_dir in lang_dirs:
            namespace = namespace_from_path(lang_dir, base)
            self.log.info("Processing namespace: %s (%s)", namespace, lang_dir)
            try:
                report.add(namespace, self.import_directory(lang_dir, namespace, locale))
            except RemoteWriteError as e:
                self.log.error("Import of namespace %s failed: %s", namespace, e.message)
                report.fail(namespace, e)
        return report
