"""translation-client command line.

Usage:
    translation-client import [--locale ar] [--path lang]
    translation-client import-namespaced [--locale ar] [--path src/App] [--pattern '*/Lang']
    translation-client sync [--locale ar] [--force]
    translation-client clear-cache [--locale ar]

Exit status is 0 when every unit (locale or Lang directory) succeeded,
1 otherwise.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence

from translation_client import __version__
from translation_client.application.services.importer import ImportReport
from translation_client.bootstrap import TranslationServices, build_services
from translation_client.core.config import get_settings
from translation_client.domain.exceptions import ConfigurationError
from translation_client.shared.telemetry.logging import setup_logging
from translation_client.shared.telemetry.telemetry import setup_from_settings

SUCCESS = 0
FAILURE = 1
_RULE = "━" * 40


def _print_report(report: ImportReport, unit_label: str) -> int:
    for unit in report.units:
        print(f"{unit.name}:")
        if unit.ok:
            print(f"   Created: {unit.created}")
            print(f"   Updated: {unit.updated}")
            print(f"   Total: {unit.total}")
        else:
            print(f"   Failed: {unit.error}", file=sys.stderr)
    print(_RULE)
    print(f"Total Created: {report.total_created}")
    print(f"Total Updated: {report.total_updated}")
    if report.failures:
        print(f"Failed {unit_label}: {len(report.failures)}", file=sys.stderr)
    print(_RULE)
    return SUCCESS if report.ok else FAILURE


def cmd_import(services: TranslationServices, args: argparse.Namespace) -> int:
    path = args.path or services.settings.lang_path
    print("Importing translations to Translation Service...")
    report = services.importer().import_locales(path, [args.locale] if args.locale else None)
    return _print_report(report, "Locales")


def cmd_import_namespaced(services: TranslationServices, args: argparse.Namespace) -> int:
    path = args.path or services.settings.modules_path
    print("Importing namespaced translations to Translation Service...")
    report = services.importer().import_namespaced(path, args.pattern, args.locale)
    return _print_report(report, "Directories")


def cmd_sync(services: TranslationServices, args: argparse.Namespace) -> int:
    locales = [args.locale] if args.locale else services.settings.locales
    if not locales:
        raise ConfigurationError(
            "No locales configured. Set TRANSLATION_AVAILABLE_LOCALES.",
            option="available_locales",
        )
    print(f"Syncing locales: {', '.join(locales)}")
    ctx = services.context()
    successes = failures = 0
    for locale in locales:
        print(f" Syncing {locale}...")
        if args.force:
            services.bundle_cache.clear_tenant(ctx, locale)
        manifest = services.bundle_cache.check_version(ctx, locale)
        print(f"   Version: {manifest.version}")
        print(f"   Updated: {manifest.updated_at}")
        outcome = services.bundle_cache.load_translations(ctx, locale)
        if outcome.degraded:
            print(f"    Failed: {outcome.reason.message}", file=sys.stderr)
            failures += 1
            continue
        services.loader.clear_loaded(locale)
        services.loader.preload_locale(locale)
        print(f"    Synced {len(outcome.data)} translations")
        successes += 1
    print(_RULE)
    print(f"✓ Success: {successes}")
    if failures:
        print(f"✗ Failed: {failures}", file=sys.stderr)
    print(_RULE)
    return SUCCESS if failures == 0 else FAILURE


def cmd_clear_cache(services: TranslationServices, args: argparse.Namespace) -> int:
    if args.locale:
        print(f"Clearing translation cache for locale: {args.locale}")
        services.bundle_cache.clear_tenant(services.context(), args.locale)
    else:
        print("Clearing all translation caches...")
        services.bundle_cache.clear_all()
    services.loader.clear_loaded(args.locale)
    print("Translation cache cleared successfully!")
    return SUCCESS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="translation-client",
        description="Manage translations on the remote translation service.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("import", help="Import lang files to the translation service")
    p.add_argument("--locale", help="Specific locale to import")
    p.add_argument("--path", help="Path to the lang directory")
    p.set_defaults(handler=cmd_import)

    p = sub.add_parser(
        "import-namespaced", help="Import namespaced translations from modular directories"
    )
    p.add_argument("--locale", help="Specific locale to import")
    p.add_argument("--path", help="Base path to search for Lang directories")
    p.add_argument("--pattern", default="*/Lang", help="Directory glob (default: */Lang)")
    p.set_defaults(handler=cmd_import_namespaced)

    p = sub.add_parser("sync", help="Sync translations from the translation service")
    p.add_argument("--locale", help="Specific locale to sync")
    p.add_argument("--force", action="store_true", help="Refresh even if cache is valid")
    p.set_defaults(handler=cmd_sync)

    p = sub.add_parser("clear-cache", help="Clear translation caches")
    p.add_argument("--locale", help="Specific locale to clear")
    p.set_defaults(handler=cmd_clear_cache)
    return parser


def main(
    argv: Sequence[str] | None = None,
    services_factory: Callable[[], TranslationServices] = build_services,
) -> int:
    """Parse argv, run the command, and return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        setup_logging()
        telemetry = setup_from_settings(get_settings(), __version__)
        services = services_factory()
    except ValueError as e:
        # pydantic ValidationError from Settings
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return FAILURE
    try:
        return args.handler(services, args)
    except ConfigurationError as e:
        print(e.message, file=sys.stderr)
        return FAILURE
    finally:
        services.close()
        telemetry.shutdown()


if __name__ == "__main__":
    sys.exit(main())
