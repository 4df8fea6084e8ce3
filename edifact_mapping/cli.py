#!/usr/bin/env python3
"""
Command-line interface for edifact_mapping.

Prints the requested mapping document as JSON on stdout. Exit status is 0 on
success, 1 when the file cannot be read or parsed and 2 when the requested
identifier does not exist.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from edifact_mapping.core.catalog import DirectoryCatalog
from edifact_mapping.core.models import LoadFailure
from edifact_mapping.core.provider import (
    DEFAULT_MESSAGE,
    DEFAULT_SERVICE_MESSAGE,
    DEFAULT_SERVICE_VERSION,
    MappingProvider,
)
from edifact_mapping.logging_config import setup_logging
from edifact_mapping.version import get_version

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 2


def build_parser(config: Optional[Dict[str, Any]] = None) -> argparse.ArgumentParser:
    config = config or {}
    service_version = str(config.get("service_version") or DEFAULT_SERVICE_VERSION)

    parser = argparse.ArgumentParser(
        prog="edifact-mapping",
        description="Resolve and convert UN/EDIFACT XML mapping files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    parser.add_argument("--path", help="base folder of the mapping tree")
    parser.add_argument("--directory", "-d", help="directory tag, e.g. D95B or 96A")
    parser.add_argument("--service-version", default=service_version,
                        help="syntax version for service segments/messages (default: %(default)s)")
    parser.add_argument("--service", action="store_true",
                        help="read service segments/messages instead of the directory's own "
                             "(not valid with codes/code: service folders have no code lists)")
    parser.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("paths", help="show resolved file paths")
    sub.add_parser("directories", help="list directories under the base path")
    sub.add_parser("messages", help="list message names of the directory")

    message = sub.add_parser("message", help="convert a message structure")
    message.add_argument("name", nargs="?", default=None)
    defaults = message.add_mutually_exclusive_group(required=True)
    defaults.add_argument("--keep-defaults", dest="keep_defaults", action="store_true")
    defaults.add_argument("--no-defaults", dest="keep_defaults", action="store_false")

    sub.add_parser("segments", help="convert the segment catalog")
    segment = sub.add_parser("segment", help="look up one segment definition")
    segment.add_argument("id")

    sub.add_parser("codes", help="convert the code table")
    code = sub.add_parser("code", help="look up one code list")
    code.add_argument("id")
    return parser


def _emit(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _render(result: Any) -> Any:
    if isinstance(result, tuple):
        return [node.to_dict() for node in result]
    if hasattr(result, "to_dict"):
        return result.to_dict()
    return result


def _finish(result: Any, identifier: Optional[str] = None) -> int:
    if isinstance(result, LoadFailure):
        _emit(result.to_dict())
        return EXIT_FAILURE
    if result is None:
        _emit({"success": False, "error": "not_found", "id": identifier})
        return EXIT_NOT_FOUND
    _emit(_render(result))
    return EXIT_OK


def run(argv: Optional[List[str]] = None, config: Optional[Dict[str, Any]] = None) -> int:
    """Parse *argv*, execute the command and return the exit status."""
    if config is None:
        from edifact_mapping.config import ConfigManager
        config = ConfigManager().get_mapping_config()

    parser = build_parser(config)
    args = parser.parse_args(argv)
    if args.service and args.command in ("codes", "code"):
        parser.error(f"--service cannot be combined with {args.command}: service folders have no codes.xml")
    setup_logging(verbose=args.verbose)

    provider = MappingProvider.from_config(config, directory=args.directory, path=args.path)
    catalog = DirectoryCatalog(provider)
    version = args.service_version
    service = args.service
    logger.debug("Using %r (service=%s, version=%s)", provider, service, version)

    if args.command == "paths":
        _emit({
            "base_path": provider.base_path,
            "directory": provider.directory,
            "codes": provider.codes_path(),
            "segments": provider.segments_path(),
            "message": provider.message_path(config.get("default_message") or DEFAULT_MESSAGE),
            "service_segments": provider.service_segments_path(version),
            "service_message": provider.service_message_path(
                version, config.get("default_service_message") or DEFAULT_SERVICE_MESSAGE),
        })
        return EXIT_OK
    if args.command == "directories":
        _emit(provider.list_directories())
        return EXIT_OK
    if args.command == "messages":
        _emit(provider.list_messages())
        return EXIT_OK

    commands: Dict[str, Callable[[], Any]] = {
        "message": lambda: (
            catalog.service_message(version, args.name or config.get("default_service_message")
                                    or DEFAULT_SERVICE_MESSAGE, args.keep_defaults)
            if service else
            catalog.message(args.name or config.get("default_message") or DEFAULT_MESSAGE,
                            args.keep_defaults)
        ),
        "segments": lambda: catalog.service_segments(version) if service else catalog.segments(),
        "segment": lambda: catalog.segment(args.id, version if service else None),
        "codes": catalog.codes,
        "code": lambda: catalog.code(args.id),
    }
    return _finish(commands[args.command](), getattr(args, "id", None))


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
