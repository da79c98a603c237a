#!/usr/bin/env python3
"""
Type-model extraction pipeline.

Loads a symbol graph dump written by a source indexer, extracts the
exported type descriptors of every compilation unit, and writes them as a
single JSON document for a type-definition generator to consume. A run
report is written alongside.

Usage:
    python run_extraction.py --symbols out/symbols.yml
    python run_extraction.py --symbols out/symbols.json --output-file out/types.json
    python run_extraction.py --symbols out/symbols.yml --settings typeshape.yml --strict-config
    python run_extraction.py --symbols out/symbols.yml --log-file output/extraction.log
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import Any

from core.run_artifacts import write_descriptor_document, write_run_report
from core.startup_config import ConfigValidationError
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Type-model extraction from a symbol graph dump",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_extraction.py --symbols out/symbols.yml\n"
            "  python run_extraction.py --symbols out/symbols.yml --output-file out/types.json\n"
        ),
    )

    parser.add_argument(
        "--symbols",
        required=True,
        help="Path to the symbol graph dump (YAML, or JSON by .json suffix).",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Optional YAML settings file (default_module_name, artifact_extension, "
        "module_attribute_marker).",
    )
    parser.add_argument(
        "--output-file",
        default="output/types.json",
        help="Path for the extracted type document. Default: output/types.json",
    )
    parser.add_argument(
        "--report-dir",
        default="output/run_reports",
        help="Directory for run reports. Default: output/run_reports",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=False,
        help="Fail on missing or invalid settings instead of falling back to defaults.",
    )
    parser.add_argument(
        "--stop-on-error",
        action="store_true",
        default=False,
        help="Abort on the first compilation unit that fails to extract.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)


def run_extraction(
    symbols_path: str,
    output_file: str,
    settings_path: str | None = None,
    strict_config: bool = False,
    continue_on_error: bool = True,
) -> dict[str, Any]:
    """Load, extract and write; return the report fragment for this run.

    Raises:
        FileNotFoundError: If the symbol dump does not exist.
        SymbolGraphError: If the dump is malformed.
        ConfigValidationError: If strict settings validation fails.
    """
    from extraction.config import load_extraction_options
    from extraction.extractor import extract_project
    from symbols.loader import load_symbol_graph

    options = load_extraction_options(settings_path, strict=strict_config)
    logger.info("Symbol dump      : %s", os.path.abspath(symbols_path))
    logger.info("Output file      : %s", os.path.abspath(output_file))
    logger.info("Default module   : %s", options.default_module_name)
    logger.info("Artifact suffix  : %s", options.artifact_extension)

    t0 = time.time()
    with phase_scope("load"):
        graph = load_symbol_graph(symbols_path)

    with phase_scope("extract"):
        descriptors, stats = extract_project(
            graph.units,
            options,
            continue_on_error=continue_on_error,
        )

    with phase_scope("write"):
        path = write_descriptor_document(descriptors, output_file, project=graph.project)
    elapsed = time.time() - t0
    logger.info("Wrote %d types to %s in %.2fs", len(descriptors), path, elapsed)

    return {
        "project": graph.project,
        "symbols_path": symbols_path,
        "output_file": path,
        "stats": stats.to_dict(),
        "elapsed_seconds": round(elapsed, 3),
        "status": "success" if stats.units_failed == 0 else "partial",
    }


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the extraction pipeline."""
    args = parse_args(argv)
    configure_structured_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=Path(args.log_file) if args.log_file else None,
    )
    run_id = set_run_id()

    run_report: dict[str, Any] = {
        "run_id": run_id,
        "pipeline": "type_extraction",
        "status": "failed",
    }
    try:
        result = run_extraction(
            symbols_path=args.symbols,
            output_file=args.output_file,
            settings_path=args.settings,
            strict_config=args.strict_config,
            continue_on_error=not args.stop_on_error,
        )
        run_report.update(result)
        report_path = write_run_report(run_report, run_id, output_dir=args.report_dir)
        logger.info("Run report written: %s", report_path)
    except (FileNotFoundError, ValueError, ConfigValidationError) as exc:
        run_report["error"] = str(exc)
        report_path = write_run_report(run_report, run_id, output_dir=args.report_dir)
        logger.info("Run report written: %s", report_path)
        logger.error("Extraction failed: %s", exc)
        sys.exit(1)
    except Exception as exc:
        run_report["error"] = str(exc)
        report_path = write_run_report(run_report, run_id, output_dir=args.report_dir)
        logger.info("Run report written: %s", report_path)
        logger.error("Extraction failed: %s", exc, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
