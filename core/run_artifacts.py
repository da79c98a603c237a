"""Run artifact helpers: extracted type documents and operational reports."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Iterable


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _write_json(payload: dict[str, Any], path: str, sort_keys: bool) -> str:
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=sort_keys, ensure_ascii=False)
        f.write("\n")
    return path


def write_descriptor_document(
    descriptors: Iterable[Any],
    path: str,
    project: str,
) -> str:
    """Write extracted type descriptors as one JSON document and return its path.

    ``descriptors`` are objects with a ``to_dict()`` method; their order is
    kept, since serializers emit types in declaration order.
    """
    payload = {
        "project": project,
        "generated_utc": _utc_now(),
        "types": [descriptor.to_dict() for descriptor in descriptors],
    }
    return _write_json(payload, path, sort_keys=False)


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "output/run_reports",
) -> str:
    """Write a JSON run report and return its path."""
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", _utc_now())
    return _write_json(payload, os.path.join(output_dir, f"{run_id}.json"), sort_keys=True)
