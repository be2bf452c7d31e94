"""Data preparation for export."""

import json
from datetime import datetime, timezone
from typing import Dict, Any

from ..core.constants import FileConstants
from ..core.models import AnalysisResult


def prepare_export(result: AnalysisResult) -> Dict[str, Any]:
    """Prepare an analysis report for JSON export."""
    export_data = result.to_dict()
    export_data["metadata"] = {
        "export_timestamp": None,  # Will be set by export_to_json
        "version": FileConstants.REPORT_VERSION,
    }
    return export_data


def export_to_json(data: Dict[str, Any], filename: str) -> None:
    """Export data to JSON file."""
    data.setdefault("metadata", {"version": FileConstants.REPORT_VERSION})
    data["metadata"]["export_timestamp"] = datetime.now(timezone.utc).isoformat(timespec="seconds")

    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
