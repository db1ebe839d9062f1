"""JSON export of the in-memory state.

Why JSON:
- Vote counts only live for the session; exporting is the only way to keep
  a record of them.
- Same shape as the server payload, so the file can seed a json-server db.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import Entity


def export_entities_json(
    *,
    entities: Iterable[Entity],
    output_path: Path,
    resource: str = "characters",
) -> Path:
    """Export entities as `{resource: [...]}` UTF-8 JSON with stable formatting."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {resource: [entity.model_dump(mode="json") for entity in entities]}
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
