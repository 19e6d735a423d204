"""Render del FactSet: JSON, YAML o líneas `nombre: valor`.

JSON/YAML serializan siempre el FactSet completo; el modo texto respeta la
lista de facts a mostrar.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

import yaml

from core.domain.models import FactSet


def render_json(facts: FactSet) -> str:
    return json.dumps(facts.model_dump(mode="json"), ensure_ascii=False, indent=2)


def render_yaml(facts: FactSet) -> str:
    return yaml.safe_dump(
        facts.model_dump(mode="json"),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    ).rstrip("\n")


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def render_plain(facts: FactSet, names: Iterable[str]) -> str:
    lines: list[str] = []
    for name in names:
        value = facts.get(name)
        if value is None or value == "":
            continue
        lines.append(f"{name}: {format_value(value)}")
    return "\n".join(lines)
