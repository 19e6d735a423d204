"""Decodificación estricta de campos estructurados embebidos en strings.

`kvm_vms` (lista de VMs de un hipervisor) y el `comment` de Cobbler llegan
como texto. Se interpretan con JSON/YAML seguro; nunca se evalúa código.
Contenido no interpretable equivale a vacío.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

NO_VMS_SENTINEL = "NO_VMS"


def safe_yaml(text: str) -> Any:
    """`yaml.safe_load` que devuelve `None` ante cualquier fallo.

    PyYAML también lanza `ValueError`/`TypeError` al construir escalares
    implícitos imposibles (`2021-13-01`, `!!int x`).
    """

    try:
        return yaml.safe_load(text)
    except (yaml.YAMLError, ValueError, TypeError):
        return None


def _load_text(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        pass
    return safe_yaml(text)


def parse_vm_list(value: Any) -> list[str]:
    """Lista de nombres de VM a partir de una lista o de `'["a", "b"]'`.

    Acepta arrays JSON y secuencias YAML en flujo (`['a', 'b']`). Se
    descartan elementos que no sean string.
    """

    if isinstance(value, str):
        text = value.strip()
        if not text or text == NO_VMS_SENTINEL:
            return []
        value = _load_text(text)

    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def parse_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return {str(k): v for k, v in value.items()}
    if not isinstance(value, str) or not value.strip():
        return {}
    loaded = safe_yaml(value)
    if not isinstance(loaded, dict):
        return {}
    return {str(k): v for k, v in loaded.items()}
