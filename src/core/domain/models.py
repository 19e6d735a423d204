"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El esquema de facts lo define cada fuente (PuppetDB, Cobbler, Racktables),
  así que `FactSet` es un mapeo abierto con accesores, no un registro fijo.
- Los blobs estructurados (comentario de Cobbler, YAML de rackfacts) se
  normalizan con modelos tolerantes (`extra="ignore"`).

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

from pydantic import BaseModel, Field, RootModel
from pydantic.config import ConfigDict


class FactSet(RootModel[dict[str, Any]]):
    """Conjunto de facts de un host: `nombre -> valor`.

    Reglas:
    - Es inmutable por convención: `merged` devuelve un nuevo `FactSet`.
    - El merge es una superposición parcial: solo se pisan las claves que la
      fuente posterior aporta explícitamente.
    """

    root: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> "FactSet":
        return cls({})

    @classmethod
    def from_pairs(cls, pairs: Mapping[str, Any]) -> "FactSet":
        return cls(dict(pairs))

    def get(self, name: str, default: Any = None) -> Any:
        return self.root.get(name, default)

    def flag(self, name: str) -> bool:
        """True si el fact vale `True` o el string `"true"` (PuppetDB usa ambos)."""

        value = self.root.get(name)
        if isinstance(value, bool):
            return value
        return isinstance(value, str) and value.strip().lower() == "true"

    def keys(self) -> list[str]:
        return list(self.root.keys())

    def items(self) -> list[tuple[str, Any]]:
        return list(self.root.items())

    def is_empty(self) -> bool:
        return not self.root

    def merged(self, other: "FactSet | Mapping[str, Any]") -> "FactSet":
        overlay = other.root if isinstance(other, FactSet) else dict(other)
        return FactSet({**self.root, **overlay})

    def __getitem__(self, name: str) -> Any:
        return self.root[name]

    def __contains__(self, name: object) -> bool:
        return name in self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)


class CommentMetadata(BaseModel):
    """Metadata que los operadores guardan como YAML en el `comment` de Cobbler."""

    model_config = ConfigDict(extra="ignore")

    owner: str | None = Field(default=None, description="Responsable del host.")
    group: str | None = Field(default=None, description="Grupo/laboratorio propietario.")
    rt: str | None = Field(default=None, description="Referencia de ticket (RT).")
    docs: str | None = Field(default=None, description="Enlace a documentación.")
    notes: str | None = Field(default=None, description="Notas libres del operador.")

    def as_facts(self) -> FactSet:
        return FactSet(self.model_dump(exclude_none=True))


class RackFacts(BaseModel):
    """Ubicación física devuelta por `rackfacts/systems/<host>`."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    ru: str | None = Field(default=None, description="Unidad de rack (RU).")
    rack: str | None = Field(default=None, description="Identificador del rack.")
    row: str | None = Field(default=None, description="Identificador de la fila.")

    def as_facts(self) -> FactSet:
        facts = {
            "location_ru": self.ru,
            "location_rack": self.rack,
            "location_row": self.row,
        }
        return FactSet({k: v for k, v in facts.items() if v is not None})


class HypervisorRecord(BaseModel):
    """Datos derivados del hipervisor KVM que aloja una VM.

    No se almacena: se compone a partir de los facts del hipervisor
    (`kvm_<vm>_pool`, `kvm_<vm>_vnc`) y de su propio certname.
    """

    hypervisor: str = Field(
        ...,
        min_length=1,
        description="Certname del hipervisor que lista la VM.",
    )
    kvm_pool: str | None = Field(
        default=None,
        description="Pool de almacenamiento asignado a la VM.",
    )
    console: str | None = Field(
        default=None,
        description="URI de consola, p.ej. 'vnc://hv01:5903'.",
    )

    def as_facts(self) -> FactSet:
        return FactSet(self.model_dump(exclude_none=True))
