"""Core types for typedsql.

All types are pydantic models so descriptors can be printed as JSON by the CLI.
Everything here is frozen: a unit is derived once and never mutated afterwards.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class MappedType(StrEnum):
    """Target-language type categories. Values are the Go type names."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    ANY = "any"

    @property
    def zero_value(self) -> str:
        """Go literal for the zero value of this type."""
        return _ZERO_VALUES[self]


_ZERO_VALUES = {
    MappedType.STRING: '""',
    MappedType.INT: "0",
    MappedType.BOOL: "false",
    MappedType.ANY: "nil",
}


class QueryUnit(BaseModel):
    """One input query file."""

    identifier: str = Field(..., description="Go identifier derived from the file name")
    raw_text: str = Field(..., description="Query text exactly as read from disk")
    source_path: Path | None = Field(default=None, description="File the query was read from")

    model_config = {"frozen": True}


class ParameterDescriptor(BaseModel):
    """An undeclared query parameter as described by the engine."""

    name: str
    sql_type_name: str
    mapped_type: MappedType

    model_config = {"frozen": True}


class ResultColumnDescriptor(BaseModel):
    """A column of the query's first result set."""

    name: str
    sql_type_name: str
    mapped_type: MappedType

    model_config = {"frozen": True}


# === Binding artifacts ===


class FormalParameter(BaseModel):
    """A parameter in the accessor's signature."""

    name: str
    type: MappedType

    model_config = {"frozen": True}

    def render(self) -> str:
        return f"{self.name} {self.type}"


class NamedArgument(BaseModel):
    """A name/value binding passed to the query execution call."""

    name: str
    value: str

    model_config = {"frozen": True}

    def render(self) -> str:
        return f'sql.Named("{self.name}", {self.value})'


class ScanTarget(BaseModel):
    """The address of a local that receives one column of the row."""

    variable: str

    model_config = {"frozen": True}

    def render(self) -> str:
        return f"&{self.variable}"


class Bindings(BaseModel):
    """Artifacts synthesized from one query's descriptors.

    Each list lines up positionally with the descriptor list it came from.
    """

    formal_parameters: list[FormalParameter] = Field(default_factory=list)
    named_arguments: list[NamedArgument] = Field(default_factory=list)
    result_types: list[MappedType] = Field(default_factory=list)
    scan_targets: list[ScanTarget] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def parameter_string(self) -> str:
        return ", ".join(p.render() for p in self.formal_parameters)

    @property
    def named_argument_string(self) -> str:
        return ", ".join(a.render() for a in self.named_arguments)

    @property
    def result_type_string(self) -> str:
        return ", ".join(str(t) for t in self.result_types)

    @property
    def scan_string(self) -> str:
        return ", ".join(t.render() for t in self.scan_targets)


class GeneratedUnit(BaseModel):
    """Everything the emitter needs to render one accessor."""

    identifier: str
    embedded_source_path: str
    raw_text: str
    parameters: list[ParameterDescriptor] = Field(default_factory=list)
    results: list[ResultColumnDescriptor] = Field(default_factory=list)
    bindings: Bindings

    model_config = {"frozen": True}

    @property
    def query_variable(self) -> str:
        """Name of the package-level variable holding the embedded query text."""
        return f"{self.identifier}Query"


class GenerationResult(BaseModel):
    """Outcome of a completed generation run."""

    output_path: Path
    units: list[str]
    generated_at: datetime
    sql_copies: list[Path] = Field(default_factory=list)
