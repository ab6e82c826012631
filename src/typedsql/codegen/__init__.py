"""Go code synthesis from described queries."""

from typedsql.codegen.bindings import synthesize
from typedsql.codegen.emitter import Emitter

__all__ = ["synthesize", "Emitter"]
