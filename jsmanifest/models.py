"""Core data models shared across jsmanifest components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

ANY_TYPE = "any"


class SymbolKind(str, Enum):
    """Discriminator for the symbol variants recorded in a manifest."""

    FUNCTION = "function"
    CLASS = "class"
    CONSTANT = "constant"
    EXPORT = "export"


class ParameterShape(str, Enum):
    """Syntactic shape a parameter was classified as."""

    SIMPLE = "simple"
    DEFAULTED = "defaulted"
    OBJECT_PATTERN = "objectPattern"
    ARRAY_PATTERN = "arrayPattern"
    REST = "rest"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Location:
    """Line/column span of a declaration (1-based lines, 0-based character columns)."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": {"line": self.start_line, "column": self.start_column},
            "end": {"line": self.end_line, "column": self.end_column},
        }


def _loc_dict(loc: Optional[Location]) -> Optional[Dict[str, Any]]:
    return loc.to_dict() if loc is not None else None


@dataclass
class PatternMember:
    """A binding inside an object or array destructuring parameter."""

    name: str
    type: str = ANY_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type}


@dataclass
class Parameter:
    """Uniform description of a function or method parameter."""

    name: str
    type: str = ANY_TYPE
    shape: ParameterShape = ParameterShape.SIMPLE
    has_default: bool = False
    properties: Optional[List[PatternMember]] = None
    elements: Optional[List[PatternMember]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.has_default:
            data["hasDefault"] = True
        if self.properties is not None:
            data["properties"] = [member.to_dict() for member in self.properties]
        if self.elements is not None:
            data["elements"] = [member.to_dict() for member in self.elements]
        return data


@dataclass
class ClassField:
    """Non-method class member."""

    name: str
    static: bool = False
    type: str = ANY_TYPE
    loc: Optional[Location] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "static": self.static,
            "type": self.type,
            "loc": _loc_dict(self.loc),
        }


@dataclass
class ClassMethod:
    """Constructor, method or accessor declared in a class body."""

    name: str
    kind: str = "method"
    static: bool = False
    params: List[Parameter] = field(default_factory=list)
    return_type: str = ANY_TYPE
    loc: Optional[Location] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "static": self.static,
            "kind": self.kind,
            "params": [param.to_dict() for param in self.params],
            "returnType": self.return_type,
            "loc": _loc_dict(self.loc),
        }


@dataclass
class FunctionSymbol:
    """Function declaration or function-valued binding."""

    name: str
    params: List[Parameter] = field(default_factory=list)
    return_type: str = ANY_TYPE
    loc: Optional[Location] = None

    kind: ClassVar[SymbolKind] = SymbolKind.FUNCTION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.kind.value,
            "params": [param.to_dict() for param in self.params],
            "returnType": self.return_type,
            "loc": _loc_dict(self.loc),
        }


@dataclass
class ClassSymbol:
    """Class declaration with its fields and methods in body order."""

    name: str
    extends: Optional[str] = None
    fields: List[ClassField] = field(default_factory=list)
    methods: List[ClassMethod] = field(default_factory=list)
    loc: Optional[Location] = None

    kind: ClassVar[SymbolKind] = SymbolKind.CLASS

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.kind.value,
            "fields": [member.to_dict() for member in self.fields],
            "methods": [member.to_dict() for member in self.methods],
            "loc": _loc_dict(self.loc),
        }
        if self.extends is not None:
            data["extends"] = self.extends
        return data


@dataclass
class ConstantSymbol:
    """Variable binding with a non-function initializer."""

    name: str
    loc: Optional[Location] = None

    kind: ClassVar[SymbolKind] = SymbolKind.CONSTANT

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.kind.value, "loc": _loc_dict(self.loc)}


@dataclass
class ExportSymbol:
    """Re-export of an existing binding (``export { local as name }``)."""

    name: str
    local_name: str
    loc: Optional[Location] = None

    kind: ClassVar[SymbolKind] = SymbolKind.EXPORT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "localName": self.local_name,
            "type": self.kind.value,
            "loc": _loc_dict(self.loc),
        }


Symbol = Union[FunctionSymbol, ClassSymbol, ConstantSymbol, ExportSymbol]


@dataclass
class ImportSpecifier:
    """One binding introduced by an import statement."""

    kind: str
    local: str
    imported: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.kind, "local": self.local}
        if self.kind == "named":
            data["imported"] = self.imported if self.imported is not None else self.local
        return data


@dataclass
class ImportDependency:
    """Static ``import ... from "source"`` reference."""

    source: str
    specifiers: List[ImportSpecifier] = field(default_factory=list)

    kind: ClassVar[str] = "import"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "source": self.source,
            "specifiers": [spec.to_dict() for spec in self.specifiers],
        }


@dataclass
class RequireDependency:
    """Dynamic ``require("source")`` reference."""

    source: str

    kind: ClassVar[str] = "require"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "source": self.source}


Dependency = Union[ImportDependency, RequireDependency]


@dataclass
class ExtractionResult:
    """Per-file metadata produced by the symbol extractor.

    Fields left as ``None`` are treated as empty by the manifest builder.
    """

    symbols: Optional[List[Symbol]] = None
    dependencies: Optional[List[Dependency]] = None
    has_default_export: Optional[bool] = None


@dataclass
class FileResult:
    """Extraction output paired with the file it came from."""

    path: str
    metadata: Optional[ExtractionResult] = None


@dataclass
class FileManifest:
    """Manifest entry for a single source file."""

    path: str
    filename: str
    symbols: List[Symbol] = field(default_factory=list)
    dependencies: List[Dependency] = field(default_factory=list)
    has_default_export: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "filename": self.filename,
            "symbols": [symbol.to_dict() for symbol in self.symbols],
            "dependencies": [dep.to_dict() for dep in self.dependencies],
            "hasDefaultExport": self.has_default_export,
        }


@dataclass
class TypeStats:
    """Symbol counts per kind."""

    functions: int = 0
    classes: int = 0
    constants: int = 0
    exports: int = 0

    def total(self) -> int:
        return self.functions + self.classes + self.constants + self.exports

    def to_dict(self) -> Dict[str, int]:
        return {
            "functions": self.functions,
            "classes": self.classes,
            "constants": self.constants,
            "exports": self.exports,
        }


@dataclass
class ManifestStats:
    """Roll-up statistics for a project manifest."""

    total_files: int = 0
    total_symbols: int = 0
    total_dependencies: int = 0
    type_stats: TypeStats = field(default_factory=TypeStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalSymbols": self.total_symbols,
            "totalDependencies": self.total_dependencies,
            "typeStats": self.type_stats.to_dict(),
        }


@dataclass
class ProjectManifest:
    """Aggregated description of an entire scanned project."""

    version: str
    generated: str
    root_path: str
    files: List[FileManifest] = field(default_factory=list)
    stats: ManifestStats = field(default_factory=ManifestStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "generated": self.generated,
            "rootPath": self.root_path,
            "files": [entry.to_dict() for entry in self.files],
            "stats": self.stats.to_dict(),
        }
