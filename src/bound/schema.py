"""Pydantic models for the bound-tree JSON dump.

The binder runs upstream and hands the editor a JSON document::

    {
      "types": [{"name": "Api", "properties": [...], "methods": [...]}],
      "constants": [{"name": "api", "type": "Api"}],
      "unit": {"kind": "compilation_unit", "range": [0, 0, 3, 1], ...}
    }

Every node carries ``kind`` (a ``NodeKind`` value) and ``range``
(``[start_line, start_column, end_line, end_column]``). Type references are
names: a predefined keyword or a type listed in ``types``.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

RangeDump = tuple[int, int, int, int]


class PropertyDump(BaseModel):
    name: str
    type: str


class ParameterInfoDump(BaseModel):
    name: str
    type: str


class MethodInfoDump(BaseModel):
    name: str
    return_type: str = Field(default="void", alias="return")
    parameters: list[ParameterInfoDump] = Field(default_factory=list)


class TypeDump(BaseModel):
    """An external class type and its instance members."""

    name: str
    qualified_name: str | None = None
    properties: list[PropertyDump] = Field(default_factory=list)
    methods: list[MethodInfoDump] = Field(default_factory=list)


class ConstantDump(BaseModel):
    name: str
    type: str


class SymbolDump(BaseModel):
    kind: Literal["constant", "static", "local", "parameter"]
    name: str
    type: str | None = Field(default=None, description="Defaults to the node type")
    by_ref: bool = False


class _NodeDump(BaseModel):
    range: RangeDump

    @field_validator("range")
    @classmethod
    def validate_range(cls, v: RangeDump) -> RangeDump:
        if v[:2] > v[2:]:
            msg = f"range start {list(v[:2])} is after its end {list(v[2:])}"
            raise ValueError(msg)
        return v


class LiteralDump(_NodeDump):
    kind: Literal[
        "boolean_literal",
        "integer_literal",
        "char_literal",
        "float_literal",
        "string_literal",
    ]


class CompositeDump(_NodeDump):
    """Statements and argument lists that only carry children."""

    kind: Literal[
        "expression_statement",
        "assignment_statement",
        "if_statement",
        "while_loop",
        "return_statement",
        "arguments_list",
    ]
    children: list[NodeDump] = Field(default_factory=list)


class ExpressionDump(_NodeDump):
    kind: Literal["method_call", "unary_operator"]
    children: list[NodeDump] = Field(default_factory=list)
    type: str | None = None


class NameDump(_NodeDump):
    kind: Literal["name_expression"]
    name: str
    type: str | None = None
    symbol: SymbolDump | None = None


class PropertyAccessDump(_NodeDump):
    kind: Literal["property_access_expression"]
    callee: NodeDump
    name: str
    member: str | None = Field(default=None, description="Set when the name resolved")
    type: str | None = None


class MethodDump(_NodeDump):
    kind: Literal["method"]
    owner: str
    method: str


class BinaryOperatorDump(_NodeDump):
    kind: Literal["binary_operator"]
    operator: str
    type: str
    left: NodeDump
    right: NodeDump


class PredefinedTypeDump(_NodeDump):
    kind: Literal["predefined_type"]
    type: str


class VariableDeclarationDump(_NodeDump):
    kind: Literal["variable_declaration"]
    type_node: NodeDump | None = None
    name: NameDump
    initializer: NodeDump | None = None


class ParameterDump(_NodeDump):
    kind: Literal["parameter"]
    type_node: NodeDump
    name: NameDump
    by_ref: bool = False


class ParameterListDump(_NodeDump):
    kind: Literal["parameter_list"]
    parameters: list[ParameterDump] = Field(default_factory=list)


class StatementsListDump(_NodeDump):
    kind: Literal["statements_list"]
    statements: list[NodeDump] = Field(default_factory=list)


class FunctionDump(_NodeDump):
    kind: Literal["function"]
    return_type: NodeDump
    name: NameDump
    parameters: ParameterListDump
    body: StatementsListDump


class ForLoopDump(_NodeDump):
    kind: Literal["for_loop"]
    init: NodeDump | None = None
    condition: NodeDump | None = None
    update: NodeDump | None = None
    body: NodeDump


class ForeachLoopDump(_NodeDump):
    kind: Literal["foreach_loop"]
    type_node: NodeDump
    name: NameDump
    iterable: NodeDump
    body: NodeDump


class StaticVariablesListDump(_NodeDump):
    kind: Literal["static_variables_list"]
    variables: list[VariableDeclarationDump] = Field(default_factory=list)


class FunctionsListDump(_NodeDump):
    kind: Literal["functions_list"]
    functions: list[FunctionDump] = Field(default_factory=list)


class CompilationUnitDump(_NodeDump):
    kind: Literal["compilation_unit"]
    variables: StaticVariablesListDump
    functions: FunctionsListDump
    statements: StatementsListDump


NodeDump = Annotated[
    LiteralDump
    | CompositeDump
    | ExpressionDump
    | NameDump
    | PropertyAccessDump
    | MethodDump
    | BinaryOperatorDump
    | PredefinedTypeDump
    | VariableDeclarationDump
    | ParameterDump
    | ParameterListDump
    | StatementsListDump
    | FunctionDump
    | ForLoopDump
    | ForeachLoopDump
    | StaticVariablesListDump
    | FunctionsListDump
    | CompilationUnitDump,
    Field(discriminator="kind"),
]


class BoundTreeDump(BaseModel):
    """Top-level document: declared types, external constants and the unit."""

    types: list[TypeDump] = Field(default_factory=list)
    constants: list[ConstantDump] = Field(default_factory=list)
    unit: CompilationUnitDump


for _model in (
    CompositeDump,
    ExpressionDump,
    PropertyAccessDump,
    BinaryOperatorDump,
    VariableDeclarationDump,
    ParameterDump,
    StatementsListDump,
    FunctionDump,
    ForLoopDump,
    ForeachLoopDump,
    StaticVariablesListDump,
    FunctionsListDump,
    CompilationUnitDump,
    BoundTreeDump,
):
    _model.model_rebuild()


__all__ = [
    "BinaryOperatorDump",
    "BoundTreeDump",
    "CompilationUnitDump",
    "CompositeDump",
    "ConstantDump",
    "ExpressionDump",
    "ForLoopDump",
    "ForeachLoopDump",
    "FunctionDump",
    "FunctionsListDump",
    "LiteralDump",
    "MethodDump",
    "MethodInfoDump",
    "NameDump",
    "NodeDump",
    "ParameterDump",
    "ParameterListDump",
    "PredefinedTypeDump",
    "PropertyAccessDump",
    "RangeDump",
    "StatementsListDump",
    "StaticVariablesListDump",
    "SymbolDump",
    "TypeDump",
]
