from __future__ import annotations

from bound.nodes import (
    BoundNode,
    BoundTree,
    CompositeNode,
    ExpressionNode,
    ForeachLoopNode,
    ForLoopNode,
    NameExpressionNode,
    NodeKind,
    PredefinedTypeNode,
)
from bound.ranges import TextRange
from bound.symbols import (
    ExternalStaticConstant,
    Function,
    LocalVariable,
    Parameter,
    StaticVariable,
)
from bound.types import BOOLEAN, INT, STRING, ClassType, make_function_type
from builders import block, function, int_decl, ref_decl, rng, unit
from completion.context import get_completion_context
from completion.scope import collect_symbols

PI = ExternalStaticConstant("PI", INT)


def _visible(tree: BoundTree, line: int, column: int) -> list[str]:
    context = get_completion_context(tree.unit, line, column)
    return [symbol.name for symbol in collect_symbols(tree, context, line, column)]


def _if_statement(
    text_range: TextRange, condition_range: TextRange, *branches: BoundNode
) -> CompositeNode:
    condition = ExpressionNode(
        kind=NodeKind.BOOLEAN_LITERAL, range=condition_range, type=BOOLEAN
    )
    return CompositeNode(
        kind=NodeKind.IF_STATEMENT, range=text_range, nodes=(condition, *branches)
    )


def test_empty_file_sees_only_external_constants() -> None:
    tree = BoundTree(unit=unit(), constants=(PI,))

    assert _visible(tree, 0, 0) == ["PI"]


def test_locals_are_visible_only_after_their_declaration() -> None:
    # line 0: int v1 = 1;
    # line 1: int v2 = 1;
    # line 2: <cursor>
    # line 3: int v3 = 1;
    tree = BoundTree(
        unit=unit(
            statements=(
                int_decl("v1", 0, 0),
                int_decl("v2", 1, 0),
                int_decl("v3", 3, 0),
            )
        ),
        constants=(PI,),
    )

    assert _visible(tree, 2, 0) == ["PI", "v1", "v2"]


def test_declaration_is_not_visible_in_its_own_initializer() -> None:
    tree = BoundTree(unit=unit(statements=(int_decl("a", 0, 0), int_decl("b", 1, 0))))

    # "int b = |1;"
    assert _visible(tree, 1, 7) == ["a"]


def test_outer_block_locals_visible_in_nested_block() -> None:
    # line 0: int a = 1;
    # line 1: if (true) {
    # line 2:   int b = 1;
    # line 3:   <cursor>
    # line 4:   int c = 1;
    # line 5: }
    # line 6: int d = 1;
    inner = block(rng(1, 10, 5, 1), int_decl("b", 2, 2), int_decl("c", 4, 2))
    tree = BoundTree(
        unit=unit(
            statements=(
                int_decl("a", 0, 0),
                _if_statement(rng(1, 0, 5, 1), rng(1, 4, 1, 8), inner),
                int_decl("d", 6, 0),
            )
        )
    )

    assert _visible(tree, 3, 2) == ["a", "b"]


def test_sibling_branch_locals_are_not_visible() -> None:
    # line 0: if (true) {
    # line 1:   int e = 1;
    # line 2: } else {
    # line 3:   <cursor>
    # line 4: }
    then_branch = block(rng(0, 10, 2, 1), int_decl("e", 1, 2))
    else_branch = block(rng(2, 7, 4, 1))
    tree = BoundTree(
        unit=unit(
            statements=(
                _if_statement(rng(0, 0, 4, 1), rng(0, 4, 0, 8), then_branch, else_branch),
            )
        )
    )

    assert _visible(tree, 3, 2) == []


def test_parameters_visible_throughout_function_body() -> None:
    # line 0: static int s = 1;
    # line 1: void g(int p, string q) {
    # line 2:   <cursor>
    # line 3:   int r = 1;
    # line 4:   <cursor>
    # line 5: }
    # line 6: int top = 1;
    body = block(rng(1, 24, 5, 1), int_decl("r", 3, 2))
    tree = BoundTree(
        unit=unit(
            variables=(int_decl("s", 0, 0, static=True),),
            functions=(function("g", 1, 0, body, params=((INT, "p"), (STRING, "q"))),),
            statements=(int_decl("top", 6, 0),),
        ),
        constants=(PI,),
    )

    assert _visible(tree, 2, 2) == ["PI", "s", "g", "p", "q"]
    assert _visible(tree, 4, 2) == ["PI", "s", "g", "p", "q", "r"]


def test_top_level_locals_do_not_leak_into_functions() -> None:
    body = block(rng(1, 9, 3, 1))
    tree = BoundTree(
        unit=unit(
            functions=(function("f", 1, 0, body),),
            statements=(int_decl("late", 4, 0),),
        )
    )

    assert _visible(tree, 2, 0) == ["f"]


def test_for_loop_initializer_visible_in_body() -> None:
    # line 0: for (int i = 0; ; ) {
    # line 1:   <cursor>
    # line 2: }
    loop = ForLoopNode(
        range=rng(0, 0, 2, 1),
        init=int_decl("i", 0, 5, value=0),
        body=block(rng(0, 21, 2, 1)),
    )
    tree = BoundTree(unit=unit(statements=(loop,)))

    assert _visible(tree, 1, 2) == ["i"]


def test_foreach_variable_visible_only_in_body() -> None:
    # line 0: foreach (int item in items) {
    # line 1:   <cursor>
    # line 2: }
    items_type = ClassType("IntList")
    items = ExternalStaticConstant("items", items_type)
    loop = ForeachLoopNode(
        range=rng(0, 0, 2, 1),
        type_node=PredefinedTypeNode(range=rng(0, 9, 0, 12), type=INT),
        name=NameExpressionNode(
            range=rng(0, 13, 0, 17),
            name="item",
            symbol=LocalVariable("item", INT),
            type=INT,
        ),
        iterable=NameExpressionNode(
            range=rng(0, 21, 0, 26), name="items", symbol=items, type=items_type
        ),
        body=block(rng(0, 28, 2, 1)),
    )
    tree = BoundTree(unit=unit(statements=(loop,)), constants=(items,))

    assert _visible(tree, 1, 2) == ["items", "item"]
    assert _visible(tree, 0, 23) == ["items"]


def test_unit_gap_after_statics_sees_statics_but_not_functions() -> None:
    tree = BoundTree(
        unit=unit(
            variables=(int_decl("x", 0, 0, static=True),),
            functions=(function("f", 2, 0, block(rng(2, 9, 2, 12))),),
        )
    )

    assert _visible(tree, 1, 0) == ["x"]


def test_unit_gap_after_functions_sees_statics_and_functions() -> None:
    tree = BoundTree(
        unit=unit(
            variables=(int_decl("x", 0, 0, static=True),),
            functions=(function("f", 1, 0, block(rng(1, 9, 1, 12))),),
            statements=(int_decl("a", 3, 0),),
        )
    )

    assert _visible(tree, 2, 0) == ["x", "f"]


def test_after_last_sees_every_top_level_symbol() -> None:
    tree = BoundTree(
        unit=unit(
            variables=(int_decl("x", 0, 0, static=True),),
            functions=(function("f", 1, 0, block(rng(1, 9, 1, 12))),),
            statements=(int_decl("a", 2, 0), int_decl("b", 3, 0)),
        ),
        constants=(PI,),
    )

    assert _visible(tree, 9, 0) == ["PI", "x", "f", "a", "b"]


def test_before_first_sees_only_constants() -> None:
    tree = BoundTree(
        unit=unit(variables=(int_decl("x", 2, 0, static=True),)),
        constants=(PI,),
    )

    assert _visible(tree, 0, 0) == ["PI"]


def test_gap_between_functions_sees_statics_and_functions() -> None:
    tree = BoundTree(
        unit=unit(
            variables=(int_decl("x", 0, 0, static=True),),
            functions=(
                function("f", 1, 0, block(rng(1, 9, 1, 12))),
                function("g", 3, 0, block(rng(3, 9, 3, 12))),
            ),
        ),
        constants=(PI,),
    )

    assert _visible(tree, 2, 0) == ["PI", "x", "f", "g"]


def test_static_initializer_sees_only_earlier_statics() -> None:
    # line 0: static int x = 1;
    # line 1: static int y = x<cursor>;
    # line 2: static int z = 1;
    x = int_decl("x", 0, 0, static=True)
    tree = BoundTree(
        unit=unit(
            variables=(x, ref_decl("y", 1, x, static=True), int_decl("z", 2, 0, static=True)),
            functions=(function("f", 3, 0, block(rng(3, 9, 3, 12))),),
        ),
        constants=(PI,),
    )

    assert _visible(tree, 1, 16) == ["PI", "x"]


def test_gap_between_statics_sees_statics_above() -> None:
    tree = BoundTree(
        unit=unit(
            variables=(int_decl("x", 0, 0, static=True), int_decl("y", 2, 0, static=True)),
        )
    )

    assert _visible(tree, 1, 0) == ["x"]


def test_symbol_kinds_are_fixed_per_class() -> None:
    signature = make_function_type(INT, ())

    assert PI.kind == "constant"
    assert StaticVariable("s", INT).kind == "static"
    assert Function("f", signature).kind == "function"
    assert LocalVariable("a", INT).kind == "local"
    assert Parameter("p", INT, by_ref=True).kind == "parameter"
