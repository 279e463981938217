import pytest

from rpn.core.ast import (
    U128_MAX,
    BinaryOp,
    BinOp,
    BoolValue,
    Constant,
    IntValue,
    Node,
    UnaryOp,
    UnOp,
    structurally_equal,
)


def test_equality_is_structural() -> None:
    left = BinaryOp(BinOp.ADD, Constant("a"), UnaryOp(UnOp.NEG, IntValue(3)))
    right = BinaryOp(BinOp.ADD, Constant("a"), UnaryOp(UnOp.NEG, IntValue(3)))
    assert left is not right
    assert left == right


def test_equality_distinguishes_variants() -> None:
    assert IntValue(1) != BoolValue(True)
    assert IntValue(0) != BoolValue(False)
    assert Constant("a") != Constant("b")
    assert BinaryOp(BinOp.ADD, IntValue(1), IntValue(2)) != BinaryOp(
        BinOp.MUL, IntValue(1), IntValue(2)
    )


def test_int_value_range() -> None:
    assert IntValue(U128_MAX).value == 2**128 - 1
    with pytest.raises(ValueError):
        IntValue(-1)
    with pytest.raises(ValueError):
        IntValue(U128_MAX + 1)


def test_int_value_rejects_non_integers() -> None:
    with pytest.raises(TypeError):
        IntValue(True)
    with pytest.raises(TypeError):
        IntValue(1.0)  # type: ignore[arg-type]


def test_constant_requires_name() -> None:
    with pytest.raises(ValueError):
        Constant("")


def test_children_and_size() -> None:
    neg = UnaryOp(UnOp.NEG, Constant("b"))
    tree = BinaryOp(BinOp.EQ, Constant("a"), neg)
    assert tree.children() == (Constant("a"), neg)
    assert neg.children() == (Constant("b"),)
    assert IntValue(4).children() == ()
    assert tree.size() == 4


def test_str_renders_postfix() -> None:
    tree = BinaryOp(BinOp.MUL, Constant("x"), UnaryOp(UnOp.NEG, IntValue(2)))
    assert str(tree) == "x 2 - *"


def test_structurally_equal() -> None:
    tree = BinaryOp(BinOp.EQ, Constant("a"), UnaryOp(UnOp.NEG, IntValue(1)))
    same = BinaryOp(BinOp.EQ, Constant("a"), UnaryOp(UnOp.NEG, IntValue(1)))
    assert structurally_equal(tree, same)
    assert not structurally_equal(tree, BinaryOp(BinOp.ADD, *tree.children()))
    assert not structurally_equal(IntValue(1), BoolValue(True))
    assert not structurally_equal(Constant("a"), Constant("b"))


def test_structurally_equal_on_deep_trees() -> None:
    left: Node = Constant("x")
    right: Node = Constant("x")
    for _ in range(5000):
        left = UnaryOp(UnOp.NEG, left)
        right = UnaryOp(UnOp.NEG, right)
    assert structurally_equal(left, right)
    assert not structurally_equal(left, UnaryOp(UnOp.NEG, right))
    assert left.size() == 5001
    assert str(left).count("-") == 5000
