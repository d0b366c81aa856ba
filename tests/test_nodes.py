"""
Tests for expression node evaluation.
"""

import math

import numpy as np
import pytest

from equation_engine import (
    ArrayDomain, DomainInterface, Expression, NodeEvaluationError,
    ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode, ReductionNode
)


class SharedDomain(DomainInterface):
    """Hands out its stored arrays without copying"""

    def __init__(self, **bindings):
        self.bindings = {k: np.asarray(v, dtype=np.float64) for k, v in bindings.items()}

    def get_values(self, name):
        return self.bindings[name]

    def has_variable(self, name):
        return name in self.bindings

    @property
    def sample_count(self):
        return len(next(iter(self.bindings.values())))


@pytest.fixture
def domain():
    return ArrayDomain({"a": [3.0, 1.0, 4.0], "b": [2.0, 5.0, 0.0]})


class TestLeaves:

    def test_constant_fills_sample_count(self, domain):
        np.testing.assert_array_equal(ConstantNode(2.5).evaluate(domain), [2.5, 2.5, 2.5])

    def test_variable_reads_domain(self, domain):
        np.testing.assert_array_equal(VariableNode("b").evaluate(domain), [2.0, 5.0, 0.0])

    def test_result_dtype(self, domain):
        assert VariableNode("a").evaluate(domain).dtype == np.float64


class TestReductions:

    def test_min_single_child_broadcasts_own_minimum(self, domain):
        node = ReductionNode("min", VariableNode("a"))
        np.testing.assert_array_equal(node.evaluate(domain), [1.0, 1.0, 1.0])

    def test_max_single_child(self, domain):
        node = ReductionNode("max", VariableNode("a"))
        np.testing.assert_array_equal(node.evaluate(domain), [4.0, 4.0, 4.0])

    def test_min_across_children(self, domain):
        node = ReductionNode("min", VariableNode("a"), VariableNode("b"))
        np.testing.assert_array_equal(node.evaluate(domain), [2.0, 1.0, 0.0])

    def test_max_across_three_children(self, domain):
        node = ReductionNode("max", VariableNode("a"), VariableNode("b"), ConstantNode(3.5))
        np.testing.assert_array_equal(node.evaluate(domain), [3.5, 5.0, 4.0])

    def test_nan_propagates(self):
        domain = ArrayDomain({"a": [np.nan, 1.0], "b": [0.0, 2.0]})
        result = ReductionNode("min", VariableNode("a"), VariableNode("b")).evaluate(domain)
        assert np.isnan(result[0])
        assert result[1] == 1.0

    def test_single_child_empty_domain(self):
        domain = ArrayDomain({"a": []})
        assert ReductionNode("min", VariableNode("a")).evaluate(domain).shape == (0,)

    @pytest.mark.parametrize("operator", ["min", "max"])
    def test_zero_children_is_fatal(self, domain, operator):
        node = ReductionNode(operator, node_id="r7")
        with pytest.raises(NodeEvaluationError, match=r"\(r7\) doesn't have any arguments") as exc_info:
            node.evaluate(domain)
        assert exc_info.value.node_id == "r7"

    def test_is_splittable(self):
        assert not ReductionNode("min", VariableNode("a")).is_splittable()
        assert ReductionNode("min", VariableNode("a"), VariableNode("b")).is_splittable()
        assert not BinaryOpNode("^", VariableNode("a"), VariableNode("b")).is_splittable()

    def test_added_children_count(self, domain):
        node = ReductionNode("max")
        node.add_child(VariableNode("a"))
        assert not node.is_splittable()
        node.add_child(VariableNode("b"))
        assert node.is_splittable()
        np.testing.assert_array_equal(node.evaluate(domain), [3.0, 5.0, 4.0])


class TestBinary:

    def test_power(self):
        domain = ArrayDomain({"a": [2.0, 3.0], "b": [3.0, 2.0]})
        node = BinaryOpNode("^", VariableNode("a"), VariableNode("b"))
        np.testing.assert_array_equal(node.evaluate(domain), [8.0, 9.0])

    @pytest.mark.parametrize("operator, expected", [
        ("+", [5.0, 6.0, 4.0]),
        ("-", [1.0, -4.0, 4.0]),
        ("*", [6.0, 5.0, 0.0]),
    ])
    def test_arithmetic(self, domain, operator, expected):
        node = BinaryOpNode(operator, VariableNode("a"), VariableNode("b"))
        np.testing.assert_array_equal(node.evaluate(domain), expected)

    def test_division_by_zero_is_infinite(self, domain):
        result = BinaryOpNode("/", VariableNode("a"), VariableNode("b")).evaluate(domain)
        assert result[0] == pytest.approx(1.5)
        assert result[2] == np.inf

    def test_mod_follows_dividend_sign(self):
        domain = ArrayDomain({"a": [-7.0, 7.0], "b": [3.0, 3.0]})
        result = BinaryOpNode("%", VariableNode("a"), VariableNode("b")).evaluate(domain)
        np.testing.assert_array_equal(result, [-1.0, 1.0])

    def test_atan2(self):
        domain = ArrayDomain({"y": [1.0], "x": [-1.0]})
        result = BinaryOpNode("atan2", VariableNode("y"), VariableNode("x")).evaluate(domain)
        assert result[0] == pytest.approx(3 * math.pi / 4)

    def test_missing_operand_is_fatal(self, domain):
        node = BinaryOpNode("^", VariableNode("a"), node_id="p1")
        with pytest.raises(NodeEvaluationError, match=r"\(p1\)"):
            node.evaluate(domain)

    def test_length_mismatch_is_fatal(self):
        domain = SharedDomain(a=[1.0, 2.0], b=[1.0, 2.0, 3.0])
        node = BinaryOpNode("+", VariableNode("a"), VariableNode("b"), node_id="add")
        with pytest.raises(NodeEvaluationError, match="different lengths"):
            node.evaluate(domain)

    def test_unknown_operator(self):
        with pytest.raises(ValueError):
            BinaryOpNode("**", VariableNode("a"), VariableNode("b"))


class TestUnary:

    @pytest.mark.parametrize("operator, func", [
        ("sin", math.sin), ("cos", math.cos), ("tan", math.tan),
        ("atan", math.atan), ("exp", math.exp), ("tanh", math.tanh),
        ("floor", math.floor), ("ceil", math.ceil), ("abs", abs),
    ])
    def test_matches_scalar_function(self, operator, func):
        values = [-1.7, -0.2, 0.0, 0.4, 1.3]
        domain = ArrayDomain({"x": values})
        result = UnaryOpNode(operator, VariableNode("x")).evaluate(domain)
        np.testing.assert_allclose(result, [func(v) for v in values])

    def test_round_halves_up(self):
        domain = ArrayDomain({"x": [-2.5, -0.4, 0.5, 2.5]})
        result = UnaryOpNode("round", VariableNode("x")).evaluate(domain)
        np.testing.assert_array_equal(result, [-2.0, 0.0, 1.0, 3.0])

    def test_log_of_negative_is_nan(self):
        domain = ArrayDomain({"x": [-1.0, math.e]})
        result = UnaryOpNode("log", VariableNode("x")).evaluate(domain)
        assert np.isnan(result[0])
        assert result[1] == pytest.approx(1.0)

    def test_missing_operand_is_fatal(self, domain):
        with pytest.raises(NodeEvaluationError, match="floor function"):
            UnaryOpNode("floor", node_id="fl").evaluate(domain)


class TestAliasing:

    def test_unary_reuses_child_buffer(self):
        domain = SharedDomain(x=[0.5, 1.5])
        buffer = domain.bindings["x"]
        result = UnaryOpNode("floor", VariableNode("x")).evaluate(domain)
        assert result is buffer
        np.testing.assert_array_equal(buffer, [0.0, 1.0])

    def test_min_reuses_first_child_buffer(self):
        domain = SharedDomain(a=[3.0, 1.0, 4.0], b=[2.0, 5.0, 0.0])
        buffer = domain.bindings["a"]
        result = ReductionNode("min", VariableNode("a"), VariableNode("b")).evaluate(domain)
        assert result is buffer

    def test_array_domain_bindings_untouched(self, domain):
        tree = BinaryOpNode("^", UnaryOpNode("exp", VariableNode("a")), VariableNode("b"))
        tree.evaluate(domain)
        np.testing.assert_array_equal(domain.get_values("a"), [3.0, 1.0, 4.0])

    def test_repeated_evaluation_is_pure(self, domain):
        tree = ReductionNode("max", UnaryOpNode("neg", VariableNode("a")))
        first = tree.evaluate(domain).copy()
        np.testing.assert_array_equal(tree.evaluate(domain), first)


class TestExpression:

    def make(self):
        # 2*sin(x) + min(x, 1)
        return Expression(BinaryOpNode(
            "+",
            BinaryOpNode("*", ConstantNode(2), UnaryOpNode("sin", VariableNode("x"))),
            ReductionNode("min", VariableNode("x"), ConstantNode(1))
        ))

    def test_evaluate(self):
        xs = [0.0, 0.5, 2.0]
        result = self.make().evaluate(ArrayDomain({"x": xs}))
        np.testing.assert_allclose(result, [2 * math.sin(x) + min(x, 1.0) for x in xs])

    def test_to_string_and_size(self):
        expr = self.make()
        assert expr.to_string() == "((2 * sin(x)) + min(x, 1))"
        assert expr.size() == 8

    def test_copy_is_independent(self):
        expr = self.make()
        clone = expr.copy()
        clone.root.get_child(1).add_child(ConstantNode(-5))
        assert expr.size() == 8
        assert clone.size() == 9

    def test_to_sympy_agrees_numerically(self):
        import sympy as sp
        sym = self.make().to_sympy()
        value = float(sym.subs(sp.Symbol("x"), 0.5))
        assert value == pytest.approx(2 * math.sin(0.5) + 0.5)
