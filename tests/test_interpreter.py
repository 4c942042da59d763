"""
Tests for the Iodine evaluator (interpreter and interpreter state).
"""

import io

import pytest

from iodine import (
    tokenize, parse_statements, DataType,
    Arithmetic, ArithmeticOp, ConstVal, FunctionCall,
    LexerError, ParserError,
    UndefinedVariableError, UndefinedFunctionError, TypeMismatchError,
    ComparisonError, InvalidOperationError, DivisionByZeroError,
)
from iodine.runtime import (
    create_state, evaluate, execute, run_source,
    int32_val, NULL_VALUE, Variable,
)


def run(source: str):
    """Run source against a fresh state; return (values, state, printed text)."""
    output = io.StringIO()
    state = create_state(output=output)
    values = run_source(source, state)
    return values, state, output.getvalue()


def result_of(source: str):
    """Value of the last statement of source."""
    values, _, _ = run(source)
    return values[-1]


class TestExpressions:
    """Test expression evaluation."""

    def test_literal(self):
        """A literal evaluates to itself."""
        v = result_of("42")
        assert v.type == DataType.INT32
        assert v.data == 42

    def test_chain_evaluates_right_grouped(self):
        """5 + 3 * 2 is 5 + (3 * 2)."""
        assert result_of("5 + 3 * 2").data == 11

    def test_subtraction_chain(self):
        """10 - 2 - 3 is 10 - (2 - 3)."""
        assert result_of("10 - 2 - 3").data == 11

    def test_multiplication_then_addition(self):
        """2 * 3 + 1 is 2 * (3 + 1)."""
        assert result_of("2 * 3 + 1").data == 8

    def test_unary_minus_binds_left(self):
        """-5 + 2 is (-5) + 2."""
        assert result_of("-5 + 2").data == -3

    def test_unary_minus_reaches_into_group(self):
        """-(1 + 2) evaluates as (-1) + 2."""
        assert result_of("-(1 + 2)").data == 1

    def test_unary_plus(self):
        """+x passes the value through."""
        assert result_of("+7").data == 7

    def test_parenthesized_group(self):
        """(1 + 2) * 3 multiplies the sum."""
        assert result_of("(1 + 2) * 3").data == 9

    def test_int_division(self):
        """Int32 division truncates."""
        assert result_of("7 / 2").data == 3

    def test_mixed_division(self):
        """A decimal operand makes the division F64."""
        v = result_of("1 / 2.0")
        assert v.type == DataType.FLOAT64
        assert v.data == 0.5

    def test_overflow_wraps(self):
        """Int32 arithmetic wraps."""
        assert result_of("2147483647 + 1").data == -2147483648

    def test_division_by_zero(self):
        """Dividing by zero is an error."""
        with pytest.raises(DivisionByZeroError):
            run("1 / 0")

    def test_negating_string(self):
        """Strings have no sign."""
        with pytest.raises(InvalidOperationError):
            run('-"a"')

    def test_left_evaluated_before_right(self):
        """Operands are evaluated left to right."""
        seen = []

        def trace(args, state):
            value = evaluate(args[0], state)
            seen.append(int(value.data))
            return value

        state = create_state(output=io.StringIO())
        state.register("trace", trace)
        node = Arithmetic(
            ArithmeticOp.ADD,
            FunctionCall("trace", (ConstVal(int32_val(1)),)),
            FunctionCall("trace", (ConstVal(int32_val(2)),)),
        )
        evaluate(node, state)
        assert seen == [1, 2]


class TestVariables:
    """Test declarations, reassignments and references."""

    def test_declare_and_print(self):
        """A declared variable can be printed."""
        _, _, printed = run("i32 x = 5; println(x);")
        assert printed == "5\n"

    def test_declaration_converts(self):
        """Declarations convert the value to the declared type."""
        _, state, _ = run("i32 x = 3.9; f32 y = 1;")
        assert state.get_variable("x").value.data == 3
        assert state.get_variable("x").value.type == DataType.INT32
        assert state.get_variable("y").value.type == DataType.FLOAT32

    def test_declaration_result_is_null(self):
        """Declarations and reassignments evaluate to null."""
        values, _, _ = run("i32 x = 1; x = 2; x")
        assert values[0] is NULL_VALUE
        assert values[1] is NULL_VALUE
        assert values[2].data == 2

    def test_reassign_same_type(self):
        """Reassignment with the declared type succeeds."""
        _, _, printed = run("f64 x = 5; x = 2.5; println(x);")
        assert printed == "2.500000\n"

    def test_reassign_from_own_value(self):
        """A variable can be reassigned from an expression using itself."""
        _, _, printed = run("i32 x = 1; x = x + 1; println(x);")
        assert printed == "2\n"

    def test_reassign_does_not_convert(self):
        """Reassignment requires the exact declared type, unlike declaration."""
        with pytest.raises(TypeMismatchError) as exc_info:
            run("i32 x = 5; x = 2.5;")
        assert exc_info.value.code == "E403"

    def test_reassign_int_into_float_variable(self):
        """An Int32 value is not accepted by an F64 variable on reassignment."""
        with pytest.raises(TypeMismatchError):
            run("f64 x = 1.5; x = 2;")

    def test_redeclaration_replaces_binding(self):
        """Declaring a name again replaces its type and value."""
        _, _, printed = run("i32 x = 1; f64 x = 2; x = 2.5; println(x);")
        assert printed == "2.500000\n"

    def test_undefined_reference(self):
        """Reading an undeclared variable is an error."""
        with pytest.raises(UndefinedVariableError) as exc_info:
            run("println(y);")
        assert exc_info.value.code == "E401"

    def test_undefined_reassignment(self):
        """Assigning an undeclared variable is an error."""
        with pytest.raises(UndefinedVariableError):
            run("y = 1;")

    def test_failed_statement_keeps_earlier_effects(self):
        """Statements before an error have taken effect."""
        state = create_state(output=io.StringIO())
        with pytest.raises(UndefinedVariableError):
            run_source("i32 x = 1; x = y;", state)
        assert state.get_variable("x").value.data == 1

    def test_states_are_isolated(self):
        """Each state has its own variables."""
        first = create_state(output=io.StringIO())
        second = create_state(output=io.StringIO())
        run_source("i32 x = 1;", first)
        assert first.has_variable("x")
        assert not second.has_variable("x")


class TestComparisons:
    """Test equality comparisons."""

    def test_equal(self):
        """Equal values compare true."""
        v = result_of("i32 x = 1; x == 1")
        assert v.type == DataType.BOOLEAN
        assert v.data is True

    def test_not_equal(self):
        assert result_of("1 == 2").data is False

    def test_string_rhs(self):
        """A string on the right compares against the left type."""
        with pytest.raises(ComparisonError):
            run('i32 x = 1; x == "1"')

    def test_different_types(self):
        """Comparing Int32 with F64 is an error."""
        with pytest.raises(ComparisonError):
            run("1 == 1.0")

    def test_comparison_prints_as_number(self):
        """A comparison result prints as 1."""
        _, _, printed = run("println(2 == 2);")
        assert printed == "1\n"


class TestIf:
    """Test conditional blocks."""

    def test_true_condition_runs_body(self):
        _, _, printed = run("if (1 == 1) { println(1); println(2); }")
        assert printed == "1\n2\n"

    def test_false_condition_skips_body(self):
        _, _, printed = run("if (1 == 2) { println(1); }")
        assert printed == ""

    def test_numeric_condition(self):
        """Numbers are true when non-zero."""
        _, _, printed = run("if (2) { println(1); } if (0) { println(2); }")
        assert printed == "1\n"

    def test_body_assigns_globals(self):
        """Blocks share the global variable table."""
        _, state, _ = run("i32 x = 1; if (true) { x = 5; i32 y = 2; }")
        assert state.get_variable("x").value.data == 5
        assert state.has_variable("y")

    def test_if_result_is_null(self):
        values, _, _ = run("if (true) { 5; }")
        assert values == [NULL_VALUE]

    def test_string_condition(self):
        """A string is not a condition."""
        with pytest.raises(TypeMismatchError):
            run('if ("yes") { println(1); }')

    def test_multiline_script(self):
        """Statements and blocks may span lines."""
        source = "i32 x = 1;\nif (x == 1) {\n  println(x);\n}\nprintln(x + 1);\n"
        _, _, printed = run(source)
        assert printed == "1\n2\n"


class TestFunctionCalls:
    """Test calls and the function table."""

    def test_undefined_function(self):
        """Calling an unregistered name is an error."""
        with pytest.raises(UndefinedFunctionError) as exc_info:
            run("foo(1);")
        assert exc_info.value.code == "E402"

    def test_custom_builtin(self):
        """Hosts can register builtins of their own."""
        def double(args, state):
            value = evaluate(args[0], state)
            return int32_val(int(value.data) * 2)

        state = create_state(output=io.StringIO())
        state.register("double", double)
        values = run_source("double(21)", state)
        assert values[0].data == 42

    def test_non_builtin_function(self):
        """Only builtin functions can be called."""
        state = create_state(output=io.StringIO())
        state.register("f", lambda args, state: NULL_VALUE, is_builtin=False)
        with pytest.raises(InvalidOperationError):
            run_source("f()", state)

    def test_state_without_defaults(self):
        """A bare state has no functions."""
        state = create_state(register_defaults=False)
        assert state.functions == {}
        with pytest.raises(UndefinedFunctionError):
            run_source("println(1)", state)


class TestExecute:
    """Test the statement runner entry points."""

    def test_execute_returns_each_value(self):
        """execute returns one value per statement."""
        state = create_state(output=io.StringIO())
        values = execute(parse_statements(tokenize("1 + 1; i32 x = 2")), state)
        assert values[0].data == 2
        assert values[1] is NULL_VALUE

    def test_execute_empty(self):
        assert execute([], create_state()) == []

    def test_evaluate_variable_directly(self):
        """evaluate works on nodes built by hand."""
        from iodine import VariableReference

        state = create_state(register_defaults=False)
        state.set_variable(Variable("x", DataType.INT32, int32_val(3)))
        assert evaluate(VariableReference("x"), state).data == 3

    def test_unknown_node(self):
        """Objects outside the node set are a programming error."""
        with pytest.raises(TypeError):
            evaluate(object(), create_state())

    def test_lexer_errors_propagate(self):
        with pytest.raises(LexerError):
            run('println("x);')

    def test_parser_errors_propagate(self):
        with pytest.raises(ParserError):
            run("i32 = 1;")
