"""
Test suite for the TeachLang parser.

Tests cover:
- Statement forms: declarations, assignments, if/else, for, func
- Expression precedence levels
- Fatal errors (ParseError) and their messages
- Soft errors and resynchronization after them
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from teachlang.lexer import TokenType, tokenize
from teachlang.parser import Parser, ParseError, ParseResult, parse_string
from teachlang.parser.errors import SyntaxErrorRecovery


class ParserTestCase(unittest.TestCase):

    def _parse(self, code: str) -> Parser:
        """Helper to parse a code snippet; fatal errors propagate."""
        parser = Parser(tokenize(code))
        parser.parse()
        return parser

    def _parse_fatal(self, code: str) -> ParseError:
        parser = Parser(tokenize(code))
        with self.assertRaises(ParseError) as ctx:
            parser.parse()
        return ctx.exception


class TestDeclarations(ParserTestCase):
    """Variable and array declarations."""

    def test_int_declaration(self):
        parser = self._parse("var x int = 5;")
        self.assertEqual(dict(parser.variables), {"x": TokenType.INT})
        self.assertEqual(parser.errors, [])

    def test_float_declaration_without_initializer(self):
        parser = self._parse("var ratio float;")
        self.assertEqual(parser.variables["ratio"], TokenType.FLOAT)
        self.assertEqual(parser.errors, [])

    def test_duplicate_declaration_is_soft(self):
        parser = self._parse("var x int = 5; var x float = 1.0;")

        # First declaration wins
        self.assertEqual(dict(parser.variables), {"x": TokenType.INT})
        self.assertIn("Variable x is already declared.", parser.errors)
        # Once while parsing, once from the semantic sweep
        self.assertEqual(parser.errors.count("Variable x is already declared."), 2)

    def test_redeclaration_in_sibling_function(self):
        parser = self._parse("func a() { var i int = 0; } func b() { var i int = 1; }")
        # Reported while parsing only; the sweep sees two independent blocks
        self.assertEqual(parser.errors, ["Variable i is already declared."])

    def test_statement_after_duplicate_parses_normally(self):
        parser = self._parse("var x int = 1; var x int = 2 + 3; var y float = 3.0;")
        self.assertEqual(parser.variables["y"], TokenType.FLOAT)

    def test_missing_semicolon_is_soft(self):
        parser = self._parse("var x int = 5")
        self.assertEqual(parser.errors, ["Expected token type SEMICOLON but found EOF"])
        self.assertNotIn("x", parser.variables)

    def test_missing_type_is_soft(self):
        parser = self._parse("var x; var y int;")
        self.assertEqual(parser.errors, ["Expected token type INT or FLOAT but found SEMICOLON"])
        self.assertEqual(dict(parser.variables), {"y": TokenType.INT})

    def test_missing_name_is_fatal(self):
        error = self._parse_fatal("var int = 5;")
        self.assertEqual(str(error), "Expected token type IDENTIFIER but found INT")

    def test_array_length_mismatch(self):
        parser = self._parse("var arr = [3]int{1,2};")
        self.assertEqual(len(parser.errors), 1)
        self.assertTrue(parser.errors[0].startswith("ArrayOutOfBounds Exception"))
        self.assertIn("length 3", parser.errors[0])
        self.assertIn("2 initializer values", parser.errors[0])

    def test_array_length_match(self):
        parser = self._parse("var arr = [2]int{1,2};")
        self.assertEqual(parser.errors, [])
        # Arrays never enter the scalar table
        self.assertNotIn("arr", parser.variables)

    def test_array_without_element_type(self):
        parser = self._parse("var arr = [2]{1.5, 2.5};")
        self.assertEqual(parser.errors, [])

    def test_empty_array(self):
        parser = self._parse("var arr = [0]float{};")
        self.assertEqual(parser.errors, [])

    def test_array_shapes_are_independent(self):
        parser = self._parse("var a = [2]int{1,2}; var b = [3]int{4,5,6};")
        self.assertEqual(parser.errors, [])

        parser = self._parse("var a = [1]int{1,2}; var b = [2]int{3,4};")
        self.assertEqual(len(parser.errors), 1)
        self.assertIn("array a", parser.errors[0])

    def test_array_missing_size_is_soft(self):
        parser = self._parse("var a = []int{1}; var b int;")
        self.assertEqual(parser.errors, ["Expected token type INTEGER_LITERAL but found RIGHT_BRACKET"])
        self.assertEqual(dict(parser.variables), {"b": TokenType.INT})

    def test_array_initializer_requires_commas(self):
        error = self._parse_fatal("var a = [2]int{1 2};")
        self.assertEqual(str(error), "Expected token type COMMA but found INTEGER_LITERAL")


class TestAssignments(ParserTestCase):
    """Assignments, increments and array element writes."""

    def test_assignment_to_declared_variable(self):
        parser = self._parse("var x int = 1; x = x + 2 * 3;")
        self.assertEqual(parser.errors, [])

    def test_assignment_to_undeclared_variable_is_soft(self):
        parser = self._parse("y = 5;")
        self.assertEqual(parser.errors, ["Variable y is not declared."])

    def test_statement_after_undeclared_assignment(self):
        parser = self._parse("y = 5 + 1; var z int = 1;")
        self.assertEqual(parser.errors, ["Variable y is not declared."])
        self.assertIn("z", parser.variables)

    def test_uses_are_not_duplicate_declarations(self):
        parser = self._parse("var x int = 1; x = 2; x++; x--;")
        self.assertEqual(parser.errors, [])

    def test_embedded_reassignment(self):
        parser = self._parse("var x int = 1; var y int = 2; x = y = 3;")
        self.assertEqual(parser.errors, [])

    def test_increment_and_decrement_need_no_declaration(self):
        parser = self._parse("k++; k--;")
        self.assertEqual(parser.errors, [])

    def test_array_element_assignment(self):
        parser = self._parse("a[i + 1] = a[i] * 2;")
        self.assertEqual(parser.errors, [])

    def test_identifier_without_assignment_is_fatal(self):
        error = self._parse_fatal("x + 1;")
        self.assertEqual(str(error), "Expected token type ASSIGN but found PLUS")
        self.assertEqual(error.expected, TokenType.ASSIGN)
        self.assertEqual(error.found, TokenType.PLUS)


class TestControlFlow(ParserTestCase):
    """if/else, for loops, functions and blocks."""

    def test_if_else_if_else(self):
        code = """
        var x int = 1;
        if x == 1 {
            x = 2;
        } else if x != 2 {
            x = 3;
        } else {
            x++;
        }
        """
        parser = self._parse(code)
        self.assertEqual(parser.errors, [])

    def test_if_without_condition(self):
        self._parse("if { }")
        self._parse("if flag { }")

    def test_if_with_parenthesised_condition_is_fatal(self):
        error = self._parse_fatal("if (x")
        self.assertEqual(str(error), "Expected token type LEFT_BRACE but found LEFT_PAREN")
        self.assertEqual(error.expected, TokenType.LEFT_BRACE)
        self.assertEqual(error.found, TokenType.LEFT_PAREN)

    def test_for_with_declaration(self):
        parser = self._parse("for (var i int = 0;; i < 10; i++) { }")
        self.assertEqual(parser.variables["i"], TokenType.INT)
        self.assertEqual(parser.errors, [])

    def test_for_with_assignment(self):
        parser = self._parse("var i int = 0; for (i = 5; i > 0; i--) { i = i - 1; }")
        self.assertEqual(parser.errors, [])

    def test_for_without_step_operator(self):
        self._parse("var i int = 0; for (i = 0; i < 3; i) { }")

    def test_for_declaration_needs_extra_semicolon(self):
        error = self._parse_fatal("for (var i int = 0; i < 3; i++) { }")
        self.assertEqual(str(error), "Expected token type SEMICOLON but found IDENTIFIER")

    def test_function_declaration(self):
        parser = self._parse("func main() { var x int = 1; x = 2; }")
        self.assertEqual(parser.variables["x"], TokenType.INT)

    def test_function_parameters_are_fatal(self):
        error = self._parse_fatal("func main(x) { }")
        self.assertEqual(str(error), "Expected token type RIGHT_PAREN but found IDENTIFIER")

    def test_unclosed_block_is_fatal(self):
        error = self._parse_fatal("func main() {")
        self.assertEqual(str(error), "Unexpected token: EOF")

    def test_nested_blocks(self):
        code = """
        func outer() {
            var n int = 3;
            for (n = 0; n < 3; n++) {
                if n == 1 { n = 2; }
            }
        }
        """
        self.assertEqual(self._parse(code).errors, [])


class TestExpressions(ParserTestCase):
    """Expression grammar."""

    def test_arithmetic_precedence_and_grouping(self):
        self._parse("var x int = (1 + 2) * -3 / 4 - 5;")

    def test_boolean_and_comparison(self):
        self._parse("var b int = 1 < 2 && 3 >= 4 || 5 != 6;")

    def test_comparison_does_not_chain(self):
        parser = self._parse("var c int = 1 < 2 < 3; var d int;")
        self.assertEqual(parser.errors, ["Expected token type SEMICOLON but found LESS_THAN"])
        self.assertNotIn("c", parser.variables)
        self.assertIn("d", parser.variables)

    def test_string_literal(self):
        self._parse('var s int = name"hello";')

    def test_index_read(self):
        self._parse("var x int = arr[1 + 2];")

    def test_increment_is_not_part_of_an_expression(self):
        parser = self._parse("var i int = 0; var j int = i++; var k int;")
        self.assertEqual(parser.errors, ["Expected token type SEMICOLON but found INCREMENT"])
        self.assertEqual(dict(parser.variables), {"i": TokenType.INT, "k": TokenType.INT})

    def test_increment_after_negated_identifier(self):
        error = self._parse_fatal("var i int = 0; i = -i++ + 1;")
        self.assertEqual(str(error), "Expected token type SEMICOLON but found INCREMENT")

    def test_new_call(self):
        parser = self._parse("var p int = 0; p = new = Point();")
        self.assertEqual(parser.errors, [])

    def test_new_requires_empty_call(self):
        error = self._parse_fatal("var p int = 0; p = new = Point;")
        self.assertEqual(str(error), "Expected token type LEFT_PAREN but found SEMICOLON")

    def test_missing_operand_is_fatal(self):
        error = self._parse_fatal("var x int = ;")
        self.assertEqual(str(error), "Unexpected token: SEMICOLON")

    def test_boolean_keywords_are_not_expressions(self):
        error = self._parse_fatal("var x int = true;")
        self.assertEqual(str(error), "Unexpected token: TRUE")

    def test_error_token_is_fatal_in_expression(self):
        error = self._parse_fatal('var x int = abc"oops')
        self.assertEqual(str(error), "Unexpected token: ERROR")

    def test_unclosed_parenthesis(self):
        error = self._parse_fatal("var x int = (1 + 2;")
        self.assertEqual(str(error), "Expected token type RIGHT_PAREN but found SEMICOLON")


class TestFatalErrors(ParserTestCase):
    """Fatal error behavior and the state left behind."""

    def test_unexpected_statement_token(self):
        self.assertEqual(str(self._parse_fatal(";")), "Unexpected token: SEMICOLON")
        self.assertEqual(str(self._parse_fatal("return;")), "Unexpected token: RETURN")
        self.assertEqual(str(self._parse_fatal("5;")), "Unexpected token: INTEGER_LITERAL")

    def test_state_is_observable_after_fatal_error(self):
        parser = Parser(tokenize("var a int = 1; y = 2; var b int = ;"))
        with self.assertRaises(ParseError):
            parser.parse()

        self.assertEqual(dict(parser.variables), {"a": TokenType.INT})
        # The semantic sweep does not run after a fatal error
        self.assertEqual(parser.errors, ["Variable y is not declared."])

    def test_diagnostic_location(self):
        error = self._parse_fatal("var x int = 1;\nif (x")
        self.assertEqual(error.token.location.line, 2)
        self.assertEqual(error.token.location.column, 4)
        self.assertEqual(error.diagnostic.code, "P001")
        self.assertIn("-->", str(error.diagnostic))

    def test_unexpected_token_code(self):
        error = self._parse_fatal("}")
        self.assertEqual(error.diagnostic.code, "P002")
        self.assertIsNone(error.expected)


class TestConvenienceAPI(ParserTestCase):

    def test_empty_token_list(self):
        parser = Parser([])
        parser.parse()
        self.assertEqual(parser.errors, [])

    def test_empty_program(self):
        self.assertEqual(self._parse("   ").errors, [])

    def test_parse_string(self):
        result = parse_string("var x int = 1; y = 2;")
        self.assertIsInstance(result, ParseResult)
        self.assertTrue(result.has_errors())
        self.assertEqual(dict(result.variables), {"x": TokenType.INT})
        self.assertEqual(result.tokens[-1].type, TokenType.EOF)

    def test_parse_string_raises_fatal(self):
        with self.assertRaises(ParseError):
            parse_string("if (x")


class TestSynchronization(unittest.TestCase):
    """SyntaxErrorRecovery.synchronize_to_statement_boundary."""

    def test_skips_past_semicolon(self):
        tokens = tokenize("a b ; c")
        self.assertEqual(SyntaxErrorRecovery.synchronize_to_statement_boundary(tokens, 0), 3)

    def test_stops_before_closing_brace(self):
        tokens = tokenize("a b } c")
        self.assertEqual(SyntaxErrorRecovery.synchronize_to_statement_boundary(tokens, 0), 2)

    def test_balances_nested_braces(self):
        tokens = tokenize("a { b ; } ; c")
        self.assertEqual(SyntaxErrorRecovery.synchronize_to_statement_boundary(tokens, 0), 6)

    def test_stops_at_eof(self):
        tokens = tokenize("a b")
        self.assertEqual(SyntaxErrorRecovery.synchronize_to_statement_boundary(tokens, 0), 2)


if __name__ == "__main__":
    unittest.main()
