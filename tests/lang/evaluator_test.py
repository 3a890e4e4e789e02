import unittest

from sugiru.lang.error import EvaluationError
from sugiru.lang.evaluator import evaluate, truncated_div, wrap_int64
from sugiru.lang.lexical import Lexer
from sugiru.lang.objects import FALSE, NULL, TRUE, Environment, Function, Integer
from sugiru.lang.parser import Parser


def run(source, env=None):
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    assert not parser.errors, parser.errors
    return evaluate(program, env)


class EvaluatorTestCase(unittest.TestCase):

    def assert_integers(self, cases):
        for case, expected in cases.items():
            result = run(case)
            self.assertIsInstance(result, Integer, case)
            self.assertEqual(expected, result.value, case)

    def assert_singletons(self, cases):
        for case, expected in cases.items():
            self.assertIs(expected, run(case), case)

    def test_integer_expressions(self):
        self.assert_integers({
            "5": 5,
            "10": 10,
            "-5": -5,
            "--5": 5,
            "5 + 5 * 2": 15,
            "5 + 5 + 5 + 5 - 10": 10,
            "2 * 2 * 2 * 2 * 2": 32,
            "-50 + 100 + -50": 0,
            "5 * 2 + 10": 20,
            "20 + 2 * -10": 0,
            "50 / 2 * 2 + 10": 60,
            "2 * (5 + 10)": 30,
            "3 * 3 * 3 + 10": 37,
            "(5 + 10 * 2 + 15 / 3) * 2 + -10": 50,
        })

    def test_division_truncates_toward_zero(self):
        self.assert_integers({"7 / 2": 3, "-7 / 2": -3, "7 / -2": -3, "-7 / -2": 3, "1 / 3": 0})

    def test_int64_wraparound(self):
        self.assert_integers({
            "9223372036854775807 + 1": -9223372036854775808,
            "-9223372036854775807 - 2": 9223372036854775807,
            "4611686018427387904 * 2": -9223372036854775808,
            "-(-9223372036854775807 - 1)": -9223372036854775808,
        })

    def test_division_by_zero(self):
        should_raise = ["10 / 0", "1 / (5 - 5)", "let f = fn(x) { x / 0 }; f(1)"]
        for case in should_raise:
            with self.assertRaises(EvaluationError, msg=case) as ctx:
                run(case)
            self.assertIn("division by zero", str(ctx.exception))

    def test_boolean_expressions(self):
        self.assert_singletons({
            "true": TRUE,
            "false": FALSE,
            "1 < 2": TRUE,
            "1 > 2": FALSE,
            "1 < 1": FALSE,
            "1 == 1": TRUE,
            "1 != 1": FALSE,
            "1 == 2": FALSE,
            "1 != 2": TRUE,
            "true == true": TRUE,
            "false == false": TRUE,
            "true == false": FALSE,
            "true != false": TRUE,
            "(1 < 2) == true": TRUE,
            "(1 > 2) == true": FALSE,
        })

    def test_bang_operator(self):
        self.assert_singletons({
            "!true": FALSE,
            "!false": TRUE,
            "!5": FALSE,
            "!0": FALSE,
            "!!true": TRUE,
            "!!false": FALSE,
            "!!5": TRUE,
            "!if (false) { 1 }": FALSE,
        })

    def test_null_results(self):
        self.assert_singletons({
            "-true": NULL,
            "-false": NULL,
            "true + true": NULL,
            "true < false": NULL,
            "5 + true": NULL,
            "5 == true": NULL,
            "true * 5": NULL,
            "if (false) { 10 }": NULL,
        })

    def test_singletons_are_shared(self):
        self.assertIs(run("true"), run("1 < 2"))
        self.assertIs(run("false"), run("!true"))
        self.assertIs(run("-true"), run("if (1 > 2) { 1 }"))

    def test_last_value_semantics(self):
        self.assert_integers({"1; 2; 3": 3, "let x = 1; x + 1; 10": 10})
        self.assertIsNone(run("let x = 5;"))
        self.assertIsNone(run(""))

    def test_if_else_expressions(self):
        self.assert_integers({
            "if (true) { 10 }": 10,
            "if (1) { 10 }": 10,
            "if (0) { 10 }": 10,
            "if (1 < 2) { 10 }": 10,
            "if (1 > 2) { 10 } else { 20 }": 20,
            "if (1 < 2) { 10 } else { 20 }": 10,
            "if (if (false) { 1 }) { 10 } else { 20 }": 20,
        })

    def test_return_statements(self):
        self.assert_integers({
            "return 10;": 10,
            "return 10; 9;": 10,
            "return 2 * 5; 9;": 10,
            "9; return 2 * 5; 9;": 10,
            "if (10 > 1) { if (10 > 1) { return 10; } return 1; }": 10,
            "let f = fn(x) { return x; x + 10; }; f(10);": 10,
            "let f = fn(x) { let result = x + 10; return result; return 10; }; f(10);": 20,
        })

    def test_let_statements(self):
        self.assert_integers({
            "let a = 5; a;": 5,
            "let a = 5 * 5; a;": 25,
            "let a = 5; let b = a; b;": 5,
            "let a = 5; let b = a; let c = a + b + 5; c;": 15,
            "let a = 1; let a = a + 1; a": 2,
        })

    def test_let_without_value_binds_null(self):
        self.assert_singletons({
            "let f = fn() { let y = 1; }; let x = f(); x": NULL,
            "let g = fn() { }; let x = g(); x": NULL,
        })

    def test_unbound_identifier(self):
        should_raise = ["foobar", "let a = 1; b", "let f = fn() { y }; f()"]
        for case in should_raise:
            with self.assertRaises(EvaluationError, msg=case) as ctx:
                run(case)
            self.assertIn("identifier not found", str(ctx.exception))

    def test_function_object(self):
        result = run("fn(x) { x + 2; };")
        self.assertIsInstance(result, Function)
        self.assertEqual(["x"], [str(param) for param in result.parameters])
        self.assertEqual("(x + 2)", str(result.body))
        self.assertEqual("FUNCTION", result.type())

    def test_function_application(self):
        self.assert_integers({
            "let identity = fn(x) { x; }; identity(5);": 5,
            "let identity = fn(x) { return x; }; identity(5);": 5,
            "let double = fn(x) { x * 2; }; double(5);": 10,
            "let add = fn(x, y) { x + y; }; add(5, 5);": 10,
            "let add = fn(a, b) { a + b }; add(2, 3)": 5,
            "let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));": 20,
            "fn(x) { x; }(5)": 5,
            "let five = fn() { 5 }; five()": 5,
        })

    def test_closures(self):
        self.assert_integers({
            "let adder = fn(x) { fn(y) { x + y } }; adder(2)(3)": 5,
            "let newAdder = fn(x) { fn(y) { x + y }; }; let addTwo = newAdder(2); addTwo(2);": 4,
            "let x = 10; let f = fn() { x }; let x = 20; f()": 20,
            "let x = 1; let f = fn(x) { x }; f(5) + x": 6,
        })

    def test_recursion(self):
        source = ("let fib = fn(n) { if (n < 2) { return n; } fib(n - 1) + fib(n - 2) };"
                  "fib(15)")
        self.assert_integers({source: 610})

    def test_bad_calls(self):
        should_raise = {
            "5(1)": "is not a function",
            "true()": "is not a function",
            "let f = fn(x) { x }; f()": "expects 1 argument(s), got 0",
            "let f = fn() { 1 }; f(1, 2)": "expects 0 argument(s), got 2",
        }
        for case, message in should_raise.items():
            with self.assertRaises(EvaluationError, msg=case) as ctx:
                run(case)
            self.assertIn(message, str(ctx.exception), case)

    def test_environment_persists(self):
        env = Environment()
        run("let x = 4;", env)
        self.assertEqual(Integer(8), run("x * 2", env))

    def test_missing_nodes(self):
        self.assertIsNone(evaluate(None))


class ArithmeticHelpersTestCase(unittest.TestCase):

    def test_wrap_int64(self):
        should_pass = {0: 0, 2 ** 63 - 1: 2 ** 63 - 1, 2 ** 63: -2 ** 63, -2 ** 63 - 1: 2 ** 63 - 1, 2 ** 64: 0}
        for case, expected in should_pass.items():
            self.assertEqual(expected, wrap_int64(case), case)

    def test_truncated_div(self):
        should_pass = {(7, 2): 3, (-7, 2): -3, (7, -2): -3, (-7, -2): 3, (0, 5): 0, (6, 3): 2}
        for (left, right), expected in should_pass.items():
            self.assertEqual(expected, truncated_div(left, right), (left, right))


if __name__ == '__main__':
    unittest.main()
