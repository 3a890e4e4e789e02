import unittest

from sugiru.lang.objects import FALSE, NULL, TRUE, Boolean, Environment, Integer, ReturnValue, native_bool


class ValueTestCase(unittest.TestCase):

    def test_inspect(self):
        should_pass = {Integer(5): "5", Integer(-3): "-3", TRUE: "true", FALSE: "false", NULL: "null",
                       ReturnValue(Integer(1)): "1"}
        for case, expected in should_pass.items():
            self.assertEqual(expected, case.inspect(), repr(case))

    def test_type(self):
        should_pass = {Integer(5): "INTEGER", TRUE: "BOOLEAN", NULL: "NULL", ReturnValue(NULL): "RETURN_VALUE"}
        for case, expected in should_pass.items():
            self.assertEqual(expected, case.type(), repr(case))

    def test_immutable(self):
        should_raise = [(Integer(1), "value"), (TRUE, "value"), (NULL, "value")]
        for value, attr in should_raise:
            self.assertRaises(AttributeError, setattr, value, attr, 2)

    def test_native_bool(self):
        self.assertIs(TRUE, native_bool(True))
        self.assertIs(FALSE, native_bool(False))
        self.assertIsNot(TRUE, Boolean(True))


class EnvironmentTestCase(unittest.TestCase):

    def test_get_set(self):
        env = Environment()
        self.assertIsNone(env.get("x"))
        self.assertEqual(Integer(1), env.set("x", Integer(1)))
        self.assertEqual(Integer(1), env.get("x"))
        self.assertIn("x", env)
        self.assertNotIn("y", env)

    def test_enclosed(self):
        outer = Environment()
        outer.set("x", Integer(1))
        outer.set("y", Integer(2))

        inner = Environment.enclosed(outer)
        inner.set("x", Integer(10))

        self.assertEqual(Integer(10), inner.get("x"))
        self.assertEqual(Integer(2), inner.get("y"))
        self.assertEqual(Integer(1), outer.get("x"))  # shadowing never writes through

        outer.set("z", Integer(3))
        self.assertEqual(Integer(3), inner.get("z"))


if __name__ == '__main__':
    unittest.main()
