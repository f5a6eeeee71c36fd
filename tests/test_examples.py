import unittest
import json as standard_json

from example import ini, json_value, expression
from syntaxer.support.interfaces import ParseFailure
from syntaxer.runtime import Parser, parse_source

# See https://json.org/example.html
GLOSSARY_JSON = """
{
    "glossary": {
        "title": "example glossary",
		"GlossDiv": {
            "title": "S",
			"GlossList": {
                "GlossEntry": {
                    "ID": "SGML",
					"SortAs": "SGML",
					"GlossTerm": "Standard Generalized Markup Language",
					"Acronym": "SGML",
					"Abbrev": "ISO 8879:1986",
					"GlossDef": {
                        "para": "A meta-markup language, used to create markup languages such as DocBook.",
						"GlossSeeAlso": ["GML", "XML"]
                    },
					"GlossSee": "markup"
                }
            }
        }
    }
}
"""

INI_TEXT = """
[yoyo]
input = out
hello = 2333
"""

class QuietParser(Parser):
	@staticmethod
	def log_error(*parts): pass

class TestIni(unittest.TestCase):
	def test_00_sections(self):
		result = parse_source(ini.ini_file, INI_TEXT)
		self.assertEqual({'yoyo': {'input': 'out', 'hello': 2333}}, ini.to_python(result))

	def test_01_several_sections_and_comments(self):
		text = "; preamble\n[a]\nx = 1.5\n# between\n[b]\n[c]\ny = z\n"
		self.assertEqual({'a': {'x': 1.5}, 'b': {}, 'c': {'y': 'z'}}, ini.to_python(parse_source(ini.ini_file, text)))

	def test_02_empty(self):
		self.assertEqual({}, ini.to_python(parse_source(ini.ini_file, '')))

	def test_03_missing_bracket(self):
		with self.assertRaises(ParseFailure) as cm:
			QuietParser(ini.ini_file).parse("[yoyo\ninput = out\n")
		failure = cm.exception
		self.assertEqual('input', failure.token.text)
		self.assertEqual(2, failure.position.line)
		self.assertIn("']'", failure.message)

	def test_04_numeric_looking_strings_stay_strings(self):
		result = parse_source(ini.ini_file, "[s]\nzip = 00501\nv = 1e5\nzero = 0\nhalf = 0.5\n")
		self.assertEqual({'s': {'zip': '00501', 'v': '1e5', 'zero': 0, 'half': 0.5}}, ini.to_python(result))


class TestJson(unittest.TestCase):
	def test_00_object(self):
		self.assertEqual({'key': 'value', 'arr': [1, 2, 3]}, json_value.parse('{"key": "value", "arr": [1, 2, 3]}'))

	def test_01_glossary(self):
		self.assertEqual(standard_json.loads(GLOSSARY_JSON), json_value.parse(GLOSSARY_JSON))

	def test_02_values(self):
		text = r'{"t": true, "f": false, "n": null, "e": [], "o": {}, "x": -2.5e3, "u": "ÿ\n"}'
		self.assertEqual(standard_json.loads(text), json_value.parse(text))

	def test_03_nesting(self):
		text = '{"a": [[1, [2]], {"b": [{"c": []}]}]}'
		self.assertEqual(standard_json.loads(text), json_value.parse(text))

	def test_04_garbage(self):
		for text in ['{', '{"a" 1}', '{"a": 1,}', '[1, 2]', '{"a": 1} {}']:
			with self.subTest(text=text):
				with self.assertRaises(ParseFailure):
					QuietParser(json_value.json_object).parse(text)


class TestExpression(unittest.TestCase):
	def test_00_parenthesized(self):
		result = parse_source(expression.expression, ' ( 1.1 + 2 ) ')
		self.assertTrue(result.left)
		self.assertTrue(result.right)
		self.assertEqual(1.1, result.first)
		self.assertEqual(2.0, result.second)
		self.assertTrue(result.op.plus)
		self.assertFalse(result.op.minus)
		self.assertAlmostEqual(3.1, result.evaluate())

	def test_01_bare(self):
		result = parse_source(expression.expression, '6 / 4')
		self.assertFalse(result.left)
		self.assertFalse(result.right)
		self.assertTrue(result.op.divide)
		self.assertEqual(1.5, result.evaluate())

	def test_02_each_operator(self):
		for text, value in [('7 + 2', 9), ('7 - 2', 5), ('7 * 2', 14), ('7 / 2', 3.5)]:
			with self.subTest(text=text):
				self.assertEqual(value, parse_source(expression.expression, text).evaluate())

	def test_03_no_operator(self):
		with self.assertRaises(ParseFailure):
			QuietParser(expression.expression).parse('1 % 2')


if __name__ == '__main__':
	unittest.main()
