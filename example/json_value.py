""" JSON is JavaScript Object Notation. See http://www.json.org/ for more.
Python has a standard library for JSON, so this is just a worked example. """

import re

from syntaxer.support.interfaces import TokenKind
from syntaxer.scanning.miniscan import RegexScanner
from syntaxer.parsing.shape import Grammar
from syntaxer.parsing.values import ValueKind
from syntaxer.runtime import parse_source

###################################################################################
#  Begin with a scanner definition:
###################################################################################

lexemes = RegexScanner()

# It's easy to ignore whitespace:
lexemes.ignore(r'\s+')

# The name of each rule doubles as the kind-name rule strings capture by.
# So thanks to this line, "@Number" in a rule means "capture a number token".
lexemes.token('Number', r'-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][-+]?\d+)?', TokenKind.NUMBER)

# Strings lose their quotes and have their escapes resolved on the way in.
escapes = {'b': '\b', 't': '\t', 'n': '\n', 'f': '\f', 'r': '\r', }
def unquote(text):
	def escape(m):
		code = m.group(1)
		if len(code) == 5: return chr(int(code[1:], 16))
		return escapes.get(code, code)
	return re.sub(r'\\(u[0-9a-fA-F]{4}|.)', escape, text[1:-1])
lexemes.token_map('String', r'"(?:\\.|[^"\\])*"', unquote, TokenKind.STRING)

# Punctuation and reserved words will appear as literals in the rules.
lexemes.token('Operator', r'[][{}:,]', TokenKind.OPERATOR)
lexemes.token('Keyword', r'true|false|null', TokenKind.KEYWORD)

###################################################################################
#  Follow that up with the shapes. Their names let them refer to each other
#  before they exist, which JSON needs: values contain objects which contain values.
###################################################################################

json = Grammar('json', scanner=lexemes)

json_object = json.shape('JsonObject')
json_object.field('pairs', "'{' @@ (',' @@)* '}' | '{' '}'", element='Pair', many=True)

pair = json.shape('Pair')
pair.field('key', "@String ':'")
pair.field('value', "@@", element='JsonValue')

# Each field below continues the alternation begun by the field before it.
json_value = json.shape('JsonValue')
json_value.field('text', "@String")
json_value.field('number', "| @Number", ValueKind.SCALAR)
json_value.field('items', "| '[' @@ (',' @@)* ']' | '[' ']'", element='JsonValue', many=True)
json_value.field('truth', "| @('true' | 'false')")
json_value.field('null', "| 'null'", ValueKind.BOOLEAN)
json_value.field('object', "| @@", element='JsonObject')

###################################################################################
#  And finally, tie it up in a nice neat bow:
###################################################################################

def to_python(record):
	""" Convert the parsed records into ordinary Python data. """
	if record.__class__.__name__ == 'JsonObject':
		return {p.key: to_python(p.value) for p in record.pairs}
	if record.text is not None: return record.text
	if record.number is not None: return record.number
	if record.truth is not None: return record.truth == 'true'
	if record.null: return None
	if record.object is not None: return to_python(record.object)
	return [to_python(item) for item in record.items]

def parse(text): return to_python(parse_source(json_object, text))
