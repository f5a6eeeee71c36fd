""" INI files: sections full of key = value lines. A table-driven scanner and three shapes. """

from syntaxer.support.interfaces import TokenKind
from syntaxer.scanning.miniscan import RegexScanner
from syntaxer.parsing.shape import Grammar
from syntaxer.parsing.values import ValueKind

lexemes = RegexScanner()
lexemes.ignore(r'\s+')
lexemes.ignore(r'[#;][^\n]*') # Comments
# Numbers come before strings: for a match of the same length, the earlier rule wins.
# No leading zeros, so a value like 00501 is the (longer) string instead.
lexemes.token('Number', r'(?:0|[1-9]\d*)(?:\.\d+)?', TokenKind.NUMBER)
lexemes.token('String', r'[^\s\[\]=#;]+', TokenKind.STRING)
lexemes.token('Operator', r'[][=]', TokenKind.OPERATOR)

ini = Grammar('ini', scanner=lexemes)

ini.shape('Entry').field('key', "@String '='").field('value', "(@Number | @String)", ValueKind.SCALAR)
ini.shape('Section').field('title', "'[' @String ']'").field('entries', "(@@)*", element='Entry', many=True)
ini_file = ini.shape('IniFile').field('sections', "(@@)*", element='Section', many=True)

def to_python(parsed) -> dict:
	return {s.title: {e.key: e.value for e in s.entries} for s in parsed.sections}
