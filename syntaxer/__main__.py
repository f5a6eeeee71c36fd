"""
Parse a file according to a shape defined in some Python module,
and print the result as JSON. For example:

	py -m syntaxer example.ini:ini_file settings.ini
	py -m syntaxer example.json_value:json_object data.json --tree

The shape is named as MODULE:ATTRIBUTE, where the attribute is a Shape object.
"""

import sys, argparse, json, importlib

from syntaxer.support.interfaces import LanguageError
from syntaxer.parsing.shape import Shape
from syntaxer.runtime import Parser

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m syntaxer', description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument('shape', help='the shape to parse into, as MODULE:ATTRIBUTE')
	parser.add_argument('source_path', nargs='?', help='path to input file (omit with --tree)')
	parser.add_argument('-i', '--indent', help='indent the JSON output for easier reading.', action='store_const', dest='indent', const=2, default=None)
	parser.add_argument('--partial', action='store_true', help='allow unconsumed tokens after the match.')
	parser.add_argument('--tree', action='store_true', help='display the compiled grammar of the shape instead of parsing.')
	return parser.parse_args(argv)

def find_shape(designation:str) -> Shape:
	module_name, sep, attribute = designation.partition(':')
	if not sep: raise ValueError("Shape must be named as MODULE:ATTRIBUTE, not %r"%designation)
	shape = getattr(importlib.import_module(module_name), attribute)
	if not isinstance(shape, Shape): raise ValueError("%r is not a Shape."%designation)
	return shape

def main(args):
	try: shape = find_shape(args.shape)
	except (ImportError, AttributeError, ValueError) as e:
		print(e, file=sys.stderr)
		exit(1)
	try:
		if args.tree:
			shape.rules.display()
			return
		if args.source_path is None:
			print('A source path is required unless --tree is given.', file=sys.stderr)
			exit(1)
		with open(args.source_path) as fh: document = fh.read()
		result = Parser(shape, complete=not args.partial).parse(document, filename=args.source_path)
	except LanguageError as e:
		print(e, file=sys.stderr)
		exit(1)
	else:
		data = result.as_dict() if hasattr(result, 'as_dict') else vars(result)
		json.dump(data, sys.stdout, indent=args.indent, default=vars)
		print()

if __name__ == '__main__': main(parse_arguments())
