""" Bits and bobs in support of visualizing data structures. """

VERTICAL = '\u2502   '
BRANCH = '\u251c\u2500\u2500 '
LAST = '\u2514\u2500\u2500 '
BLANK = '    '

def render(node) -> str:
	"""
	Draw an outline of a compiled match-node tree, one node per line.
	Works on anything with `label()` and `children()` methods.
	"""
	lines = [node.label()]
	def visit(children, indent):
		for i, child in enumerate(children):
			is_last = i == len(children) - 1
			lines.append(indent + (LAST if is_last else BRANCH) + child.label())
			visit(child.children(), indent + (BLANK if is_last else VERTICAL))
	visit(node.children(), '')
	return '\n'.join(lines)
