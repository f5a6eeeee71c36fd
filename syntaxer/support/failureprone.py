"""
This module is all about easing over the process to display where things go wrong.

When a parse fails, the engine knows a token position: a line, a column, and an offset
into the text. That's precise, but not friendly. People want to see the offending line
with a mark under the problem. The `illustration` function draws such a picture from a
single line of text, and the SourceText class finds the line to draw it from.

The same picture serves for broken rule strings: a rule is just a (short) line of text,
and the compile error knows the offset of the character it choked on.

Line breaks are a funny thing. Unix calls for \n. Apple prior to OSx called for \r.
CP/M and its derivatives like Windows call for \r\n. The scanners in this package count
lines by \n, which agrees with the 'normal' mode below for all three conventions except
classic-Apple, so that's the default. Pass a different mode if your text is peculiar.
"""

import bisect, re, sys

LINEBREAK_MODE = {
	'normal': re.compile(r'\r\n?|\n'),
	'unicode': re.compile(r'\r\n|[\x0a-\x0d\x1c-\x1e\u0085\u2028\u2029]'),
	'unix': re.compile(r'\n'),
	'apple': re.compile(r'\r'),
	'dos': re.compile(r'\r\n'),
}

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	""" Builds up a picture of where something appears in a line of text. Useful for polite error messages. """
	blanks = ''.join(c if c == '\t' else ' ' for c in prefix + single_line[:start])
	underline_width = max(1, min(width, len(single_line)-start))
	underline = '^'*underline_width
	return prefix + single_line.rstrip() + '\n' + blanks + underline +" "+caption

class SourceText:
	""" Wrapper for (a section of) source text: participates in half-respectable error-display with context. """
	def __init__(self, content:str, line_breaks='normal', filename:str=None, first_line=1):
		self.content = content
		self.filename = filename
		self.line_breaks = line_breaks
		self.first_line = first_line
		self.__bounds = None

	def __make_bounds(self):
		""" Lazily only find line breaks if it turns out to be necessary for a particular text. """
		if self.__bounds is None:
			inside = [m.end() for m in LINEBREAK_MODE[self.line_breaks].finditer(self.content)]
			self.__bounds = [0] + inside + [len(self.content)]

	def find_row_col(self, index:int):
		""" Based on a character index offset from the start of text. Respects self.first_line. """
		self.__make_bounds()
		row = bisect.bisect_right(self.__bounds, index, hi=len(self.__bounds) - 1) - 1
		col = index - self.__bounds[row]
		return row+self.first_line, col

	def line_of_text(self, row):
		""" Argument respects self.first_line. """
		self.__make_bounds()
		r = max(0, row - self.first_line)
		return self.content[self.__bounds[r]:self.__bounds[r + 1]]

	def _format_message(self, row, col, message):
		prefix = "At" if self.filename is None else str(self.filename)+":"
		return "%s line %d, column %d: %s" % (prefix, row, col + 1, message)

	def complaint(self, a_slice:slice, message:str):
		left, right = a_slice.start, a_slice.stop
		row, col = self.find_row_col(left)
		reference = self._format_message(row, col, message)
		line = self.line_of_text(row)
		illustrated = illustration(line, col, right - left, prefix=' >>> ')
		return "%s\n%s"%(reference, illustrated)

	def complain(self, a_slice:slice, message:str):
		print(self.complaint(a_slice, message), file=sys.stderr)
