# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import os
import re
import sys
import unicodedata
import urllib.request
from typing import Iterator, NamedTuple

from uletter.ranges import MaxRune

# ranges are lists of range-objects, which must be sorted and must not overlap/neighbor each other if same value
#	=> use Ranges.fromRawList to sort and merge an arbitrary list of Range objects
# ranges map [first-last] to a non-empty tuple of values
# invariant for ranges: (first >= 0) and (first <= last) and (last <= MaxRune)

class Range:
	RangeFirst: int = 0
	RangeLast: int = MaxRune

	def __init__(self, first: int, last: int, values: tuple|int) -> None:
		if type(values) == int:
			values = (values,)
		if first < Range.RangeFirst or last > Range.RangeLast or first > last:
			raise RuntimeError(f'Malformed range encountered [{first:05x}-{last:05x}]')
		if type(values) != tuple or len(values) == 0:
			raise RuntimeError('Malformed values encountered')
		self.first = first
		self.last = last
		self.values = values
	def __str__(self) -> str:
		return f'[{self.first:05x}-{self.last:05x}/{self.span()}] -> {self.values}'
	def __repr__(self) -> str:
		return self.__str__()
	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Range):
			return NotImplemented
		return (self.first, self.last, self.values) == (other.first, other.last, other.values)
	def merge(self, other: 'Range') -> 'Range':
		if self.values != other.values:
			raise RuntimeError('Cannot merge ranges of different value')
		return Range(min(self.first, other.first), max(self.last, other.last), self.values)
	def span(self) -> int:
		return (self.last - self.first + 1)
	def neighbors(self, right: 'Range') -> bool:
		return (self.last + 1 == right.first)
	def overlap(self, other: 'Range') -> bool:
		return (self.last >= other.first and self.first <= other.last)

class Ranges:
	@staticmethod
	def _appOrMerge(out: list[Range], other: Range) -> None:
		if len(out) > 0 and (out[-1].overlap(other) or (out[-1].neighbors(other) and out[-1].values == other.values)):
			out[-1] = out[-1].merge(other)
		else:
			out.append(other)
	@staticmethod
	def _setIteration(a: list[Range], b: list[Range], fn) -> list[Range]:
		out: list[Range] = []

		# walk both lists in parallel and pass every maximal common slice to the callback
		aOff, bOff, aNext, bNext, nextProcessed = 0, 0, None, None, Range.RangeFirst
		while True:
			if aNext is None and aOff < len(a):
				aNext, aOff = a[aOff], aOff + 1
			if bNext is None and bOff < len(b):
				bNext, bOff = b[bOff], bOff + 1
			if aNext is None and bNext is None:
				break
			aFirst, aLast = (Range.RangeLast + 1, Range.RangeLast + 1) if aNext is None else (aNext.first, aNext.last)
			bFirst, bLast = (Range.RangeLast + 1, Range.RangeLast + 1) if bNext is None else (bNext.first, bNext.last)

			# find the slice [first-last], which is either covered by both or by exactly one of the lists
			first = max(nextProcessed, min(aFirst, bFirst))
			last = min(aLast, bLast)
			if first < aFirst and last >= aFirst:
				last = aFirst - 1
			if first < bFirst and last >= bFirst:
				last = bFirst - 1

			val = fn(aNext.values if aFirst <= first else None, bNext.values if bFirst <= first else None)
			if val is not None:
				Ranges._appOrMerge(out, Range(first, last, val))
			nextProcessed = last + 1

			# check which of the two ranges has been fully consumed
			if aLast == last:
				aNext = None
			if bLast == last:
				bNext = None
		return out
	@staticmethod
	def _unionOperation(a: tuple|None, b: tuple|None) -> tuple|None:
		if a is None:
			return b
		if b is None:
			return a

		# perform merge to trigger an exception on invalid merges
		return Range(0, 0, a).merge(Range(0, 0, b)).values

	@staticmethod
	def fromRawList(ranges: list[Range]) -> list[Range]:
		ranges = sorted(ranges, key=lambda r : r.first)

		# merge any neighboring/overlapping ranges of the same value
		out: list[Range] = []
		for r in ranges:
			Ranges._appOrMerge(out, r)
		return out
	@staticmethod
	def fromCodepoints(codepoints: list[int], value: tuple|int = 1) -> list[Range]:
		out: list[Range] = []
		for c in sorted(codepoints):
			Ranges._appOrMerge(out, Range(c, c, value))
		return out
	@staticmethod
	def wellFormed(ranges: list[Range]) -> None:
		for i in range(len(ranges)):
			if i > 0 and ranges[i - 1].first > ranges[i].first:
				raise RuntimeError('Order of ranges violation encountered')
			if i > 0 and ranges[i - 1].last + 1 > ranges[i].first:
				raise RuntimeError('Overlapping ranges encountered')
	@staticmethod
	def codepoints(ranges: list[Range]) -> Iterator[int]:
		for r in ranges:
			yield from range(r.first, r.last + 1)
	@staticmethod
	def lookup(ranges: list[Range], pos: int) -> tuple|None:
		lo, hi = 0, len(ranges)
		while lo < hi:
			m = (lo + hi) // 2
			if pos < ranges[m].first:
				hi = m
			elif pos > ranges[m].last:
				lo = m + 1
			else:
				return ranges[m].values
		return None

	@staticmethod
	def union(a: list[Range], b: list[Range]) -> list[Range]:
		return Ranges._setIteration(a, b, Ranges._unionOperation)

class ParsedFile:
	def _parseLine(self, line: str) -> list|None:
		missing = ('@missing:' in line)

		# check if this is a missing line
		if missing:
			_, line = line.split('@missing:')

		# remove any comments and split the line and strip all entries
		fields = [s.strip() for s in line.split('#')[0].split(';')]

		# validate the field count
		if fields == ['']:
			return None
		if len(fields) < 2:
			raise RuntimeError(f'Line with an invalid field count encountered [{fields[0]}]')
		cp, fields = fields[0], fields[1:]

		# expand the unicode range
		if '..' not in cp:
			return [missing, int(cp, 16), int(cp, 16), fields]
		begin, last = cp.split('..')
		return [missing, int(begin, 16), int(last, 16), fields]
	def _parseFile(self, path: str, legacyRanges: bool) -> None:
		print(f'Parsing [{path}]...')

		# open the file for reading and iterate over its lines
		with open(path, 'r', encoding='utf-8') as file:
			legacyState = None
			for line in file:
				parsed = self._parseLine(line)
				if parsed is None:
					continue
				missing, begin, last, fields = parsed

				# check if a legacy range has been started (i.e. <CJK Ideograph, First> ... <CJK Ideograph, Last>)
				if legacyState is not None:
					if len(fields) == 0 or ', Last>' not in fields[0] or fields[0][:-7] != legacyState[1] or fields[1:] != legacyState[2:]:
						raise RuntimeError(f'Legacy range not closed properly [{begin:06x}]')
					begin = legacyState[0]
					legacyState = None
				elif legacyRanges and ', First>' in fields[0]:
					legacyState = [begin, fields[0][:-8]] + fields[1:]
					continue

				# check if the line can be ignored, because its empty (i.e. only a comment)
				if len(fields) < 1:
					continue
				self._parsed.append((begin, last, missing, fields))
			if legacyState is not None:
				raise RuntimeError(f'Half-open legacy state encountered [{legacyState[0]:06x}]')
	def __init__(self, path: str, legacyRanges: bool) -> None:
		self._parsed: list[tuple[int, int, bool, list[str]]] = []
		self._parseFile(path, legacyRanges)
	def values(self, assignValue) -> list[Range]:
		ranges: list[Range] = []

		# iterate over the parsed lines and match them against the callback (default-values are not expected)
		for (begin, last, missing, fields) in self._parsed:
			value = assignValue(fields)
			if value is None:
				continue
			if missing:
				raise RuntimeError(f'Unexpected missing default-value [{begin:06x}]')
			ranges.append(Range(begin, last, value))
		return Ranges.fromRawList(ranges)

# download all relevant files from the latest release of the ucd and extract the version (unicode character database: https://www.unicode.org/Public/UCD/latest)
def DownloadUCDFiles(refreshFiles: bool, baseUrl: str, dirPath: str) -> tuple[str, dict[str, str]]:
	files = {
		'ReadMe': 'ReadMe.txt',
		'UnicodeData': 'ucd/UnicodeData.txt',
		'CaseFolding': 'ucd/CaseFolding.txt'
	}

	# check if the directory needs to be created
	if not os.path.isdir(dirPath):
		os.makedirs(dirPath)

	# download all of the files (only if they should either be refreshed, or do not exist yet)
	mapping = {}
	for file in files:
		url, path = f'{baseUrl}/{files[file]}', os.path.join(dirPath, f'{file}.txt')
		mapping[file] = path

		if not refreshFiles and os.path.isfile(path):
			continue
		print(f'downloading [{url}] to [{path}]...')
		urllib.request.urlretrieve(url, path)
	return (ReadUCDVersion(mapping['ReadMe']), mapping)

def ReadUCDVersion(path: str) -> str:
	with open(path, 'r', encoding='utf-8') as f:
		fileContent = f.read()
	version = re.findall('Version ([0-9]+(\\.[0-9]+)*) of the Unicode Standard', fileContent)
	if len(version) != 1:
		raise RuntimeError(f'Unable to extract the version [{path}]')
	return version[0][0]

# simple mappings of a single code point (0 denotes no mapping)
class CharRecord(NamedTuple):
	codepoint: int
	category: str
	upper: int = 0
	lower: int = 0
	title: int = 0
	fold: int = 0

def _hexOrZero(field: str) -> int:
	return (0 if field == '' else int(field, 16))

# character source backed by the UnicodeData.txt and CaseFolding.txt files of the ucd
class UCDSource:
	def __init__(self, mapping: dict[str, str], version: str = 'unknown') -> None:
		self.version = version
		unicodeData = ParsedFile(mapping['UnicodeData'], True)
		caseFolding = ParsedFile(mapping['CaseFolding'], False)

		# extract category and the simple upper/lower/title mappings (title falls back to upper if not defined)
		self._chars = unicodeData.values(lambda fs: (fs[1], _hexOrZero(fs[11]), _hexOrZero(fs[12]), _hexOrZero(fs[13] if fs[13] != '' else fs[11])))

		# extract the simple case-folding (common and simple status, full and turkic mappings are not one-to-one)
		self._folds = caseFolding.values(lambda fs: int(fs[1], 16) if fs[0] in ('C', 'S') else None)
	@staticmethod
	def fromDirectory(dirPath: str) -> 'UCDSource':
		mapping = {
			'UnicodeData': os.path.join(dirPath, 'UnicodeData.txt'),
			'CaseFolding': os.path.join(dirPath, 'CaseFolding.txt')
		}
		readMe = os.path.join(dirPath, 'ReadMe.txt')
		return UCDSource(mapping, ReadUCDVersion(readMe) if os.path.isfile(readMe) else 'unknown')

	def records(self) -> Iterator[CharRecord]:
		# expand the ranges to the separate code points and attach their simple fold
		for r in self._chars:
			category, upper, lower, title = r.values
			for c in range(r.first, r.last + 1):
				fold = Ranges.lookup(self._folds, c)
				yield CharRecord(c, category, upper, lower, title, 0 if fold is None else fold[0])

# categories of code points, which can carry case mappings (all others are skipped without a string lookup)
_CasedCategories: set[str] = {'Lu', 'Ll', 'Lt', 'Lm', 'Mn', 'Nl', 'So'}

# character source backed by the unicode database compiled into the running interpreter
#	=> the interpreter only exposes the full mappings, the simple mappings hidden behind full mappings, which
#	expand to several code points, are recovered: the simple upper-case of a letter with ypogegrammeni is its
#	title-case (U+1F80 -> U+1F88), the simple lower-case is the leading code point (U+0130 -> U+0069) and the
#	simple fold of an upper-case letter with an expanding fold is its lower-case (U+1E9E -> U+00DF)
class InterpreterSource:
	def __init__(self, verbose: bool = False) -> None:
		self.version = unicodedata.unidata_version
		self.verbose = verbose

	@staticmethod
	def _single(c: int, mapped: str) -> int:
		if len(mapped) != 1 or ord(mapped) == c:
			return 0
		return ord(mapped)
	@staticmethod
	def _record(c: int, ch: str, category: str) -> CharRecord:
		upper, lower, title, fold = ch.upper(), ch.lower(), ch.title(), ch.casefold()
		sUpper, sLower = InterpreterSource._single(c, upper), InterpreterSource._single(c, lower)
		sTitle, sFold = InterpreterSource._single(c, title), InterpreterSource._single(c, fold)

		# check if any of the mappings expand and fall back to the related simple mapping
		if len(upper) > 1:
			sUpper = sTitle
		if len(title) > 1:
			sTitle = sUpper
		if len(lower) > 1:
			sLower = InterpreterSource._single(c, lower[0])
		if len(fold) > 1:
			sFold = InterpreterSource._single(c, lower)
		return CharRecord(c, category, sUpper, sLower, sTitle, sFold)

	def records(self) -> Iterator[CharRecord]:
		if self.verbose:
			print(f'Reading interpreter unicode database [{self.version}] of python [{sys.version_info.major}.{sys.version_info.minor}]...')
		for c in range(MaxRune + 1):
			ch = chr(c)
			category = unicodedata.category(ch)
			if category == 'Cn':
				continue
			if category not in _CasedCategories:
				yield CharRecord(c, category)
			else:
				yield InterpreterSource._record(c, ch, category)
