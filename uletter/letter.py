# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from uletter.casing import Case, CaseRange, checkCase, checkCaseRanges, mapCase
from uletter.ranges import MaxAscii, MaxLatin1, MaxRune
from uletter.tables import CharClass, TurkishRanges, UnicodeTables, _defaultLock, defaultTables

_AsciiCaseOffset: int = ord('a') - ord('A')

# classification and case mapping bound to one set of tables
class Letter:
	def __init__(self, tables: UnicodeTables, compatLower: bool = False) -> None:
		self.tables = tables

		# compatLower reproduces the legacy latin-1 lower-case test, which matched upper-case letters
		self.compatLower = compatLower
		self._latinLower = (CharClass.pLu if compatLower else CharClass.pLl)

	def isUpper(self, rune: int) -> bool:
		if rune < 0:
			return False
		if rune <= MaxLatin1:
			return (self.tables.properties[rune] & CharClass.pLmask) == CharClass.pLu
		return self.tables.upper.isExcludingLatin(rune)
	def isLower(self, rune: int) -> bool:
		if rune < 0:
			return False
		if rune <= MaxLatin1:
			return (self.tables.properties[rune] & CharClass.pLmask) == self._latinLower
		return self.tables.lower.isExcludingLatin(rune)
	def isTitle(self, rune: int) -> bool:
		if rune <= MaxLatin1:
			return False
		return self.tables.title.isExcludingLatin(rune)
	def isLetter(self, rune: int) -> bool:
		if rune < 0:
			return False
		if rune <= MaxLatin1:
			return (self.tables.properties[rune] & CharClass.pLmask) != 0
		return self.tables.letter.isExcludingLatin(rune)

	# maps the rune to the given case (Case.Upper, Case.Lower or Case.Title)
	def to(self, toCase: int, rune: int) -> int:
		toCase = checkCase(toCase)
		if toCase == Case.Upper:
			return self.toUpper(rune)
		if toCase == Case.Lower:
			return self.toLower(rune)
		return self.toTitle(rune)
	def toUpper(self, rune: int) -> int:
		if rune <= MaxAscii:
			if ord('a') <= rune <= ord('z'):
				rune -= _AsciiCaseOffset
			return rune
		return mapCase(Case.Upper, rune, self.tables.caseRanges)
	def toLower(self, rune: int) -> int:
		if rune <= MaxAscii:
			if ord('A') <= rune <= ord('Z'):
				rune += _AsciiCaseOffset
			return rune
		return mapCase(Case.Lower, rune, self.tables.caseRanges)
	def toTitle(self, rune: int) -> int:
		if rune <= MaxAscii:
			if ord('a') <= rune <= ord('z'):
				rune -= _AsciiCaseOffset
			return rune
		return mapCase(Case.Title, rune, self.tables.caseRanges)

	# iterates over the code points equivalent under simple case folding: returns the smallest
	# rune > rune of the equivalence class if one exists, otherwise the smallest rune of the class
	#	=> SimpleFold('K') = 'k', SimpleFold('k') = '\u212a', SimpleFold('\u212a') = 'K', SimpleFold('1') = '1'
	def simpleFold(self, rune: int) -> int:
		if rune < 0 or rune >= MaxRune:
			return rune
		if rune < len(self.tables.asciiFold):
			return self.tables.asciiFold[rune]

		# consult the case orbit for classes with more than two members
		orbit = self.tables.caseOrbit
		lo, hi = 0, len(orbit)
		while lo < hi:
			m = lo + (hi - lo) // 2
			if orbit[m].fromRune < rune:
				lo = m + 1
			else:
				hi = m
		if lo < len(orbit) and orbit[lo].fromRune == rune:
			return orbit[lo].toRune

		# no folding specified: one- or two-element class of rune and its lower or upper case
		lower = self.toLower(rune)
		if lower != rune:
			return lower
		return self.toUpper(rune)

	def special(self, specialCase: 'SpecialCase') -> 'SpecialCase':
		return specialCase.withLetter(self)

# language-specific case mappings, which take priority over the standard mappings
class SpecialCase:
	def __init__(self, ranges: tuple[CaseRange, ...], letter: Letter|None = None, name: str = '') -> None:
		self.ranges = checkCaseRanges(tuple(ranges))
		self.letter = letter
		self.name = name
	def __repr__(self) -> str:
		return f'SpecialCase({self.name!r}, ranges={len(self.ranges)})'
	def withLetter(self, letter: Letter) -> 'SpecialCase':
		return SpecialCase(self.ranges, letter, self.name)
	def _standard(self) -> Letter:
		if self.letter is not None:
			return self.letter
		return defaultLetter()

	def to(self, toCase: int, rune: int) -> int:
		toCase = checkCase(toCase)

		# the special table only overrides runes it actually remaps
		result = mapCase(toCase, rune, self.ranges)
		if result == rune:
			result = self._standard().to(toCase, rune)
		return result
	def toUpper(self, rune: int) -> int:
		return self.to(Case.Upper, rune)
	def toLower(self, rune: int) -> int:
		return self.to(Case.Lower, rune)
	def toTitle(self, rune: int) -> int:
		return self.to(Case.Title, rune)

_defaultLetter: Letter|None = None

# shares the lock of the default tables (reentrant, as the tables are fetched while holding it)
def defaultLetter() -> Letter:
	global _defaultLetter
	if _defaultLetter is not None:
		return _defaultLetter
	with _defaultLock:
		if _defaultLetter is None:
			_defaultLetter = Letter(defaultTables())
	return _defaultLetter

TurkishCase = SpecialCase(TurkishRanges, name='Turkish')
AzeriCase = TurkishCase
