# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import enum
from typing import NamedTuple

from uletter.ranges import MaxRune, TableError

# raw delta value which marks a sequence of alternating upper/lower pairs (otherwise impossible delta)
UpperLower: int = MaxRune + 1

class InvalidCaseError(ValueError):
	pass

class Case(enum.IntEnum):
	Upper = 0
	Lower = 1
	Title = 2

def checkCase(toCase: int) -> Case:
	if isinstance(toCase, bool) or not isinstance(toCase, int) or toCase < Case.Upper or toCase > Case.Title:
		raise InvalidCaseError(f'Invalid case selector encountered [{toCase!r}]')
	return Case(toCase)

class CaseDelta:
	def apply(self, lo: int, rune: int, toCase: Case) -> int:
		raise NotImplementedError

# rune is mapped by adding a fixed (possibly negative or zero) offset
class Uniform(CaseDelta):
	def __init__(self, delta: int) -> None:
		self.delta = delta
	def __repr__(self) -> str:
		return f'Uniform({self.delta})'
	def __eq__(self, other: object) -> bool:
		return isinstance(other, Uniform) and other.delta == self.delta
	def __hash__(self) -> int:
		return hash(('uniform', self.delta))
	def apply(self, lo: int, rune: int, toCase: Case) -> int:
		return rune + self.delta

# range is a sequence of the form Upper Lower Upper Lower starting with an upper case letter
#	=> real deltas look like {0, 1, 0} on even and {-1, 0, -1} on odd offsets, so the mapping clears or
#	sets the low bit of the offset: Upper and Title are even while Lower is odd
class Alternating(CaseDelta):
	def __repr__(self) -> str:
		return 'Alternating()'
	def __eq__(self, other: object) -> bool:
		return isinstance(other, Alternating)
	def __hash__(self) -> int:
		return hash('alternating')
	def apply(self, lo: int, rune: int, toCase: Case) -> int:
		return lo + (((rune - lo) & ~1) | (toCase & 1))

def _makeDelta(value: int|CaseDelta) -> CaseDelta:
	if isinstance(value, CaseDelta):
		return value
	if value == UpperLower:
		return Alternating()
	if abs(value) > MaxRune:
		raise TableError(f'Malformed case delta encountered [{value}]')
	return Uniform(value)

# case range covers the half-open interval [lo, hi) with deltas indexed by Case
class CaseRange(NamedTuple):
	lo: int
	hi: int
	deltas: tuple[CaseDelta, CaseDelta, CaseDelta]

	@classmethod
	def fromDeltas(cls, lo: int, hi: int, upper: int|CaseDelta, lower: int|CaseDelta, title: int|CaseDelta) -> 'CaseRange':
		return cls(lo, hi, (_makeDelta(upper), _makeDelta(lower), _makeDelta(title)))

class FoldPair(NamedTuple):
	fromRune: int
	toRune: int

def checkCaseRanges(ranges: tuple[CaseRange, ...]) -> tuple[CaseRange, ...]:
	for i in range(len(ranges)):
		cr = ranges[i]
		if cr.lo < 0 or cr.hi > MaxRune + 1 or cr.lo >= cr.hi or len(cr.deltas) != 3:
			raise TableError(f'Malformed case range encountered [{cr.lo:05x}-{cr.hi:05x}]')
		if i > 0 and ranges[i - 1].hi > cr.lo:
			raise TableError(f'Overlapping or unordered case ranges encountered [{cr.lo:05x}]')
	return ranges

def checkFoldPairs(pairs: tuple[FoldPair, ...]) -> tuple[FoldPair, ...]:
	for i in range(1, len(pairs)):
		if pairs[i - 1].fromRune >= pairs[i].fromRune:
			raise TableError(f'Unordered fold pairs encountered [{pairs[i].fromRune:05x}]')
	return pairs

# maps the rune using the case ranges (rune is returned unchanged if no range contains it)
def mapCase(toCase: int, rune: int, caseRanges: tuple[CaseRange, ...]) -> int:
	toCase = checkCase(toCase)

	# binary search over ranges
	lo, hi = 0, len(caseRanges)
	while lo < hi:
		m = lo + (hi - lo) // 2
		cr = caseRanges[m]
		if cr.lo <= rune < cr.hi:
			return cr.deltas[toCase].apply(cr.lo, rune, toCase)
		if rune < cr.lo:
			hi = m
		else:
			lo = m + 1
	return rune
