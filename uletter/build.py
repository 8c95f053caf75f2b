# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from typing import NamedTuple

from uletter.casing import Alternating, Case, CaseRange, FoldPair, checkCaseRanges, mapCase
from uletter.ranges import MaxAscii, MaxLatin1, Range16, Range32, RangeTable
from uletter.tables import CharClass, UnicodeTables
from uletter.ucd import CharRecord, Range, Ranges

# split a stride-range into its 16-bit and 32-bit parts
def _appendRange(r16: list[Range16], r32: list[Range32], lo: int, hi: int, stride: int) -> None:
	if lo == hi:
		stride = 1
	if hi <= 0xffff:
		r16.append(Range16(lo, hi, stride))
	elif lo > 0xffff:
		r32.append(Range32(lo, hi, stride))
	else:
		last16 = lo + ((0xffff - lo) // stride) * stride
		first32 = last16 + stride
		r16.append(Range16(lo, last16, stride if last16 > lo else 1))
		r32.append(Range32(first32, hi, stride if hi > first32 else 1))

def makeRangeTable(ranges: list[Range]) -> RangeTable:
	codepoints = list(Ranges.codepoints(ranges))
	r16: list[Range16] = []
	r32: list[Range32] = []

	# greedily extend each range as long as the spacing between the code points stays the same
	i = 0
	while i < len(codepoints):
		lo, hi, stride = codepoints[i], codepoints[i], 1
		i += 1
		if i < len(codepoints):
			stride = codepoints[i] - lo
			while i < len(codepoints) and codepoints[i] - hi == stride:
				hi = codepoints[i]
				i += 1
		_appendRange(r16, r32, lo, hi, stride)
	return RangeTable(tuple(r16), tuple(r32)).validate()

_CaseNone: int = -1
_UpperLowerDeltas: tuple[int, int, int] = (0, 1, 0)
_LowerUpperDeltas: tuple[int, int, int] = (-1, 0, -1)

class _CaseState(NamedTuple):
	point: int
	kind: int
	deltas: tuple[int, int, int]

def _caseState(rec: CharRecord) -> _CaseState:
	deltas = tuple((0 if m == 0 else m - rec.codepoint) for m in (rec.upper, rec.lower, rec.title))

	# title-case letters describe themselves, everything else is classified by the mappings it has
	#	=> some characters such as roman numerals are no letters, but still have a case
	kind = _CaseNone
	if rec.category == 'Lt':
		kind = Case.Title
	elif rec.lower != 0:
		kind = Case.Upper
	elif rec.upper != 0 or rec.title != 0:
		kind = Case.Lower
	return _CaseState(rec.codepoint, kind, deltas)

# check if d is the same as c, but opposite in upper/lower case (i.e. an element of an UpperLower sequence)
def _upperLowerAdjacent(c: _CaseState, d: _CaseState) -> bool:
	if {c.kind, d.kind} != {Case.Upper, Case.Lower}:
		return False
	if c.kind == Case.Lower:
		c, d = d, c
	return (c.deltas == _UpperLowerDeltas and d.deltas == _LowerUpperDeltas)

# check if d continues the run of c
def _adjacent(c: _CaseState, d: _CaseState) -> bool:
	if d.point != c.point + 1:
		return False
	if d.kind != c.kind:
		return _upperLowerAdjacent(c, d)
	if c.kind == _CaseNone or c.deltas in (_UpperLowerDeltas, _LowerUpperDeltas):
		return False
	return (c.deltas == d.deltas)

def _emitCaseRange(out: list[CaseRange], lo: _CaseState|None, hi: _CaseState) -> None:
	if lo is None or lo.deltas == (0, 0, 0):
		return

	# alternating runs must start with an upper-case letter, split a leading lower-case letter off
	if hi.point > lo.point and lo.deltas == _LowerUpperDeltas:
		out.append(CaseRange.fromDeltas(lo.point, lo.point + 1, *lo.deltas))
		if hi.point == lo.point + 1:
			out.append(CaseRange.fromDeltas(hi.point, hi.point + 1, *hi.deltas))
		else:
			out.append(CaseRange(lo.point + 1, hi.point + 1, (Alternating(), Alternating(), Alternating())))
	elif hi.point > lo.point and lo.deltas == _UpperLowerDeltas:
		out.append(CaseRange(lo.point, hi.point + 1, (Alternating(), Alternating(), Alternating())))
	else:
		out.append(CaseRange.fromDeltas(lo.point, hi.point + 1, *lo.deltas))

# records must be sorted by code point (case ranges are emitted as half-open [lo, last + 1))
def makeCaseRanges(records: list[CharRecord]) -> tuple[CaseRange, ...]:
	out: list[CaseRange] = []
	start, prev = None, None
	for rec in records:
		state = _caseState(rec)
		if prev is not None and _adjacent(prev, state):
			prev = state
			continue

		# end of the run (possibly)
		if prev is not None:
			_emitCaseRange(out, start, prev)
		start = (state if state.kind != _CaseNone else None)
		prev = state
	if prev is not None:
		_emitCaseRange(out, start, prev)
	return checkCaseRanges(tuple(out))

def _fallbackFold(rune: int, caseRanges: tuple[CaseRange, ...]) -> int:
	lower = mapCase(Case.Lower, rune, caseRanges)
	if lower != rune:
		return lower
	return mapCase(Case.Upper, rune, caseRanges)

# returns the case orbit and the ascii fold table
#	=> the orbit only holds classes, which cannot be iterated through the lower/upper fallback
def makeFoldTables(records: list[CharRecord], caseRanges: tuple[CaseRange, ...]) -> tuple[tuple[FoldPair, ...], tuple[int, ...]]:
	classes: dict[int, set[int]] = {}
	for rec in records:
		if rec.fold != 0:
			classes.setdefault(rec.fold, {rec.fold}).add(rec.codepoint)

	# compute the cyclic successor of every member and check if the fallback would yield the same
	successor: dict[int, int] = {}
	orbit: list[FoldPair] = []
	for members in classes.values():
		members = sorted(members)
		nextOf = {members[i]: members[(i + 1) % len(members)] for i in range(len(members))}
		successor.update(nextOf)
		if any(_fallbackFold(m, caseRanges) != nextOf[m] for m in members):
			orbit += [FoldPair(m, nextOf[m]) for m in members]

	# code points without fold relatives, which the fallback would otherwise map away, fold onto themselves
	for rec in records:
		if rec.codepoint <= MaxAscii or (rec.upper == 0 and rec.lower == 0) or rec.codepoint in successor:
			continue
		if _fallbackFold(rec.codepoint, caseRanges) != rec.codepoint:
			orbit.append(FoldPair(rec.codepoint, rec.codepoint))

	asciiFold = tuple(successor.get(c, c) for c in range(MaxAscii + 1))
	return tuple(sorted(orbit)), asciiFold

_CategoryClass: dict[str, int] = { 'C': CharClass.pC, 'P': CharClass.pP, 'N': CharClass.pN, 'S': CharClass.pS, 'Z': CharClass.pZ }

def _charClass(category: str) -> int:
	if category == 'Lu':
		return int(CharClass.pLu)
	if category == 'Ll':
		return int(CharClass.pLl)
	if category.startswith('L'):
		return int(CharClass.pLo)
	return int(_CategoryClass.get(category[0], 0))

def makeProperties(records: list[CharRecord]) -> tuple[int, ...]:
	properties = [0] * (MaxLatin1 + 1)
	for rec in records:
		if rec.codepoint > MaxLatin1:
			break
		properties[rec.codepoint] = _charClass(rec.category)
	return tuple(properties)

def _categoryRanges(records: list[CharRecord], category: str) -> list[Range]:
	return Ranges.fromCodepoints([rec.codepoint for rec in records if rec.category == category])

# progress is only reported if verbose
def buildTables(source, verbose: bool = False) -> UnicodeTables:
	if verbose:
		print(f'Building tables for unicode [{source.version}]...')
	records = sorted(source.records(), key=lambda rec: rec.codepoint)

	# construct the category tables (letter is the union of all letter categories)
	letterRanges: list[Range] = []
	for category in ['Lu', 'Ll', 'Lt', 'Lm', 'Lo']:
		letterRanges = Ranges.union(letterRanges, _categoryRanges(records, category))
	Ranges.wellFormed(letterRanges)

	caseRanges = makeCaseRanges(records)
	caseOrbit, asciiFold = makeFoldTables(records, caseRanges)
	tables = UnicodeTables(
		upper=makeRangeTable(_categoryRanges(records, 'Lu')),
		lower=makeRangeTable(_categoryRanges(records, 'Ll')),
		title=makeRangeTable(_categoryRanges(records, 'Lt')),
		letter=makeRangeTable(letterRanges),
		caseRanges=caseRanges,
		caseOrbit=caseOrbit,
		asciiFold=asciiFold,
		properties=makeProperties(records),
		version=source.version
	)
	return tables.validate()
