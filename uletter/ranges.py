# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from typing import NamedTuple

MaxRune: int = 0x10ffff
ReplacementChar: int = 0xfffd
MaxAscii: int = 0x7f
MaxLatin1: int = 0xff

# tables with fewer candidate ranges than this are scanned linearly
LinearMax: int = 18

class TableError(RuntimeError):
	pass

# ranges run from lo to hi inclusive with the given stride
#	=> Range16 only holds values below 0x10000, Range32 only values at or above it
class Range16(NamedTuple):
	lo: int
	hi: int
	stride: int = 1

class Range32(NamedTuple):
	lo: int
	hi: int
	stride: int = 1

def is16(ranges: tuple[Range16, ...], rune: int, lo: int = 0) -> bool:
	if len(ranges) - lo < LinearMax or rune <= MaxLatin1:
		for i in range(lo, len(ranges)):
			r = ranges[i]
			if rune < r.lo:
				return False
			if rune <= r.hi:
				return (r.stride == 1 or (rune - r.lo) % r.stride == 0)
		return False

	# binary search over the remaining ranges
	hi = len(ranges)
	while lo < hi:
		m = lo + (hi - lo) // 2
		r = ranges[m]
		if r.lo <= rune <= r.hi:
			return (r.stride == 1 or (rune - r.lo) % r.stride == 0)
		if rune < r.lo:
			hi = m
		else:
			lo = m + 1
	return False

def is32(ranges: tuple[Range32, ...], rune: int) -> bool:
	if len(ranges) < LinearMax or rune <= MaxLatin1:
		for r in ranges:
			if rune < r.lo:
				return False
			if rune <= r.hi:
				return (r.stride == 1 or (rune - r.lo) % r.stride == 0)
		return False

	# binary search over ranges
	lo, hi = 0, len(ranges)
	while lo < hi:
		m = lo + (hi - lo) // 2
		r = ranges[m]
		if r.lo <= rune <= r.hi:
			return (r.stride == 1 or (rune - r.lo) % r.stride == 0)
		if rune < r.lo:
			hi = m
		else:
			lo = m + 1
	return False

def _checkSequence(ranges: tuple, low: int, high: int) -> None:
	for i in range(len(ranges)):
		r = ranges[i]
		if r.lo < low or r.hi > high or r.lo > r.hi or r.stride < 1:
			raise TableError(f'Malformed range encountered [{r.lo:05x}-{r.hi:05x}/{r.stride}]')
		if i > 0 and ranges[i - 1].hi >= r.lo:
			raise TableError(f'Overlapping or unordered ranges encountered [{r.lo:05x}]')

# RangeTable defines a set of code points by listing the ranges of code points within the set
#	=> both sequences must be sorted and non-overlapping and latinOffset counts the leading r16 entries with hi <= MaxLatin1
class RangeTable:
	def __init__(self, r16: tuple[Range16, ...] = (), r32: tuple[Range32, ...] = (), latinOffset: int|None = None) -> None:
		self.r16 = tuple(Range16(*r) for r in r16)
		self.r32 = tuple(Range32(*r) for r in r32)
		if latinOffset is None:
			latinOffset = 0
			while latinOffset < len(self.r16) and self.r16[latinOffset].hi <= MaxLatin1:
				latinOffset += 1
		self.latinOffset = latinOffset
	def __repr__(self) -> str:
		return f'RangeTable(r16={len(self.r16)}, r32={len(self.r32)}, latinOffset={self.latinOffset})'
	def __eq__(self, other: object) -> bool:
		if not isinstance(other, RangeTable):
			return NotImplemented
		return (self.r16, self.r32, self.latinOffset) == (other.r16, other.r32, other.latinOffset)
	def __hash__(self) -> int:
		return hash((self.r16, self.r32, self.latinOffset))
	def __contains__(self, rune: int) -> bool:
		return self.inRange(rune)

	def validate(self) -> 'RangeTable':
		_checkSequence(self.r16, 0, 0xffff)
		_checkSequence(self.r32, 0x10000, MaxRune)
		if self.latinOffset < 0 or self.latinOffset > len(self.r16) or any(r.hi > MaxLatin1 for r in self.r16[:self.latinOffset]):
			raise TableError(f'Invalid latin offset encountered [{self.latinOffset}]')
		return self

	def inRange(self, rune: int) -> bool:
		if rune < 0:
			return False
		if len(self.r16) > 0 and rune <= self.r16[-1].hi:
			return is16(self.r16, rune)
		if len(self.r32) > 0 and rune >= self.r32[0].lo:
			return is32(self.r32, rune)
		return False

	# only valid for runes already known to lie above MaxLatin1
	def isExcludingLatin(self, rune: int) -> bool:
		if rune < 0:
			return False
		if len(self.r16) > self.latinOffset and rune <= self.r16[-1].hi:
			return is16(self.r16, rune, self.latinOffset)
		if len(self.r32) > 0 and rune >= self.r32[0].lo:
			return is32(self.r32, rune)
		return False

def inRange(table: RangeTable, rune: int) -> bool:
	return table.inRange(rune)

def isOneOf(tables: list[RangeTable], rune: int) -> bool:
	return any(t.inRange(rune) for t in tables)
