# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from uletter.casing import Alternating, Case, CaseRange, FoldPair, InvalidCaseError, Uniform, UpperLower
from uletter.letter import AzeriCase, Letter, SpecialCase, TurkishCase, defaultLetter
from uletter.ranges import MaxAscii, MaxLatin1, MaxRune, Range16, Range32, RangeTable, ReplacementChar, TableError, inRange, isOneOf
from uletter.tables import CharClass, UnicodeTables, defaultTables, loadGenerated

# module-level functions operate on the process-wide default tables (built on first use)
def isUpper(rune: int) -> bool:
	return defaultLetter().isUpper(rune)
def isLower(rune: int) -> bool:
	return defaultLetter().isLower(rune)
def isTitle(rune: int) -> bool:
	return defaultLetter().isTitle(rune)
def isLetter(rune: int) -> bool:
	return defaultLetter().isLetter(rune)
def to(toCase: int, rune: int) -> int:
	return defaultLetter().to(toCase, rune)
def toUpper(rune: int) -> int:
	return defaultLetter().toUpper(rune)
def toLower(rune: int) -> int:
	return defaultLetter().toLower(rune)
def toTitle(rune: int) -> int:
	return defaultLetter().toTitle(rune)
def simpleFold(rune: int) -> int:
	return defaultLetter().simpleFold(rune)

__all__ = [
	'Alternating', 'AzeriCase', 'Case', 'CaseRange', 'CharClass', 'FoldPair', 'InvalidCaseError', 'Letter',
	'MaxAscii', 'MaxLatin1', 'MaxRune', 'Range16', 'Range32', 'RangeTable', 'ReplacementChar', 'SpecialCase',
	'TableError', 'TurkishCase', 'Uniform', 'UnicodeTables', 'UpperLower', 'defaultLetter', 'defaultTables',
	'inRange', 'isLetter', 'isLower', 'isOneOf', 'isTitle', 'isUpper', 'loadGenerated', 'simpleFold',
	'to', 'toLower', 'toTitle', 'toUpper'
]
