# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import enum
import importlib.util
import os
import threading

from uletter.casing import CaseRange, FoldPair, checkCaseRanges, checkFoldPairs
from uletter.ranges import MaxAscii, MaxLatin1, RangeTable, TableError

class CharClass(enum.IntFlag):
	pC = 1 << 0   # control character
	pP = 1 << 1   # punctuation
	pN = 1 << 2   # numeral
	pS = 1 << 3   # symbol
	pZ = 1 << 4   # spacing character
	pLu = 1 << 5  # upper-case letter
	pLl = 1 << 6  # lower-case letter
	pLo = pLu | pLl  # letter that is neither upper nor lower case
	pLmask = pLo

# immutable bundle of all tables consumed by the classification and mapping functions
class UnicodeTables:
	def __init__(self, upper: RangeTable, lower: RangeTable, title: RangeTable, letter: RangeTable, caseRanges: tuple[CaseRange, ...],
			  caseOrbit: tuple[FoldPair, ...], asciiFold: tuple[int, ...], properties: tuple[int, ...], version: str = 'unknown') -> None:
		self.upper = upper
		self.lower = lower
		self.title = title
		self.letter = letter
		self.caseRanges = tuple(caseRanges)
		self.caseOrbit = tuple(FoldPair(*p) for p in caseOrbit)
		self.asciiFold = tuple(asciiFold)
		self.properties = tuple(properties)
		self.version = version
	def __repr__(self) -> str:
		return f'UnicodeTables(version={self.version!r}, caseRanges={len(self.caseRanges)}, caseOrbit={len(self.caseOrbit)})'

	def validate(self) -> 'UnicodeTables':
		for table in [self.upper, self.lower, self.title, self.letter]:
			table.validate()
		checkCaseRanges(self.caseRanges)
		checkFoldPairs(self.caseOrbit)
		if len(self.asciiFold) != MaxAscii + 1:
			raise TableError(f'Ascii fold table must have [{MaxAscii + 1}] entries but has [{len(self.asciiFold)}]')
		if len(self.properties) != MaxLatin1 + 1:
			raise TableError(f'Properties table must have [{MaxLatin1 + 1}] entries but has [{len(self.properties)}]')
		return self

# language-specific mappings for Turkish and Azeri (dotted and dotless i)
TurkishRanges: tuple[CaseRange, ...] = (
	CaseRange.fromDeltas(0x0049, 0x004a, 0, 0x131 - 0x49, 0),
	CaseRange.fromDeltas(0x0069, 0x006a, 0x130 - 0x69, 0, 0x130 - 0x69),
	CaseRange.fromDeltas(0x0130, 0x0131, 0, 0x69 - 0x130, 0),
	CaseRange.fromDeltas(0x0131, 0x0132, 0x49 - 0x131, 0, 0x49 - 0x131),
)

# import a module written by uletter.generate and return the tables it defines
def loadGenerated(path: str) -> UnicodeTables:
	moduleSpec = importlib.util.spec_from_file_location('uletter_generated_tables', path)
	if moduleSpec is None or moduleSpec.loader is None:
		raise TableError(f'Unable to load generated tables [{path}]')
	module = importlib.util.module_from_spec(moduleSpec)
	moduleSpec.loader.exec_module(module)

	# check that the module actually contains the expected tables
	tables = getattr(module, 'Tables', None)
	if not isinstance(tables, UnicodeTables):
		raise TableError(f'Generated module does not define the tables [{path}]')
	return tables.validate()

_defaultLock = threading.RLock()
_defaultTables: UnicodeTables|None = None

# process-wide tables: generated module from ULETTER_TABLES if set, otherwise built from the interpreter database
def defaultTables() -> UnicodeTables:
	global _defaultTables
	if _defaultTables is not None:
		return _defaultTables
	with _defaultLock:
		if _defaultTables is None:
			path = os.environ.get('ULETTER_TABLES', '')
			if path != '':
				_defaultTables = loadGenerated(path)
			else:
				from uletter.build import buildTables
				from uletter.ucd import InterpreterSource
				_defaultTables = buildTables(InterpreterSource())
	return _defaultTables
