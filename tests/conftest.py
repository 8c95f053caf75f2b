# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import os

import pytest

from uletter.build import buildTables
from uletter.ranges import MaxAscii, MaxLatin1, RangeTable
from uletter.tables import UnicodeTables
from uletter.ucd import UCDSource

DataPath = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')

@pytest.fixture
def makeTables():
	"""Factory for small synthetic tables, every table defaults to empty."""
	def _make(upper: RangeTable|None = None, lower: RangeTable|None = None, title: RangeTable|None = None, letter: RangeTable|None = None,
		   caseRanges: tuple = (), caseOrbit: tuple = (), asciiFold: tuple|None = None, properties: tuple|None = None) -> UnicodeTables:
		return UnicodeTables(
			upper=upper or RangeTable(),
			lower=lower or RangeTable(),
			title=title or RangeTable(),
			letter=letter or RangeTable(),
			caseRanges=caseRanges,
			caseOrbit=caseOrbit,
			asciiFold=asciiFold or tuple(range(MaxAscii + 1)),
			properties=properties or (0,) * (MaxLatin1 + 1),
			version='synthetic'
		).validate()
	return _make

@pytest.fixture(scope='session')
def ucdDirectory() -> str:
	return DataPath

@pytest.fixture(scope='session')
def ucdSource(ucdDirectory: str) -> UCDSource:
	return UCDSource.fromDirectory(ucdDirectory)

@pytest.fixture(scope='session')
def ucdTables(ucdSource: UCDSource) -> UnicodeTables:
	"""Tables built from the excerpt of the unicode character database in tests/data."""
	return buildTables(ucdSource)
