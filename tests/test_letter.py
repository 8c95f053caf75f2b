# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import pytest

from uletter.casing import Case, CaseRange, FoldPair, InvalidCaseError, UpperLower
from uletter.letter import Letter, SpecialCase
from uletter.ranges import MaxLatin1, Range16, RangeTable, TableError
from uletter.tables import CharClass, TurkishRanges

@pytest.fixture
def alternatingLetter(makeTables) -> Letter:
	return Letter(makeTables(caseRanges=(
		CaseRange.fromDeltas(0x0100, 0x0130, UpperLower, UpperLower, UpperLower),
		CaseRange.fromDeltas(0x0391, 0x03a2, 0, 32, 0),
		CaseRange.fromDeltas(0x03b1, 0x03c2, -32, 0, -32),
	)))

class TestCaseConversion:
	def test_ascii_fast_path(self, makeTables):
		letter = Letter(makeTables())
		assert letter.toUpper(ord('a')) == ord('A')
		assert letter.toLower(ord('Z')) == ord('z')
		assert letter.toTitle(ord('a')) == ord('A')
		assert letter.toUpper(ord('{')) == ord('{')
		assert letter.toLower(ord('@')) == ord('@')

	def test_ascii_letters_are_mutual_inverses(self, makeTables):
		letter = Letter(makeTables())
		for c in list(range(ord('A'), ord('Z') + 1)) + list(range(ord('a'), ord('z') + 1)):
			assert letter.toLower(letter.toUpper(c)) == letter.toLower(c)
			assert letter.toUpper(letter.toLower(c)) == letter.toUpper(c)

	def test_alternating_sequence(self, alternatingLetter):
		lo = 0x0100
		assert alternatingLetter.toUpper(lo) == lo
		assert alternatingLetter.toLower(lo) == lo + 1
		assert alternatingLetter.toUpper(lo + 1) == lo
		assert alternatingLetter.toLower(lo + 2) == lo + 3
		assert alternatingLetter.toTitle(lo + 3) == lo + 2
		assert alternatingLetter.toLower(lo + 3) == lo + 3

	def test_alternating_last_entry_and_half_open_bound(self, alternatingLetter):
		assert alternatingLetter.toUpper(0x012f) == 0x012e
		assert alternatingLetter.toLower(0x012e) == 0x012f
		assert alternatingLetter.toLower(0x0130) == 0x0130

	def test_uniform_deltas(self, alternatingLetter):
		assert alternatingLetter.toLower(0x0391) == 0x03b1
		assert alternatingLetter.toUpper(0x0391) == 0x0391
		assert alternatingLetter.toUpper(0x03c1) == 0x03a1
		assert alternatingLetter.toTitle(0x03b1) == 0x0391
		assert alternatingLetter.toUpper(0x03c2) == 0x03c2

	def test_unmapped_runes_are_unchanged(self, alternatingLetter):
		for rune in [0x0080, 0x00ff, 0x0200, 0x4e00, 0x10ffff, 0x110000]:
			assert alternatingLetter.toUpper(rune) == rune
			assert alternatingLetter.toLower(rune) == rune
			assert alternatingLetter.toTitle(rune) == rune

	def test_generic_to(self, alternatingLetter):
		assert alternatingLetter.to(Case.Upper, ord('q')) == ord('Q')
		assert alternatingLetter.to(Case.Lower, 0x0102) == 0x0103
		assert alternatingLetter.to(2, 0x03b2) == 0x0392

	@pytest.mark.parametrize('toCase', [-1, 3, 'upper', None, True])
	def test_invalid_case_selector(self, alternatingLetter, toCase):
		with pytest.raises(InvalidCaseError):
			alternatingLetter.to(toCase, ord('a'))

	def test_invalid_case_is_value_error(self):
		assert issubclass(InvalidCaseError, ValueError)

class TestClassification:
	@pytest.fixture
	def letter(self, makeTables) -> Letter:
		properties = [0] * (MaxLatin1 + 1)
		for c in range(ord('A'), ord('Z') + 1):
			properties[c] = CharClass.pLu
		for c in range(ord('a'), ord('z') + 1):
			properties[c] = CharClass.pLl
		for c in range(ord('0'), ord('9') + 1):
			properties[c] = CharClass.pN
		properties[0xaa] = CharClass.pLo
		properties[0xff] = CharClass.pLl
		return Letter(makeTables(
			upper=RangeTable(r16=(Range16(0x41, 0x5a), Range16(0x100, 0x12e, 2))),
			lower=RangeTable(r16=(Range16(0x61, 0x7a), Range16(0xff, 0xff), Range16(0x101, 0x12f, 2))),
			title=RangeTable(r16=(Range16(0x1c5, 0x1cb, 3),)),
			letter=RangeTable(r16=(Range16(0x41, 0x5a), Range16(0x61, 0x7a), Range16(0xaa, 0xaa), Range16(0xff, 0x12f))),
			properties=tuple(properties)
		))

	def test_latin1_uses_properties(self, letter):
		assert letter.isUpper(ord('Q'))
		assert not letter.isLower(ord('Q'))
		assert letter.isLower(ord('q'))
		assert not letter.isUpper(ord('q'))
		assert not letter.isTitle(ord('Q'))
		assert not letter.isUpper(0xaa)
		assert not letter.isLower(0xaa)
		assert letter.isLetter(0xaa)

	def test_digits_are_neither_case(self, letter):
		for c in range(ord('0'), ord('9') + 1):
			assert not letter.isUpper(c)
			assert not letter.isLower(c)
			assert not letter.isTitle(c)
			assert not letter.isLetter(c)
			assert letter.toUpper(c) == c
			assert letter.toLower(c) == c
			assert letter.toTitle(c) == c

	def test_latin1_seam(self, letter):
		assert letter.isLower(MaxLatin1)
		assert not letter.isUpper(MaxLatin1)
		assert letter.isUpper(MaxLatin1 + 1)
		assert not letter.isLower(MaxLatin1 + 1)
		assert letter.isLower(MaxLatin1 + 2)

	def test_range_tables_above_latin1(self, letter):
		assert letter.isTitle(0x1c5)
		assert letter.isTitle(0x1c8)
		assert not letter.isTitle(0x1c6)
		assert letter.isLetter(0x110)
		assert not letter.isLetter(0x130)

	def test_out_of_range_runes(self, letter):
		for rune in [-1, -2, 0x110000]:
			assert not letter.isUpper(rune)
			assert not letter.isLower(rune)
			assert not letter.isTitle(rune)
			assert not letter.isLetter(rune)

	def test_compat_lower_reproduces_legacy_check(self, letter):
		legacy = Letter(letter.tables, compatLower=True)
		assert legacy.isLower(ord('Q'))
		assert not legacy.isLower(ord('q'))
		assert legacy.isLower(0x101) == letter.isLower(0x101)

class TestSpecialCase:
	@pytest.fixture
	def standard(self, makeTables) -> Letter:
		return Letter(makeTables(caseRanges=(
			CaseRange.fromDeltas(0x0130, 0x0131, 0, -199, 0),
			CaseRange.fromDeltas(0x0131, 0x0132, -232, 0, -232),
		)))

	def test_special_mapping_has_priority(self, standard):
		turkish = SpecialCase(TurkishRanges, standard)
		assert turkish.toUpper(ord('i')) == 0x0130
		assert turkish.toTitle(ord('i')) == 0x0130
		assert turkish.toLower(ord('I')) == 0x0131
		assert turkish.toUpper(0x0131) == ord('I')
		assert turkish.toLower(0x0130) == ord('i')

	def test_falls_back_to_standard_mapping(self, standard):
		turkish = standard.special(SpecialCase(TurkishRanges))
		assert turkish.toUpper(ord('a')) == ord('A')
		assert turkish.toLower(ord('Z')) == ord('z')
		assert turkish.toUpper(ord('I')) == ord('I')
		assert turkish.toLower(ord('i')) == ord('i')
		assert turkish.toLower(0x0130) == ord('i')
		assert turkish.toUpper(0x4e00) == 0x4e00

	def test_invalid_case(self, standard):
		with pytest.raises(InvalidCaseError):
			SpecialCase(TurkishRanges, standard).to(7, ord('i'))

	def test_unsorted_ranges_are_rejected(self):
		with pytest.raises(TableError):
			SpecialCase((CaseRange.fromDeltas(0x69, 0x6a, 1, 0, 1), CaseRange.fromDeltas(0x49, 0x4a, 0, 1, 0)))

	def test_overlapping_ranges_are_rejected(self):
		with pytest.raises(TableError):
			SpecialCase((CaseRange.fromDeltas(0x40, 0x50, 1, 0, 1), CaseRange.fromDeltas(0x49, 0x4a, 0, 1, 0)))

class TestSimpleFold:
	@pytest.fixture
	def letter(self, makeTables) -> Letter:
		asciiFold = list(range(128))
		for c in range(ord('A'), ord('Z') + 1):
			asciiFold[c], asciiFold[c + 32] = c + 32, c
		asciiFold[ord('k')] = 0x212a
		asciiFold[ord('s')] = 0x017f
		return Letter(makeTables(
			caseRanges=(
				CaseRange.fromDeltas(0x00c0, 0x00d7, 0, 32, 0),
				CaseRange.fromDeltas(0x00e0, 0x00f7, -32, 0, -32),
				CaseRange.fromDeltas(0x017f, 0x0180, -300, 0, -300),
				CaseRange.fromDeltas(0x212a, 0x212b, 0, -8383, 0),
			),
			caseOrbit=(FoldPair(0x004b, 0x006b), FoldPair(0x0053, 0x0073), FoldPair(0x006b, 0x212a), FoldPair(0x0073, 0x017f),
					   FoldPair(0x017f, 0x0053), FoldPair(0x212a, 0x004b)),
			asciiFold=tuple(asciiFold)
		))

	@pytest.mark.parametrize('start, cycle', [
		(ord('A'), [ord('a')]),
		(ord('K'), [ord('k'), 0x212a]),
		(ord('S'), [ord('s'), 0x017f]),
		(0x00c0, [0x00e0]),
		(ord('1'), []),
	])
	def test_fold_enumerates_closed_cycle(self, letter, start, cycle):
		rune, seen = start, []
		for _ in range(len(cycle) + 1):
			rune = letter.simpleFold(rune)
			seen.append(rune)
		assert seen == cycle + [start]

	def test_out_of_range_is_identity(self, letter):
		assert letter.simpleFold(-2) == -2
		assert letter.simpleFold(0x10ffff) == 0x10ffff
		assert letter.simpleFold(0x110000) == 0x110000

	def test_unrelated_rune_is_identity(self, letter):
		assert letter.simpleFold(0x4e00) == 0x4e00
