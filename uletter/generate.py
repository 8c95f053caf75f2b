# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import datetime
import sys

from uletter.build import buildTables
from uletter.casing import CaseRange, FoldPair
from uletter.ranges import RangeTable
from uletter.tables import UnicodeTables
from uletter.ucd import DownloadUCDFiles, InterpreterSource, UCDSource

# added to all generated files
copyrightLines = [
	'# SPDX-License-Identifier: BSD-3-Clause',
	f'# Copyright (c) {datetime.datetime.now().year} Bjoern Boss Henrichsen'
]

GeneratedURLOrigin = 'https://www.unicode.org/Public/UCD/latest'

class SystemConfig:
	def __init__(self, url: str, version: str, date: str) -> None:
		self.url = url
		self.version = version
		self.date = date

class GeneratedFile:
	RangesPerLine: int = 4
	ValuesPerLine: int = 8

	def __init__(self, path: str, config: SystemConfig) -> None:
		self._path = path
		self._config = config
		self._file = None
		self._hadFirstBlock = False
	def __enter__(self) -> 'GeneratedFile':
		self._file = open(self._path, mode='w', encoding='ascii')

		# add the copy-right header
		for line in copyrightLines:
			self.writeln(line)
		self._writeComment('This is an automatically generated file and should not be modified.\n'
				  + 'All data are based on the information provided by the unicode character database.\n'
				  + f'Source: {self._config.url}\n'
				  + f'Generated on: {self._config.date}\n'
				  + f'Generated from version: {self._config.version}')
		self.writeln('from uletter.casing import Alternating, CaseRange, FoldPair, Uniform')
		self.writeln('from uletter.ranges import Range16, Range32, RangeTable')
		self.writeln('from uletter.tables import UnicodeTables')
		return self
	def __exit__(self, *args) -> bool:
		if self._file is not None:
			self._file.close()
		self._file = None
		return False
	def _writeComment(self, msg: str) -> None:
		for line in msg.split('\n'):
			self.writeln(f'# {line}')
	def _writeItems(self, items: list[str], perLine: int) -> None:
		for i in range(0, len(items), perLine):
			self.writeln('\t\t' + ' '.join(f'{item},' for item in items[i:i + perLine]))
	def writeln(self, msg: str) -> None:
		self._file.write(f'{msg}\n')
	def beginBlock(self, msg: str) -> None:
		# ensure an indentation of two newlines to the last block
		self.writeln('\n' if self._hadFirstBlock else '')
		self._hadFirstBlock = True
		self._writeComment(msg)

	def rangeTable(self, name: str, desc: str, table: RangeTable) -> None:
		self.beginBlock(desc)
		self.writeln(f'{name} = RangeTable(')
		self.writeln('\tr16=(')
		self._writeItems([f'Range16(0x{r.lo:04x}, 0x{r.hi:04x}, {r.stride})' for r in table.r16], GeneratedFile.RangesPerLine)
		self.writeln('\t),')
		self.writeln('\tr32=(')
		self._writeItems([f'Range32(0x{r.lo:05x}, 0x{r.hi:05x}, {r.stride})' for r in table.r32], GeneratedFile.RangesPerLine)
		self.writeln('\t),')
		self.writeln(f'\tlatinOffset={table.latinOffset}')
		self.writeln(')')
	def caseRanges(self, name: str, desc: str, ranges: tuple[CaseRange, ...]) -> None:
		self.beginBlock(desc)
		self.writeln(f'{name} = (')
		for cr in ranges:
			self.writeln(f'\tCaseRange(0x{cr.lo:04x}, 0x{cr.hi:04x}, ({", ".join(repr(d) for d in cr.deltas)})),')
		self.writeln(')')
	def foldPairs(self, name: str, desc: str, pairs: tuple[FoldPair, ...]) -> None:
		self.beginBlock(desc)
		self.writeln(f'{name} = (')
		self._writeItems([f'FoldPair(0x{p.fromRune:04x}, 0x{p.toRune:04x})' for p in pairs], GeneratedFile.RangesPerLine)
		self.writeln(')')
	def intList(self, name: str, desc: str, values: tuple[int, ...]) -> None:
		self.beginBlock(desc)
		self.writeln(f'{name} = (')
		self._writeItems([f'0x{v:04x}' for v in values], GeneratedFile.ValuesPerLine)
		self.writeln(')')

def WriteTables(outPath: str, tables: UnicodeTables, config: SystemConfig) -> None:
	print(f'Writing tables to [{outPath}]...')
	with GeneratedFile(outPath, config) as file:
		file.rangeTable('Upper', 'Automatically generated from: Unicode General_Category is Lu', tables.upper)
		file.rangeTable('Lower', 'Automatically generated from: Unicode General_Category is Ll', tables.lower)
		file.rangeTable('Title', 'Automatically generated from: Unicode General_Category is Lt', tables.title)
		file.rangeTable('Letter', 'Automatically generated from: Unicode General_Category is Lu, Ll, Lt, Lm or Lo', tables.letter)
		file.caseRanges('CaseRanges', 'Automatically generated from: simple upper/lower/title mappings (half-open ranges [lo, hi))', tables.caseRanges)
		file.foldPairs('CaseOrbit', 'Automatically generated from: simple case-folding classes not covered by lower/upper mappings', tables.caseOrbit)
		file.intList('AsciiFold', 'Automatically generated from: simple case-folding successor of every ascii code point', tables.asciiFold)
		file.intList('Properties', 'Automatically generated from: Unicode General_Category of every latin-1 code point', tables.properties)

		# bundle all tables together
		file.beginBlock('All tables combined')
		file.writeln('Tables = UnicodeTables(')
		file.writeln('\tupper=Upper, lower=Lower, title=Title, letter=Letter,')
		file.writeln('\tcaseRanges=CaseRanges, caseOrbit=CaseOrbit, asciiFold=AsciiFold, properties=Properties,')
		file.writeln(f'\tversion={tables.version!r}')
		file.writeln(')')

def _option(argv: list[str], name: str, default: str) -> str:
	if name not in argv:
		return default
	index = argv.index(name)
	if index + 1 >= len(argv):
		raise RuntimeError(f'Missing value for option [{name}]')
	return argv[index + 1]

def main(argv: list[str]|None = None) -> int:
	argv = (sys.argv[1:] if argv is None else argv)
	doRefresh: bool = ('--refresh' in argv)
	doInterpreter: bool = ('--interpreter' in argv)
	outPath: str = _option(argv, '--out', 'unicode_tables.py')
	ucdPath: str = _option(argv, '--ucd', './ucd')
	print('Hint: use --refresh to download already cached files again')
	print('Hint: use --interpreter to generate the tables from the interpreter unicode database')
	print('Hint: use --out <path> to select the generated file and --ucd <dir> to select the download directory')

	# fetch the character source (downloading the ucd files if necessary)
	if doInterpreter:
		source, url = InterpreterSource(verbose=True), 'python unicodedata'
	else:
		version, mapping = DownloadUCDFiles(doRefresh, GeneratedURLOrigin, ucdPath)
		source, url = UCDSource(mapping, version), GeneratedURLOrigin

	tables = buildTables(source, verbose=True)
	WriteTables(outPath, tables, SystemConfig(url, tables.version, datetime.datetime.today().strftime('%Y-%m-%d %H:%M')))
	return 0

if __name__ == '__main__':
	sys.exit(main())
