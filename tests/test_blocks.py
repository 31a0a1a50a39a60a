import voxelseq.blocks


PatternKind = voxelseq.blocks.PatternKind


def test_single_statement ():

	"""A $: statement yields one block with kind, body and modifiers."""

	blocks = voxelseq.blocks.extract_blocks('$: note("c4 e4 g4").slow(2)')

	assert blocks == [voxelseq.blocks.PatternBlock(PatternKind.NOTE, "c4 e4 g4", ".slow(2)")]


def test_multiple_statements_in_order ():

	"""Each delimiter starts a new block, in source order."""

	code = """
	setcps(0.5)
	$: s("bd sd")
	$: n("0 2 4").scale('d:major')
	$: sound(`hh*4`)
	"""

	blocks = voxelseq.blocks.extract_blocks(code)

	assert [block.kind for block in blocks] == [PatternKind.SOUND, PatternKind.DEGREE, PatternKind.SOUND]
	assert [block.body for block in blocks] == ["bd sd", "0 2 4", "hh*4"]
	assert blocks[1].modifiers == ".scale('d:major')"


def test_statement_without_constructor_is_dropped ():

	"""Statements with no recognised call are skipped."""

	blocks = voxelseq.blocks.extract_blocks('$: stack()\n$: s("bd")')

	assert len(blocks) == 1
	assert blocks[0].body == "bd"


def test_constructor_name_is_case_insensitive ():

	"""NOTE(...) is read as note(...)."""

	blocks = voxelseq.blocks.extract_blocks('$: NOTE("c4")')

	assert blocks[0].kind is PatternKind.NOTE


def test_constructor_must_be_whole_identifier ():

	"""gain("0.5") is not mistaken for n("0.5")."""

	blocks = voxelseq.blocks.extract_blocks('$: gain("0.5").n("1 2")')

	assert blocks[0].kind is PatternKind.DEGREE
	assert blocks[0].body == "1 2"


def test_first_call_wins ():

	"""When several constructors are chained, the first one fixes the kind."""

	blocks = voxelseq.blocks.extract_blocks('$: note("c4 e4").s("piano")')

	assert blocks[0].kind is PatternKind.NOTE
	assert blocks[0].modifiers == '.s("piano")'


def test_whole_text_fallback_without_delimiter ():

	"""A source with no $: is searched once as a whole."""

	blocks = voxelseq.blocks.extract_blocks('note("c4 e4 g4 c5").fast(2)')

	assert blocks == [voxelseq.blocks.PatternBlock(PatternKind.NOTE, "c4 e4 g4 c5", ".fast(2)")]


def test_default_block_when_nothing_matches ():

	"""No recognised call anywhere gives the default drum block."""

	for code in ("", "   ", "hello world", '$: stack()', 'note()', 'note("")', 's("bd"'):
		assert voxelseq.blocks.extract_blocks(code) == [voxelseq.blocks.DEFAULT_BLOCK]


def test_mismatched_quotes_do_not_match ():

	"""The closing quote must be the same character as the opening one."""

	blocks = voxelseq.blocks.extract_blocks('''$: s("bd')''')

	assert blocks == [voxelseq.blocks.DEFAULT_BLOCK]


def test_whitespace_inside_call ():

	"""Whitespace around the parenthesis and quotes is allowed."""

	blocks = voxelseq.blocks.extract_blocks('$: s ( "bd sd" ) .fast(2)')

	assert blocks[0].body == "bd sd"
	assert blocks[0].modifiers == " .fast(2)"


def test_default_block_contents ():

	"""The default block is a sound pattern."""

	assert voxelseq.blocks.DEFAULT_BLOCK.kind is PatternKind.SOUND
	assert voxelseq.blocks.DEFAULT_BLOCK.body == "bd [sd hh] bd sd"
	assert voxelseq.blocks.DEFAULT_BLOCK.modifiers == ""


def test_apostrophe_in_comment_before_call ():

	"""A // comment containing an apostrophe does not hide the call after it."""

	assert voxelseq.blocks.extract_blocks('// it\'s a melody\nnote("c4 e4")') == [voxelseq.blocks.PatternBlock(PatternKind.NOTE, "c4 e4", "")]

	blocks = voxelseq.blocks.extract_blocks('$: // kick\'s line\ns("bd sd")')

	assert blocks == [voxelseq.blocks.PatternBlock(PatternKind.SOUND, "bd sd", "")]


def test_unpaired_quote_is_ordinary_text ():

	"""A stray apostrophe outside a comment is stepped over."""

	blocks = voxelseq.blocks.extract_blocks('$: let\'s go s("hh")')

	assert blocks[0].kind is PatternKind.SOUND
	assert blocks[0].body == "hh"


def test_call_inside_comment_is_ignored ():

	"""A commented-out call does not count; the next line does."""

	blocks = voxelseq.blocks.extract_blocks('$: // note("c4")\nn("0 2")')

	assert blocks[0].kind is PatternKind.DEGREE
	assert blocks[0].body == "0 2"


def test_delimiter_inside_body_does_not_split ():

	"""Only a $: at the start of a line begins a new statement."""

	blocks = voxelseq.blocks.extract_blocks('$: s("bd $: sd")\n$: note("c4")')

	assert [block.body for block in blocks] == ["bd $: sd", "c4"]


def test_split_statements ():

	"""The preamble is dropped and line-leading delimiters split statements."""

	code = 'setcps(1)\n$: s("a $: b")\n  $: note("c4")'

	assert voxelseq.blocks.split_statements(code) == ['s("a $: b")', 'note("c4")']
	assert voxelseq.blocks.split_statements('note("c4")') == []
