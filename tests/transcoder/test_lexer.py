from svgshield.transcoder.lexer import QuoteKind, TokenKind, iter_start_tags, tokenize


def _kinds(text, **kwargs):
    return [t.kind for t in tokenize(text, **kwargs)]


def test_tokens_cover_input_exactly():
    text = '<?xml version="1.0"?><!-- c --><svg a="1">{x} text <![CDATA[<raw>]]></svg> tail {'
    assert "".join(t.text for t in tokenize(text)) == text


def test_attribute_quote_kinds():
    (tag,) = iter_start_tags(tokenize("<svg a=\"1\" b='2' c=3 d e={x}>"))
    attrs = {a.name: a for a in tag.attributes}
    assert attrs["a"].quote is QuoteKind.DOUBLE and attrs["a"].value == "1"
    assert attrs["b"].quote is QuoteKind.SINGLE and attrs["b"].value == "2"
    assert attrs["c"].quote is QuoteKind.UNQUOTED and attrs["c"].value == "3"
    assert attrs["d"].is_boolean and attrs["d"].value is None
    assert attrs["e"].is_expression and attrs["e"].value == "x"


def test_attribute_spans():
    text = '<svg width="10">'
    (tag,) = iter_start_tags(tokenize(text))
    (attr,) = tag.attributes
    assert text[attr.start:attr.end] == 'width="10"'
    assert text[attr.start:attr.name_end] == "width"
    assert text[attr.value_start:attr.value_end] == '"10"'


def test_angle_brackets_inside_expressions():
    text = "<svg onClick={() => a > b}>{a < b ? <g/> : null}</svg>"
    toks = tokenize(text)
    assert [t.kind for t in toks] == [TokenKind.START_TAG, TokenKind.EXPRESSION, TokenKind.END_TAG]
    assert toks[0].attributes[0].value == "() => a > b"


def test_attribute_blocks():
    (tag,) = iter_start_tags(tokenize("<svg {...rest} {/* note */} width=\"1\">"))
    assert [b.inner for b in tag.blocks] == ["...rest", "/* note */"]
    assert tag.blocks[0].is_spread
    assert tag.blocks[1].is_comment
    assert [a.name for a in tag.attributes] == ["width"]


def test_jsx_comment_in_text():
    assert _kinds("<g>{/* hidden */}</g>") == [TokenKind.START_TAG, TokenKind.JSX_COMMENT, TokenKind.END_TAG]


def test_style_is_raw_text():
    toks = tokenize("<svg><style>.a{fill:red}</style></svg>")
    assert [t.kind for t in toks] == [
        TokenKind.START_TAG, TokenKind.START_TAG, TokenKind.RAW_TEXT, TokenKind.END_TAG, TokenKind.END_TAG,
    ]
    assert toks[2].text == ".a{fill:red}"


def test_raw_text_elements_are_configurable():
    kinds = _kinds("<style>.a{fill:red}</style>", raw_text_elements=())
    assert TokenKind.EXPRESSION in kinds


def test_unbalanced_brace_is_text():
    toks = tokenize("<svg>{ oops</svg>")
    assert [t.kind for t in toks] == [TokenKind.START_TAG, TokenKind.TEXT, TokenKind.END_TAG]
    assert toks[1].text == "{ oops"


def test_unbalanced_attribute_expression_falls_back_to_unquoted():
    (tag,) = iter_start_tags(tokenize("<svg width={oops></svg>"))
    (attr,) = tag.attributes
    assert attr.quote is QuoteKind.UNQUOTED
    assert attr.value == "{oops"


def test_self_closing_and_names():
    toks = tokenize('<svg><path d="M0 0"/></svg>')
    assert toks[1].name == "path"
    assert toks[1].self_closing
    assert toks[2].kind is TokenKind.END_TAG and toks[2].name == "svg"


def test_stray_less_than_is_text():
    toks = tokenize("<text>a < b</text>")
    assert [t.kind for t in toks] == [TokenKind.START_TAG, TokenKind.TEXT, TokenKind.END_TAG]
    assert toks[1].text == "a < b"
