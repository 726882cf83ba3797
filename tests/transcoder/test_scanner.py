from svgshield.transcoder.scanner import find_closing_brace, scan_expression


def test_simple_expression():
    assert scan_expression("{size}", 0) == (6, "size")


def test_nested_braces_are_balanced():
    text = "{a{b}c} tail"
    assert scan_expression(text, 0) == (7, "a{b}c")


def test_depth_is_seeded_at_one():
    # start points just past the opening brace
    assert find_closing_brace("a}b", 0) == 1


def test_braces_inside_strings_do_not_count():
    assert scan_expression('{"}"}', 0) == (5, '"}"')
    assert scan_expression("{'{'}", 0) == (5, "'{'")


def test_backtick_template():
    text = "{`${a}`}"
    assert scan_expression(text, 0) == (8, "`${a}`")


def test_escaped_quote_does_not_close_string():
    text = "{'a\\'}'}"
    assert scan_expression(text, 0) == (len(text), "'a\\'}'")


def test_unbalanced_returns_none():
    assert scan_expression("{a", 0) is None
    assert scan_expression("{a{b}", 0) is None


def test_unterminated_string_returns_none():
    assert scan_expression('{"}', 0) is None


def test_offset_in_larger_text():
    text = '<svg width={w + 1}>'
    open_index = text.index("{")
    end, inner = scan_expression(text, open_index)
    assert inner == "w + 1"
    assert text[end] == ">"


def test_quote_inside_block_comment_is_ignored():
    assert scan_expression("{/* don't touch */}", 0) == (19, "/* don't touch */")
    assert scan_expression("{/* } */ a}", 0) == (11, "/* } */ a")


def test_line_comment_runs_to_end_of_line():
    text = "{a // it's a } note\n}"
    assert scan_expression(text, 0) == (len(text), "a // it's a } note\n")


def test_unterminated_line_comment_swallows_the_brace():
    assert scan_expression("{a // x}", 0) is None


def test_slash_in_string_is_not_a_comment():
    assert scan_expression('{"//"}', 0) == (6, '"//"')
