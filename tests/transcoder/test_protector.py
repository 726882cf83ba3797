from svgshield.transcoder.attributes import BOOLEAN, PlainAttribute, ProtectedAttribute
from svgshield.transcoder.lexer import iter_start_tags, tokenize
from svgshield.transcoder.protector import classify_attribute, protect_attributes, unprotect_attributes


def _attrs(text):
    (tag,) = iter_start_tags(tokenize(text))
    return tag.attributes


def test_classify():
    plain, directive, boolean, ph = _attrs(
        '<svg fill=\'red\' :x="y" client:only stroke="__JSX_BASE64__YQ==__">'
    )
    assert classify_attribute(plain) == PlainAttribute("fill", "red", "'")
    assert classify_attribute(directive) == ProtectedAttribute(":x", "y")
    assert classify_attribute(boolean) == ProtectedAttribute("client:only", BOOLEAN)
    assert classify_attribute(ph) == ProtectedAttribute("stroke", "__JSX_BASE64__YQ==__")


def test_directive_is_renamed():
    out = protect_attributes('<svg v-bind:width="size"></svg>')
    assert out == '<svg data-svgshield-p-v-bind__COLON__width="size"></svg>'


def test_event_shorthand():
    assert protect_attributes('<svg @click="f"></svg>') == '<svg data-svgshield-p-__AT__click="f"></svg>'


def test_boolean_directive_gets_sentinel():
    out = protect_attributes('<svg client:only xmlns="x"></svg>')
    assert out == '<svg data-svgshield-p-client__COLON__only="__BOOLEAN__" xmlns="x"></svg>'


def test_placeholder_value_is_protected():
    out = protect_attributes('<path fill="__JSX_BASE64__YQ==__"/>')
    assert out == '<path data-svgshield-p-fill="__JSX_BASE64__YQ==__"/>'


def test_namespaced_and_plain_attributes_untouched():
    text = '<svg xmlns:xlink="x" xml:space="preserve" width="1"><use xlink:href="#a"/></svg>'
    assert protect_attributes(text) == text


def test_unprotect_restores_bare_boolean():
    out = unprotect_attributes('<svg data-svgshield-p-client__COLON__only="__BOOLEAN__" xmlns="x"></svg>')
    assert out == '<svg client:only xmlns="x"></svg>'
    assert "__BOOLEAN__" not in out


def test_unprotect_when_optimizer_dropped_the_value():
    assert unprotect_attributes("<svg data-svgshield-p-client__COLON__only></svg>") == "<svg client:only></svg>"


def test_unprotect_leaves_undecodable_names():
    text = '<svg data-svgshield-p-x__ZZZ__="1" data-other="2"></svg>'
    assert unprotect_attributes(text) == text


def test_round_trip():
    text = '<svg :a="1" @b.stop="f()" on:click|once={x} transition:fade v-bind:[key]="v" width="2"></svg>'
    assert unprotect_attributes(protect_attributes(text)) == text
