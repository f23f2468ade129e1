"""Unit tests for the markup tokenizer."""

import time

import pytest

from htmlmd.parser.tokenizer import tokenize
from htmlmd.parser.tokens import Comment, EndTag, SelfClosingTag, StartTag, Text


class TestTags:
    def test_start_text_end(self):
        tokens = list(tokenize("<p>Hello</p>"))
        assert tokens == [StartTag("p", {}), Text("Hello"), EndTag("p")]

    def test_names_are_lower_cased(self):
        tokens = list(tokenize("<DIV Class='x'></Div>"))
        assert tokens == [StartTag("div", {"class": "x"}), EndTag("div")]

    def test_self_closing(self):
        tokens = list(tokenize('<img src="a.png" />'))
        assert tokens == [SelfClosingTag("img", {"src": "a.png"})]

    def test_end_tag_with_trailing_space(self):
        assert list(tokenize("</b >")) == [EndTag("b")]


class TestAttributes:
    def test_quoting_styles(self):
        (token,) = tokenize("""<a href="x" title='y z' rel=nofollow hidden>""")
        assert token.attrs == {"href": "x", "title": "y z", "rel": "nofollow", "hidden": ""}

    def test_order_preserved(self):
        (token,) = tokenize('<img alt="X" src="x.png">')
        assert list(token.attrs) == ["alt", "src"]

    def test_last_duplicate_wins(self):
        (token,) = tokenize('<a href="first" href="second">')
        assert token.attrs == {"href": "second"}

    def test_values_are_entity_decoded(self):
        (token,) = tokenize('<a href="/q?a=1&amp;b=2">')
        assert token.attrs["href"] == "/q?a=1&b=2"

    def test_quoted_value_may_contain_gt(self):
        (token,) = tokenize('<a title="1 > 0">')
        assert token == StartTag("a", {"title": "1 > 0"})


class TestText:
    def test_text_is_not_decoded(self):
        assert list(tokenize("a &amp; b")) == [Text("a &amp; b")]

    def test_empty_input(self):
        assert list(tokenize("")) == []

    def test_lone_lt_is_literal(self):
        assert list(tokenize("1 < 2")) == [Text("1 < 2")]

    def test_unterminated_tag_is_literal(self):
        assert list(tokenize("x <div")) == [Text("x <div")]

    def test_literal_lt_before_tag(self):
        tokens = list(tokenize("a < b<br>"))
        assert tokens == [Text("a < b"), StartTag("br", {})]


class TestDropped:
    def test_script_content_dropped(self):
        tokens = list(tokenize("<p>Hi</p><script>if (a < b) { x = '</p>'; }</script>after"))
        assert tokens == [StartTag("p", {}), Text("Hi"), EndTag("p"), Text("after")]

    def test_style_case_insensitive(self):
        tokens = list(tokenize("<STYLE>p > a { color: red }</Style>ok"))
        assert tokens == [Text("ok")]

    def test_unterminated_script_drops_rest(self):
        assert list(tokenize("before<script>never closed <b>x</b>")) == [Text("before")]

    def test_comment_dropped_and_text_merged(self):
        assert list(tokenize("a<!-- <b>hidden</b> -->b")) == [Text("ab")]

    def test_comment_kept_on_request(self):
        tokens = list(tokenize("a<!--note-->b", include_comments=True))
        assert tokens == [Text("a"), Comment("note"), Text("b")]

    def test_doctype_dropped(self):
        tokens = list(tokenize("<!DOCTYPE html><p>x</p>"))
        assert tokens[0] == StartTag("p", {})


def test_restartable():
    html = "<ul><li>One</li></ul>"
    assert list(tokenize(html)) == list(tokenize(html))


def test_lazy():
    stream = tokenize("<b>x</b>")
    assert next(stream) == StartTag("b", {})


def _best_time(html, repeat=3):
    best = float("inf")
    for _ in range(repeat):
        start = time.perf_counter()
        for _token in tokenize(html):
            pass
        best = min(best, time.perf_counter() - start)
    return best


@pytest.mark.parametrize(
    "unit, tail",
    [
        ("x <a ", ""),
        ("<a b=c d ", ""),
        ("<a b=c d ", ">"),
        ("</a", ""),
        ("</a", ">"),
        ("<!x ", ">"),
        ('<a t="', ">"),
    ],
)
def test_unclosed_lt_scales_linearly(unit, tail):
    small = _best_time(unit * 5000 + tail)
    large = _best_time(unit * 20000 + tail)
    assert large < small * 5 + 0.05


def test_unclosed_run_is_literal_text():
    html = "<a b=c d <a b=c d >"
    assert list(tokenize(html)) == [Text("<a b=c d "), StartTag("a", {"b": "c", "d": ""})]


def test_tag_cannot_span_another_lt():
    assert list(tokenize('<a title="x<b>y">')) == [Text('<a title="x'), StartTag("b", {}), Text('y">')]
