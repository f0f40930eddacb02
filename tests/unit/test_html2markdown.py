import logging
import sys

import pytest
from bs4 import BeautifulSoup

from notelens.exceptions import InvalidOptionsError, ValidationError
from notelens.html2markdown import (
    ConversionRule,
    HtmlToMarkdownConverter,
    build_rules,
    escape_markdown,
    html_to_markdown,
    normalize_markdown,
    normalize_nbsp,
)
from notelens.options import ClipboardOptions, MarkdownOptions, SearchOptions


@pytest.mark.unit
def test_paragraph_with_strong():
    assert html_to_markdown("<p>Hello <strong>world</strong></p>") == "Hello **world**"


@pytest.mark.unit
def test_pre_with_language_class():
    html = '<pre><code class="language-python">x=1</code></pre>'
    assert html_to_markdown(html) == "```python\nx=1\n```"


@pytest.mark.unit
def test_language_class_on_pre():
    html = '<pre class="language-rust"><code>fn main() {}</code></pre>'
    assert html_to_markdown(html) == "```rust\nfn main() {}\n```"


@pytest.mark.unit
def test_pre_without_language():
    assert html_to_markdown("<pre>a  b\n  c</pre>") == "```\na  b\n  c\n```"


@pytest.mark.unit
def test_inline_code():
    assert html_to_markdown("<code>foo</code>") == "`foo`"
    assert html_to_markdown("<p>Call <code> run() </code> now</p>") == "Call `run()` now"


@pytest.mark.unit
def test_inline_code_containing_backticks():
    assert html_to_markdown("<code>a`b</code>") == "`` a`b ``"


@pytest.mark.unit
def test_pre_containing_fence_uses_longer_fence():
    result = html_to_markdown("<pre>```\ninner\n```</pre>")
    assert result.startswith("````\n")
    assert result.endswith("\n````")


@pytest.mark.unit
def test_blank_lines_collapse():
    assert html_to_markdown("<p>a</p><br><br><br><br><p>b</p>") == "a\n\nb"


@pytest.mark.unit
def test_nbsp_becomes_space():
    assert html_to_markdown("<p>a&nbsp;b\u00a0c&#160;d</p>") == "a b c d"
    assert html_to_markdown("<p>a&nbsp b&#160c&#xA0 d</p>") == "a b c d"


@pytest.mark.unit
def test_empty_paragraph_dropped():
    assert html_to_markdown("<p></p><p>  </p><p>text</p>") == "text"


@pytest.mark.unit
def test_mark_and_span_unwrapped():
    html = '<p><mark class="search-match">hi</mark> <span style="color:red">there</span></p>'
    assert html_to_markdown(html) == "hi there"


@pytest.mark.unit
class TestCodeEditorPaste:
    """Blocks copied from code editors become fenced code."""

    def test_editor_class(self):
        html = '<div class="monaco-editor"><div>line1</div><div>  line2</div></div>'
        assert html_to_markdown(html) == "```\nline1\n  line2\n```"

    def test_monospace_style(self):
        html = '<div style="font-family: Consolas, monospace">x = 1<br>y = 2</div>'
        assert html_to_markdown(html) == "```\nx = 1\ny = 2\n```"

    def test_plain_div_is_not_code(self):
        assert html_to_markdown("<div>just text</div>") == "just text"

    def test_custom_signals(self):
        options = ClipboardOptions(code_editor_classes=("cm-content",), monospace_fonts=("Fira Code",))
        html = '<div class="cm-content"><div>a</div></div>'
        assert html_to_markdown(html, options) == "```\na\n```"
        assert html_to_markdown('<div class="hljs">b</div>', options) == "b"


@pytest.mark.unit
class TestGeneralRules:
    """Headings, lists, tables and inline formatting."""

    def test_headings(self):
        assert html_to_markdown("<h1>Title</h1><h2>Sub  title</h2>") == "# Title\n\n## Sub title"

    def test_setext_headings(self):
        options = ClipboardOptions(markdown_options=MarkdownOptions(heading_style="setext"))
        assert html_to_markdown("<h1>Title</h1><h3>Deep</h3>", options) == "Title\n=====\n\n### Deep"

    def test_unordered_list(self):
        assert html_to_markdown("<ul><li>one</li><li>two</li></ul>") == "- one\n- two"

    def test_ordered_list_start(self):
        assert html_to_markdown('<ol start="3"><li>a</li><li>b</li></ol>') == "3. a\n4. b"

    def test_nested_list(self):
        html = "<ul><li>a<ul><li>b</li></ul></li></ul>"
        assert html_to_markdown(html) == "- a\n  - b"

    def test_bullet_marker_option(self):
        options = ClipboardOptions(markdown_options=MarkdownOptions(bullet_marker="*"))
        assert html_to_markdown("<ul><li>x</li></ul>", options) == "* x"

    def test_task_list(self):
        html = '<ul><li><input type="checkbox" checked> done</li><li><input type="checkbox"> todo</li></ul>'
        assert html_to_markdown(html) == "- [x] done\n- [ ] todo"

    def test_table(self):
        html = """
        <table>
            <tr><th>A</th><th align="right">B</th></tr>
            <tr><td>1</td><td>2|3</td></tr>
        </table>
        """
        assert html_to_markdown(html) == "| A | B |\n| --- | ---: |\n| 1 | 2\\|3 |"

    def test_blockquote(self):
        assert html_to_markdown("<blockquote><p>one</p><p>two</p></blockquote>") == "> one\n>\n> two"

    def test_inline_formatting(self):
        html = "<p><em>a</em> <b>b</b> <del>c</del></p>"
        assert html_to_markdown(html) == "_a_ **b** ~~c~~"

    def test_emphasis_options(self):
        options = ClipboardOptions(markdown_options=MarkdownOptions(emphasis_symbol="*", strong_symbol="__"))
        assert html_to_markdown("<p><i>a</i> <strong>b</strong></p>", options) == "*a* __b__"

    def test_strong_keeps_surrounding_space_outside(self):
        assert html_to_markdown("<p>a<strong> bold </strong>b</p>") == "a **bold** b"

    def test_links_and_images(self):
        html = '<p><a href="https://example.com" title="Ex">site</a> <img src="a.png" alt="An  image"></p>'
        assert html_to_markdown(html) == '[site](https://example.com "Ex") ![An image](a.png)'

    def test_link_without_href_keeps_text(self):
        assert html_to_markdown("<p><a name='x'>anchor</a></p>") == "anchor"

    def test_horizontal_rule(self):
        assert html_to_markdown("<p>a</p><hr><p>b</p>") == "a\n\n---\n\nb"

    def test_scripts_and_comments_dropped(self):
        html = "<p>a<!-- note --></p><script>alert(1)</script><style>p {}</style>"
        assert html_to_markdown(html) == "a"

    def test_unknown_elements_pass_content_through(self):
        assert html_to_markdown("<p><custom-tag>inner</custom-tag></p>") == "inner"

    def test_full_document_uses_body(self):
        html = "<html><head><title>T</title></head><body><p>Body</p></body></html>"
        assert html_to_markdown(html) == "Body"


@pytest.mark.unit
class TestConverter:
    """Converter construction, input types and failure handling."""

    def test_empty_input(self):
        assert html_to_markdown("") == ""

    def test_bytes_input(self):
        assert html_to_markdown("<p>café</p>".encode("utf-8")) == "café"

    def test_tag_input_is_not_modified(self):
        soup = BeautifulSoup("<div><p>x <b>y</b></p></div>", "html.parser")
        before = str(soup)
        assert html_to_markdown(soup.div) == "x **y**"
        assert str(soup) == before

    def test_rejects_unsupported_input(self):
        with pytest.raises(ValidationError) as exc_info:
            html_to_markdown(42)  # type: ignore[arg-type]
        assert exc_info.value.parameter_name == "html"

    def test_rejects_wrong_options_class(self):
        with pytest.raises(InvalidOptionsError):
            HtmlToMarkdownConverter(SearchOptions())  # type: ignore[arg-type]

    def test_rule_table_is_shared(self):
        options = ClipboardOptions()
        assert build_rules(options) is build_rules(ClipboardOptions())
        names = [rule.name for rule in build_rules(options)]
        assert names[:7] == ["code-in-pre", "inline-code", "pre", "code-editor-paste", "mark", "span", "paragraph"]
        assert names[-1] == "passthrough"

    def test_failing_rule_falls_back_to_text(self, caplog):
        def explode(node, content):
            raise RuntimeError("boom")

        converter = HtmlToMarkdownConverter()
        converter.rules = (ConversionRule("explode", lambda node: node.name == "p", explode), *converter.rules)
        with caplog.at_level(logging.WARNING, logger="notelens.html2markdown"):
            result = converter.convert("<p>Hello <strong>world</strong></p>")
        assert result == "Hello world"
        assert "explode" in caplog.text


@pytest.mark.unit
def test_normalize_markdown():
    assert normalize_markdown("\n\n  a  \n\n\n\n  b\t\n\n") == "a\n\n  b"


@pytest.mark.unit
def test_normalize_nbsp():
    assert normalize_nbsp("a&NBSP;b&#xa0;c") == "a b c"
    assert normalize_nbsp("&nbspx &#1600; &#xa00;") == " x &#1600; &#xa00;"


@pytest.mark.unit
class TestMarkdownEscaping:
    """Literal text that looks like Markdown stays literal."""

    def test_inline_characters(self):
        assert html_to_markdown("<p>*not emphasis* and [x] a_b</p>") == r"\*not emphasis\* and \[x\] a\_b"
        assert html_to_markdown("<p>C:\\dir `x`</p>") == r"C:\\dir \`x\`"

    def test_block_markers_at_start(self):
        html = "<p>*not emphasis* …</p><p># hash start</p><ul><li>1. item</li></ul>"
        assert html_to_markdown(html) == "\\*not emphasis\\* …\n\n\\# hash start\n\n- 1\\. item"
        assert html_to_markdown("<p>- dash</p><p>+ plus</p>") == "\\- dash\n\n\\+ plus"
        assert html_to_markdown("<blockquote><p>&gt; quoted</p></blockquote>") == "> \\> quoted"

    def test_block_markers_mid_line_untouched(self):
        assert html_to_markdown("<p>a # b - c 1. d &gt; e</p>") == "a # b - c 1. d > e"
        assert html_to_markdown("<p>#hashtag</p>") == "#hashtag"

    def test_start_after_line_break_and_inside_inline(self):
        assert html_to_markdown("<p>a<br># b</p>") == "a\n\\# b"
        assert html_to_markdown("<p><span># tag</span></p>") == "\\# tag"

    def test_code_is_not_escaped(self):
        assert html_to_markdown("<p><code>*x*</code> and <em>y</em></p>") == "`*x*` and _y_"
        assert html_to_markdown("<pre># not a heading *x*</pre>") == "```\n# not a heading *x*\n```"

    def test_escaping_can_be_disabled(self):
        options = ClipboardOptions(markdown_options=MarkdownOptions(escape_special=False))
        assert html_to_markdown("<p># *a*</p>", options) == "# *a*"

    def test_escape_markdown(self):
        assert escape_markdown("a\\*b") == "a\\\\\\*b"
        assert escape_markdown("  # x", at_block_start=True) == "  \\# x"
        assert escape_markdown("# x") == "# x"


@pytest.mark.unit
class TestDeepNesting:
    """Nesting deeper than the interpreter's recursion limit."""

    depth = sys.getrecursionlimit() + 500

    def test_nested_inline(self):
        html = "<span>" * self.depth + "x" + "</span>" * self.depth
        assert html_to_markdown(html) == "x"

    def test_nested_blocks(self):
        html = "<div>" * self.depth + "<p># x</p>" + "</div>" * self.depth
        assert html_to_markdown(html) == "\\# x"

    def test_nested_emphasis(self):
        html = "<p>" + "<em>" * self.depth + "x" + "</em>" * self.depth + "</p>"
        result = html_to_markdown(html)
        assert result.strip("_") == "x"
