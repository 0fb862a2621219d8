from __future__ import annotations

from mdx_format.models import FormatOptions, FormatterMode, FormatterState
from mdx_format.tags import (
    is_attribute_continuation,
    is_complete_element,
    opens_template_attribute,
    split_element,
    tag_name,
    track_attribute_continuation,
    track_tag,
    track_tag_head_line,
    track_template_line,
)

OPTIONS = FormatOptions()


def test_opening_tag_increments_depth():
    state = FormatterState()

    assert track_tag(state, "<Card>", OPTIONS) == ["<Card>"]
    assert state.tag_depth == 1

    assert track_tag(state, '<Tab title="A">', OPTIONS) == ['    <Tab title="A">']
    assert state.tag_depth == 2


def test_closing_tag_is_emitted_at_decremented_depth():
    state = FormatterState(tag_depth=2)

    assert track_tag(state, "</Inner>", OPTIONS) == ["    </Inner>"]
    assert state.tag_depth == 1


def test_closing_tag_never_goes_below_zero():
    state = FormatterState()

    assert track_tag(state, "</Card>", OPTIONS) == ["</Card>"]
    assert state.tag_depth == 0


def test_self_closing_tag_keeps_depth():
    state = FormatterState(tag_depth=1)

    assert track_tag(state, '<Image src="a.png" />', OPTIONS) == ['    <Image src="a.png" />']
    assert state.tag_depth == 1


def test_complete_element_keeps_depth():
    state = FormatterState()

    assert track_tag(state, "<b>bold</b> and <i>it</i>", OPTIONS) == ["<b>bold</b> and <i>it</i>"]
    assert state.tag_depth == 0


def test_step_element_is_split_over_three_lines():
    state = FormatterState(tag_depth=1)

    assert track_tag(state, "<Step>Install</Step>", OPTIONS) == [
        "    <Step>",
        "        Install",
        "    </Step>",
    ]
    assert state.tag_depth == 1


def test_empty_step_element_stays_on_one_line():
    state = FormatterState()

    assert track_tag(state, "<Step></Step>", OPTIONS) == ["<Step></Step>"]
    assert state.tag_depth == 0


def test_comments_and_void_elements_keep_depth():
    state = FormatterState(tag_depth=1)

    assert track_tag(state, "<!-- note -->", OPTIONS) == ["    <!-- note -->"]
    assert track_tag(state, "<br>", OPTIONS) == ["    <br>"]
    assert state.tag_depth == 1


def test_fragments_open_and_close():
    state = FormatterState()

    track_tag(state, "<>", OPTIONS)
    assert state.tag_depth == 1
    track_tag(state, "</>", OPTIONS)
    assert state.tag_depth == 0


def test_unfinished_tag_head_keeps_depth():
    state = FormatterState()

    assert track_tag(state, "<Card", OPTIONS) == ["<Card"]
    assert state.tag_depth == 0
    assert state.mode is FormatterMode.NORMAL


def test_attribute_continuation_closes_tag_head():
    state = FormatterState()

    assert track_attribute_continuation(state, 'icon="y">', OPTIONS) == ['icon="y">']
    assert state.tag_depth == 1

    assert track_attribute_continuation(state, "size={2} />", OPTIONS) == ["    size={2} />"]
    assert state.tag_depth == 1


def test_template_attribute_enters_and_leaves_mode():
    state = FormatterState(tag_depth=1)

    assert track_tag(state, "<Code code={`", OPTIONS) == ["    <Code code={`"]
    assert state.mode is FormatterMode.TAG_ATTRIBUTE
    assert state.tag_attribute_base_depth == 1

    assert track_template_line(state, "  const x = 1;", OPTIONS) == ["  const x = 1;"]
    assert state.mode is FormatterMode.TAG_ATTRIBUTE

    assert track_template_line(state, "`}>", OPTIONS) == ["    `}>"]
    assert state.mode is FormatterMode.NORMAL
    assert state.tag_depth == 2


def test_template_attribute_self_closing_end_keeps_depth():
    state = FormatterState()
    track_tag(state, "<Code code={`", OPTIONS)

    assert track_template_line(state, "  `} />", OPTIONS) == ["`} />"]
    assert state.mode is FormatterMode.NORMAL
    assert state.tag_depth == 0


def test_template_close_before_more_attributes():
    state = FormatterState()
    track_tag(state, "<Code code={`", OPTIONS)

    assert track_template_line(state, "`}", OPTIONS) == ["`}"]
    assert state.mode is FormatterMode.NORMAL
    assert state.tag_depth == 0


def test_opens_template_attribute():
    assert opens_template_attribute("<Code code={`")
    assert opens_template_attribute("<Code code = { `first line")
    assert not opens_template_attribute("<Code code={`x`}")
    assert not opens_template_attribute('<Card title="x"')


def test_is_attribute_continuation():
    assert is_attribute_continuation('title="Setup">')
    assert is_attribute_continuation("{...props} />")
    assert not is_attribute_continuation("<Card>")
    assert not is_attribute_continuation("plain text >")
    assert not is_attribute_continuation('title="x"')


def test_tag_name():
    assert tag_name('<Card title="x">') == "Card"
    assert tag_name("<Tabs.Item>") == "Tabs.Item"
    assert tag_name("<>") == ""
    assert tag_name("< not a tag") is None


def test_is_complete_element():
    assert is_complete_element("<b>bold</b>")
    assert is_complete_element("<>x</>")
    assert not is_complete_element("<Card>")
    assert not is_complete_element("<a>x</b>")


def test_split_element():
    assert split_element('<Step title="One">Run it</Step>') == (
        '<Step title="One">',
        "Run it",
        "</Step>",
    )
    assert split_element("<Card>text</Card>") is None
    assert split_element("<Step>a</Step><Step>b</Step>") is None


def test_unfinished_tag_head_is_marked_open():
    state = FormatterState()

    track_tag(state, '<Card title="x"', OPTIONS)
    assert state.tag_head_open

    track_tag(state, "<Note>", OPTIONS)
    assert not state.tag_head_open


def test_tag_head_line_keeps_head_open_until_closed():
    state = FormatterState(tag_depth=1, tag_head_open=True)

    assert track_tag_head_line(state, 'title="x"', OPTIONS) == ['    title="x"']
    assert state.tag_head_open
    assert state.tag_depth == 1

    assert track_tag_head_line(state, 'icon="y">', OPTIONS) == ['    icon="y">']
    assert not state.tag_head_open
    assert state.tag_depth == 2


def test_tag_head_line_can_start_template_attribute():
    state = FormatterState(tag_depth=1, tag_head_open=True)

    assert track_tag_head_line(state, "code={`", OPTIONS) == ["    code={`"]
    assert state.mode is FormatterMode.TAG_ATTRIBUTE
    assert state.tag_attribute_base_depth == 1
    assert not state.tag_head_open


def test_template_close_reopens_tag_head():
    state = FormatterState()
    track_tag(state, "<Code code={`", OPTIONS)

    track_template_line(state, "`}", OPTIONS)

    assert state.tag_head_open
