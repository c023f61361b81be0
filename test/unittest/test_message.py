# encoding: utf-8

"""Unit tests for the message module"""

import io

import pytest

from potty.message import (
    Catalog, Comment, CommentKind, Message, parse_header_data
)


### Test data
PARSE_HEADER_IN = (
    'a: æøå\n'
    '\n'  # blank line should be ignored
    'b: multiple words\n'
    ' \n'  # line with space should be ignored
    'c-key-with-multiple-words: 8\n'
    'def\n'  # No key-value separator present, line ignored
    'Content-Type: text/plain; charset=UTF-8\n'
)
PARSE_HEADER_OUT = {
    'a': 'æøå', 'b': 'multiple words', 'c-key-with-multiple-words': '8',
    'Content-Type': 'text/plain; charset=UTF-8',
}

COMMENT_STRINGS = (
    (CommentKind.REFERENCE, 'src/main.c:12', '#: src/main.c:12'),
    (CommentKind.EXTRACTED, 'Shown on start', '#. Shown on start'),
    (CommentKind.FLAG, 'fuzzy, c-format', '#, fuzzy, c-format'),
    (CommentKind.PREVIOUS, 'msgid "old"', '#| msgid "old"'),
    (CommentKind.TRANSLATOR, 'a note', '# a note'),
    (CommentKind.TRANSLATOR, '', '# '),
)


### Fixtures
@pytest.fixture
def msgs():
    """Make a short list of messages"""
    header = Message('', ['Language: da\nContent-Type: text/plain; '
                          'charset=ISO-8859-1\n'])
    return [header,
            Message('a', ['A'], comments=[Comment(CommentKind.REFERENCE,
                                                  'a.c:1')]),
            Message('b', ['B'])]


### Tests
def test_parse_header():
    """Test the parse_header_data function"""
    assert parse_header_data(PARSE_HEADER_IN) == PARSE_HEADER_OUT
    assert parse_header_data('') == {}


@pytest.mark.parametrize('kind, content, expected', COMMENT_STRINGS)
def test_comment_tostring(kind, content, expected):
    """Test that comments are written with their marker"""
    assert Comment(kind, content).tostring() == expected


def test_comment_equality():
    """Test that comments compare by kind and content"""
    assert Comment(CommentKind.FLAG, 'x') == Comment(CommentKind.FLAG, 'x')
    assert Comment(CommentKind.FLAG, 'x') != Comment(CommentKind.FLAG, 'y')
    assert (Comment(CommentKind.FLAG, 'x') !=
            Comment(CommentKind.TRANSLATOR, 'x'))


class TestMessage(object):
    """Test the Message class"""

    def test___init__(self):
        """Test that a new message is empty"""
        msg = Message()
        assert msg.msgid is None
        assert msg.msgctxt is None
        assert msg.msgid_plural is None
        assert msg.msgstrs == []
        assert msg.comments == []
        assert msg.meta == {}
        assert msg.msgstr is None

    def test_is_valid(self):
        """Test when a message is complete"""
        assert not Message().is_valid
        assert not Message('a').is_valid
        assert not Message(msgstrs=['x']).is_valid
        assert Message('a', ['x']).is_valid
        assert not Message('a', ['x', 'y']).is_valid
        assert Message('a', ['x'], msgid_plural='as').is_valid
        assert Message('a', ['x', 'y'], msgid_plural='as').is_valid
        assert not Message('a', [], msgid_plural='as').is_valid

    def test_properties(self):
        """Test the simple derived properties"""
        msg = Message('a', ['x'], msgctxt='ctx')
        assert msg.has_context
        assert not msg.isplural
        assert msg.msgstr == 'x'
        assert msg.key == ('a', 'ctx')
        assert not msg.untranslated
        assert Message('a', ['']).untranslated
        assert Message('a', ['x', 'y'], msgid_plural='as').isplural

    def test_flags(self):
        """Test that flags are collected from all flag comments"""
        comments = [Comment(CommentKind.FLAG, 'fuzzy, c-format'),
                    Comment(CommentKind.TRANSLATOR, 'fuzzy is not a flag'),
                    Comment(CommentKind.FLAG, 'no-wrap,')]
        msg = Message('a', ['x'], comments=comments)
        assert msg.flags == set(['fuzzy', 'c-format', 'no-wrap'])
        assert msg.isfuzzy
        # An untranslated message is never fuzzy
        msg.msgstrs = ['']
        assert not msg.isfuzzy

    def test_get_comments(self):
        """Test filtering comments by kind"""
        ref = Comment(CommentKind.REFERENCE, 'a.c:1')
        note = Comment(CommentKind.TRANSLATOR, 'note')
        msg = Message('a', ['x'], comments=[ref, note])
        assert msg.get_comments() == [ref, note]
        assert msg.get_comments(CommentKind.REFERENCE) == [ref]
        assert msg.get_comments(CommentKind.EXTRACTED) == []

    def test_tostring(self):
        """Test the serialization of a message"""
        comments = [Comment(CommentKind.TRANSLATOR, 'note'),
                    Comment(CommentKind.REFERENCE, 'a.c:1')]
        msg = Message('say "hi"\n', ['sig "hej"\n'], msgctxt='greeting',
                      comments=comments)
        assert msg.tostring() == ('# note\n'
                                  '#: a.c:1\n'
                                  'msgctxt "greeting"\n'
                                  'msgid "say \\"hi\\"\\n"\n'
                                  'msgstr "sig \\"hej\\"\\n"\n')
        assert str(msg) == msg.tostring()

    def test_tostring_plural(self):
        """Test that plural messages use indexed msgstrs"""
        msg = Message('cat', ['gato', 'gatos'], msgid_plural='cats')
        assert msg.tostring() == ('msgid "cat"\n'
                                  'msgid_plural "cats"\n'
                                  'msgstr[0] "gato"\n'
                                  'msgstr[1] "gatos"\n')

    def test_tostring_partial(self):
        """Test that missing fields are left out"""
        assert Message().tostring() == ''
        assert Message('a').tostring() == 'msgid "a"\n'

    def test_copy(self):
        """Test that copy does not share the mutable parts"""
        msg = Message('a', ['x'], comments=[Comment(CommentKind.FLAG, 'f')],
                      meta={'lineno': 3})
        copy = msg.copy()
        assert copy.key == msg.key
        assert copy.tostring() == msg.tostring()
        copy.msgstrs.append('y')
        copy.comments.append(Comment(CommentKind.FLAG, 'g'))
        copy.meta['lineno'] = 4
        assert msg.msgstrs == ['x']
        assert len(msg.comments) == 1
        assert msg.meta == {'lineno': 3}


class TestCatalog(object):
    """Test the Catalog class"""

    def test___init__(self, msgs):
        """Test the __init__ method and the sequence protocol"""
        catalog = Catalog(msgs, fname='filename', encoding='utf-8')
        assert catalog.fname == 'filename'
        assert catalog.encoding == 'utf-8'
        assert len(catalog) == 3
        assert list(catalog) == msgs
        assert catalog[1] is msgs[1]
        assert catalog[-1] is msgs[2]

        catalog = Catalog()
        assert len(catalog) == 0
        assert catalog.fname is None
        catalog.append(msgs[0])
        assert list(catalog) == [msgs[0]]

    def test_headers(self, msgs):
        """Test the header accessors"""
        catalog = Catalog(msgs)
        assert catalog.header is msgs[0]
        assert catalog.headers == {
            'Language': 'da',
            'Content-Type': 'text/plain; charset=ISO-8859-1'}
        assert catalog.charset == 'ISO-8859-1'

        catalog = Catalog(msgs[1:])
        assert catalog.header is None
        assert catalog.headers == {}
        assert catalog.charset is None

    def test_tostring(self, msgs):
        """Test that messages are separated by one blank line"""
        catalog = Catalog(msgs[1:])
        expected = ('#: a.c:1\n'
                    'msgid "a"\n'
                    'msgstr "A"\n'
                    '\n'
                    'msgid "b"\n'
                    'msgstr "B"\n')
        assert catalog.tostring() == expected

        out = io.StringIO()
        catalog.write(out)
        assert out.getvalue() == expected

    def test_write_empty(self):
        """Test that an empty catalog writes nothing"""
        out = io.StringIO()
        Catalog().write(out)
        assert out.getvalue() == ''
