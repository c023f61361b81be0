"""
The cstring module converts between the bodies of C-style quoted string
literals, as they appear between the double quotes of a .po file, and
the strings they stand for.

.. code-block:: po

    msgid "Say \\"hello\\"\\n"

has the body ``Say \\"hello\\"\\n`` and the value ``Say "hello"`` followed
by a newline.
"""

import re

from potty.util import PoError, regex

_simple_escapes = {'a': '\a',
                   'b': '\b',
                   'f': '\f',
                   'n': '\n',
                   'r': '\r',
                   't': '\t',
                   'v': '\v',
                   '\\': '\\',
                   "'": "'",
                   '"': '"',
                   '?': '?'}

# Reverse of the above, for the characters we write with a named escape
_named_escapes = {'\\': r'\\',
                  '"': r'\"',
                  '\a': r'\a',
                  '\b': r'\b',
                  '\f': r'\f',
                  '\n': r'\n',
                  '\r': r'\r',
                  '\t': r'\t',
                  '\v': r'\v'}

escape_sequence_pattern = regex(r'\\(?:(?P<simple>[abfnrtv\\\'"?])'
                                r'|(?P<octal>[0-7]{1,3})'
                                r'|x(?P<hex>[0-9A-Fa-f]+)'
                                r'|(?P<bad>.?))', re.DOTALL)
special_char_pattern = regex(r'[\\"\x00-\x1f\x7f]')


def _decode_escape(match):
    if match.group('simple') is not None:
        return _simple_escapes[match.group('simple')]
    if match.group('octal') is not None:
        return chr(int(match.group('octal'), 8))
    if match.group('hex') is not None:
        codepoint = int(match.group('hex'), 16)
        if codepoint > 0x10ffff:
            raise PoError('bad-escape',
                          'Hex escape out of range: %s' % match.group(0))
        return chr(codepoint)
    if match.group('bad'):
        raise PoError('bad-escape',
                      'Invalid escape sequence: %s' % match.group(0))
    raise PoError('bad-escape', 'String ends with a lone backslash')


def unescape(string):
    """Return the value of a quoted string body.

    Args:
        string (str): Text between the quotes of a literal, still escaped

    Returns:
        str: The string with all escape sequences replaced

    Raises:
        PoError: With errtype ``'bad-escape'`` on an unknown escape
            sequence or a trailing backslash"""
    if '\\' not in string:
        return string
    return escape_sequence_pattern.sub(_decode_escape, string)


def _encode_char(match):
    char = match.group(0)
    escaped = _named_escapes.get(char)
    if escaped is None:
        escaped = '\\%03o' % ord(char)
    return escaped


def escape(string):
    """Return the quoted-literal body for string; inverse of unescape()."""
    return special_char_pattern.sub(_encode_char, string)
