from enum import Enum

from potty.cstring import escape
from potty.util import regex


charset_extraction_pattern = regex(r'[^;]*;\s*charset=(?P<charset>[^\s;]+)')


def parse_header_data(msgstr):
    """Parse the data in the .po file header.

    Header data looks like this:

    .. code-block:: python

       Project-Id-Version: nautilus
       POT-Creation-Date: 2015-08-26 23:10+0000
       Language: da
       MIME-Version: 1.0
       Content-Type: text/plain; charset=UTF-8
       Plural-Forms: nplurals=2; plural=(n != 1);

    where each line is a key, value pair of header data separated by the
    first colon.  Lines without a colon are ignored.

    Args:
        msgstr (string): The (unescaped) msgstr of the header message

    Returns:
        dict: Key, value pairs of header info. All keys and values are strings.
    """
    headers = {}
    for line in msgstr.split('\n'):
        if not line or line.isspace():
            continue
        tokens = line.split(':', 1)
        if len(tokens) != 2:
            continue
        key, value = tokens
        headers[key.strip()] = value.strip()
    return headers


class CommentKind(Enum):
    """The kinds of comment lines, valued by the marker after ``'#'``."""
    REFERENCE = ':'
    EXTRACTED = '.'
    FLAG = ','
    PREVIOUS = '|'
    TRANSLATOR = ''

    @property
    def marker(self):
        return self.value


class Comment(object):
    """One comment line of a message.

    Attributes:
        kind (CommentKind): What the comment marker says this comment is
        content (str): The text after the marker, leading whitespace removed
    """
    def __init__(self, kind, content):
        self.kind = kind
        self.content = content

    def tostring(self):
        return '#%s %s' % (self.kind.marker, self.content)

    def __eq__(self, other):
        if not isinstance(other, Comment):
            return NotImplemented
        return (self.kind, self.content) == (other.kind, other.content)

    def __repr__(self):
        return 'Comment(%s, %r)' % (self.kind, self.content)


class Catalog(object):
    """A Catalog represents one gettext catalog, or po-file.

    Args:
        msgs (iterable): Iterable of :py:class:`.Message`
        fname (string): Filename of the source
        encoding (string): The encoding of the source

    Attributes:
        msgs (list): The messages in the order they appeared in the source
        fname (str): The filename of the source, or None
        encoding (str): The encoding of the source, or None
    """
    def __init__(self, msgs=None, fname=None, encoding=None):
        self.msgs = list(msgs) if msgs is not None else []
        self.fname = fname
        self.encoding = encoding

    def __iter__(self):
        return iter(self.msgs)

    def __len__(self):
        return len(self.msgs)

    def __getitem__(self, index):
        return self.msgs[index]

    def append(self, msg):
        self.msgs.append(msg)

    @property
    def header(self):
        """The header message (the one with empty msgid), or None."""
        for msg in self.msgs:
            if msg.msgid == '':
                return msg
        return None

    @property
    def headers(self):
        """Dict of header fields; empty if there is no usable header."""
        header = self.header
        if header is None or header.msgstr is None:
            return {}
        return parse_header_data(header.msgstr)

    @property
    def charset(self):
        """The charset declared by the Content-Type header, or None."""
        content_type = self.headers.get('Content-Type')
        if content_type is None:
            return None
        match = charset_extraction_pattern.match(content_type)
        if not match:
            return None
        return match.group('charset')

    def tostring(self):
        """Return the catalog as .po text.

        Messages are separated by exactly one blank line, and there is no
        blank line after the last one."""
        return '\n'.join(msg.tostring() for msg in self.msgs)

    def write(self, fd):
        for i, msg in enumerate(self.msgs):
            if i > 0:
                fd.write('\n')
            fd.write(msg.tostring())


class Message(object):
    """This class represents a :term:`message` in a :term:`gettext catalog`

    A message is built one field at a time while parsing, so every field
    may be missing.  Which fields are set is the whole parser state; see
    :py:attr:`.is_valid`.

    Parameters:
        msgid (string or None): The :term:`msgid`
        msgstrs (list of strings): The translated :term:`msgstr` s, by index
        msgid_plural (string or None): msgid plural if present
        msgctxt (string or None): Context if present
        comments (list): :py:class:`.Comment` objects in source order
        meta (dict): Optional metadata (linenumber, raw text from po-file)

    If this message was loaded from a file using the read() function,
    the meta dictionary will contain the following keys:

     * 'lineno': the line number of the first line of the message
     * 'rawlines': the source lines the message was built from

     It is understood that the properties of a Message may be
     changed programmatically so as to render it inconsistent with
     its rawlines and/or lineno.
    """

    def __init__(self, msgid=None, msgstrs=None, msgid_plural=None,
                 msgctxt=None, comments=None, meta=None):
        self.msgid = msgid
        self.msgid_plural = msgid_plural
        self.msgctxt = msgctxt
        self.msgstrs = list(msgstrs) if msgstrs is not None else []
        self.comments = list(comments) if comments is not None else []
        self.meta = meta if meta is not None else {}

    @property
    def is_valid(self):
        """Whether the message is complete enough to be closed.

        That is the case when it has a msgid and either exactly one msgstr,
        or a msgid_plural and more than one msgstr."""
        if self.msgid is None:
            return False
        return (len(self.msgstrs) == 1
                or (self.msgid_plural is not None and len(self.msgstrs) > 1))

    @property
    def msgstr(self):
        """The :term:`msgstr`, or first translation in case of plurals."""
        if not self.msgstrs:
            return None
        return self.msgstrs[0]

    @property
    def isplural(self):
        """Whether the message has plurals."""
        return self.msgid_plural is not None

    @property
    def has_context(self):
        """Whether the message has context."""
        return self.msgctxt is not None

    @property
    def untranslated(self):
        return not self.msgstr

    @property
    def flags(self):
        """Set of flags ('fuzzy', 'c-format', ...) from the flag comments."""
        flags = set()
        for comment in self.get_comments(CommentKind.FLAG):
            flags.update(flag.strip() for flag in comment.content.split(',')
                         if flag.strip())
        return flags

    @property
    def isfuzzy(self):
        return 'fuzzy' in self.flags and not self.untranslated

    @property
    def key(self):
        """The tuple (msgid, msgctxt)."""
        return (self.msgid, self.msgctxt)

    def get_comments(self, kind=None):
        """Return the comments of the given kind, or all of them."""
        if kind is None:
            return list(self.comments)
        return [comment for comment in self.comments if comment.kind == kind]

    def tostring(self):
        """Return :term:`gettext catalog` string form of this message.

        Every line, including the last, ends with a newline.  Comments come
        first in their original order, then the context, msgid and plural
        msgid if they are set, then the msgstrs:

        .. code-block:: po

            #  translator-comments
            #. extracted-comments
            #: reference...
            #, flag...
            msgctxt "context"
            msgid "untranslated-string"
            msgid_plural "untranslated-plural"
            msgstr[0] "translated-string"
            msgstr[1] "translated-plural"
        """
        lines = [comment.tostring() for comment in self.comments]
        if self.msgctxt is not None:
            lines.append('msgctxt "%s"' % escape(self.msgctxt))
        if self.msgid is not None:
            lines.append('msgid "%s"' % escape(self.msgid))
        if self.msgid_plural is not None:
            lines.append('msgid_plural "%s"' % escape(self.msgid_plural))
        for i, msgstr in enumerate(self.msgstrs):
            if self.isplural:
                lines.append('msgstr[%d] "%s"' % (i, escape(msgstr)))
            else:
                lines.append('msgstr "%s"' % escape(msgstr))
        return ''.join('%s\n' % line for line in lines)

    def __str__(self):
        return self.tostring()

    def copy(self):
        """Return a copy of this message."""
        return self.__class__(self.msgid, self.msgstrs,
                              msgid_plural=self.msgid_plural,
                              msgctxt=self.msgctxt,
                              comments=list(self.comments),
                              meta=self.meta.copy())
