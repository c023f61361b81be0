from enum import Enum

from potty.cstring import unescape
from potty.message import Catalog, Message, Comment, CommentKind
from potty.util import PoError, getfilename, regex

__doc__ = """
The poparse module reads :term:`gettext catalog` s (.po files) into
:py:class:`.Catalog` objects and writes them back.  The most important
items are:

 * The :py:func:`.read` function, which parses an entire gettext catalog
   from a file.  **This function is the main entry point for the module**.
 * The :py:func:`.write` function, its inverse.
 * The :py:func:`.iparse` function which similarly parses a file but
   returns an iterator over the messages as they are completed.
 * The :py:class:`.CatalogParser` that turns a sequence of lines into
   messages, one line at a time.

The parser looks at one line at a time and never backtracks.  Each line is
a comment, a command (``msgid "..."``, ``msgstr[1] "..."``, ...), a bare
quoted string continuing the previous command, or something else, which is
skipped.  A message ends when a comment arrives after it is complete, or
when a command arrives that cannot go into it any more.

.. data:: patterns

    Dictionary of compiled regular expression objects used to parse
    command and continuation lines.
""".lstrip()


# The body is made of non-special characters and backslash pairs, so the
# closing quote can never be one escaped by a backslash.
_string_pattern = r'"(?P<string>(?:[^"\\]|\\.)*)"'

patterns = {'command': regex(r'(?P<keyword>[a-z_]+)(?:\[(?P<index>[0-9]+)\])?'
                             r' %s$' % _string_pattern),
            'continuation': regex(r'%s$' % _string_pattern)}

_comment_kinds = dict((kind.marker, kind) for kind in CommentKind
                      if kind is not CommentKind.TRANSLATOR)


class CommandKey(Enum):
    MSGCTXT = 'msgctxt'
    MSGID = 'msgid'
    MSGID_PLURAL = 'msgid_plural'
    MSGSTR = 'msgstr'


class Command(object):
    """A parsed keyword line such as ``msgstr[1] "foo"``.

    Commands only live while parsing.  The parser remembers the last one
    so that continuation lines can extend its value.

    A keyword line with an unknown keyword still becomes a Command, with
    key None.  It never applies to any message, and continuation lines
    after it go nowhere.

    Attributes:
        key (CommandKey or None): Which field the command sets
        value (str): The unescaped value, grown by continuation lines
        index (int or None): The bracketed index of ``msgstr[n]``
        keyword (str): The keyword as written
    """
    def __init__(self, key, value, index=None, keyword=None):
        self.key = key
        self.value = value
        self.index = index
        if keyword is None:
            keyword = key.value
        self.keyword = keyword

    @property
    def position(self):
        """Index into msgstrs for a msgstr command; a plain msgstr is 0."""
        return self.index if self.index is not None else 0

    def can_apply(self, msg):
        """Return whether msg can still take this command.

        Fields must come in the order msgctxt, msgid, msgid_plural, msgstr
        and none but the msgstrs may be set twice."""
        key = self.key
        if key is CommandKey.MSGCTXT:
            return (msg.msgctxt is None and msg.msgid is None
                    and msg.msgid_plural is None and not msg.msgstrs)
        elif key is CommandKey.MSGID:
            return (msg.msgid is None and msg.msgid_plural is None
                    and not msg.msgstrs)
        elif key is CommandKey.MSGID_PLURAL:
            return msg.msgid_plural is None and not msg.msgstrs
        elif key is CommandKey.MSGSTR:
            return self.position + 1 > len(msg.msgstrs)
        return False

    def force_apply(self, msg):
        """Set the field of msg regardless of what is already there."""
        key = self.key
        if key is CommandKey.MSGCTXT:
            msg.msgctxt = self.value
        elif key is CommandKey.MSGID:
            msg.msgid = self.value
        elif key is CommandKey.MSGID_PLURAL:
            msg.msgid_plural = self.value
        elif key is CommandKey.MSGSTR:
            msgstrs = msg.msgstrs
            position = self.position
            if position < len(msgstrs):
                msgstrs[position] = self.value
            else:
                # Skipped indices are left as empty translations
                msgstrs.extend([''] * (position - len(msgstrs)))
                msgstrs.append(self.value)

    def apply(self, msg):
        """Apply to msg if allowed.  Return whether it was applied."""
        if not self.can_apply(msg):
            return False
        self.force_apply(msg)
        return True

    def extend(self, string):
        self.value += string

    def __repr__(self):
        if self.index is None:
            keyword = self.keyword
        else:
            keyword = '%s[%d]' % (self.keyword, self.index)
        return 'Command(%s, %r)' % (keyword, self.value)


def parse_comment(line):
    """Return a Comment for a line starting with '#'."""
    kind = _comment_kinds.get(line[1:2])
    if kind is None:
        kind = CommentKind.TRANSLATOR
        content = line[1:]
    else:
        content = line[2:]
    return Comment(kind, content.lstrip())


def parse_command(line):
    """Return a Command for a keyword line, or None if it is not one.

    Raises:
        PoError: If the quoted string has a bad escape sequence"""
    match = patterns['command'].match(line)
    if not match:
        return None
    keyword = match.group('keyword')
    try:
        key = CommandKey(keyword)
    except ValueError:
        key = None
    index = match.group('index')
    if index is not None:
        index = int(index)
    return Command(key, unescape(match.group('string')), index=index,
                   keyword=keyword)


def classify(line):
    """Classify one line (without newline) of a .po file.

    Returns:
        tuple: ``(kind, value)`` where kind is ``'comment'`` (value is a
        :py:class:`.Comment`), ``'command'`` (value is a
        :py:class:`.Command`), ``'continuation'`` (value is the unescaped
        string) or None for lines that are none of these (value is None).
    """
    if line.startswith('#'):
        return 'comment', parse_comment(line)
    command = parse_command(line)
    if command is not None:
        return 'command', command
    match = patterns['continuation'].match(line)
    if match:
        return 'continuation', unescape(match.group('string'))
    return None, None


class CatalogParser:
    """Assemble messages from lines fed one at a time.

    The parser holds the message under construction and the last command
    seen.  :py:meth:`.feed` returns each message as soon as it is closed and
    :py:meth:`.finish` returns the one still open at end of input."""
    def __init__(self):
        self.msg = Message()
        self.command = None
        self.lineno = 0
        self.last_msg = None

    def _close(self):
        msg = self.msg
        self.msg = Message()
        return msg

    def feed(self, line):
        """Process one line.  Return the message it closed, or None."""
        self.lineno += 1
        line = line.rstrip('\r\n')
        kind, value = classify(line)
        closed = None
        if kind == 'comment':
            if self.msg.is_valid:
                closed = self._close()
            self.msg.comments.append(value)
        elif kind == 'command':
            if not value.apply(self.msg):
                closed = self._close()
                value.apply(self.msg)
            self.command = value
        elif kind == 'continuation':
            if self.command is None:
                return None  # Nothing to continue
            self.command.extend(value)
            self.command.force_apply(self.msg)
        else:
            return None

        meta = self.msg.meta
        if 'lineno' not in meta:
            meta['lineno'] = self.lineno
        meta.setdefault('rawlines', []).append(line + '\n')
        if closed is not None:
            self.last_msg = closed
        return closed

    def finish(self):
        """Return the last, still open message at end of input, or None.

        The open message is dropped when it has the same msgid as the
        last message returned by :py:meth:`.feed`, even if the two differ
        in context or msgstrs.  It is returned when nothing was returned
        before, so empty input gives a single empty message."""
        msg = self._close()
        self.command = None
        last = self.last_msg
        if last is not None and last.msgid == msg.msgid:
            return None
        self.last_msg = msg
        return msg


def decode_line(line, encoding):
    try:
        return line.decode(encoding)
    except UnicodeDecodeError as err:
        raise PoError('decode-error',
                      'Cannot decode line as %s: %s' % (encoding, err))


def iparse(fd, encoding='utf-8'):
    """Parse .po file and yield all Messages.

    The only requirement of fd is that it iterates over lines, either
    str or bytes.  Bytes are decoded using encoding."""
    parser = CatalogParser()
    lineno = 0
    try:
        for lineno, line in enumerate(fd, 1):
            if isinstance(line, bytes):
                line = decode_line(line, encoding)
            msg = parser.feed(line)
            if msg is not None:
                yield msg
        msg = parser.finish()
        if msg is not None:
            yield msg
    except PoError as err:
        err.fname = getfilename(fd)
        if err.lineno is None:
            err.lineno = lineno
        raise


def read(fd, encoding='utf-8'):
    """Parse .po file and return a Catalog.

    Args:
       fd (file): A file-like object iterating over lines, in text or
           binary mode
       encoding (str): Encoding of the lines if they are bytes

    Returns:
        Catalog: A message catalog

    Raises:
        PoError: If a quoted string cannot be unescaped or a line cannot
            be decoded.  The error carries the file name and line number."""
    msgs = list(iparse(fd, encoding=encoding))
    return Catalog(msgs, fname=getfilename(fd), encoding=encoding)


def write(catalog, fd):
    """Write catalog as .po text to the text file fd."""
    catalog.write(fd)
