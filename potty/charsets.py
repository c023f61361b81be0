from codecs import lookup

from potty.util import PoError

# Encodings taken verbatim from
# https://www.gnu.org/software/gettext/manual/html_node/Header-Entry.html
_gettext_encodings = set("""
ASCII, ISO-8859-1, ISO-8859-2, ISO-8859-3, ISO-8859-4, ISO-8859-5,
ISO-8859-6, ISO-8859-7, ISO-8859-8, ISO-8859-9, ISO-8859-13,
ISO-8859-14, ISO-8859-15, KOI8-R, KOI8-U, KOI8-T, CP850, CP866, CP874,
CP932, CP949, CP950, CP1250, CP1251, CP1252, CP1253, CP1254, CP1255,
CP1256, CP1257, GB2312, EUC-JP, EUC-KR, EUC-TW, BIG5, BIG5-HKSCS, GBK,
GB18030, SHIFT_JIS, JOHAB, TIS-620, VISCII, GEORGIAN-PS,
UTF-8""".replace(',', ' ').split())


_encoding_map = {}
for name in _gettext_encodings:
    try:
        codec_info = lookup(name)
    except LookupError:
        pass
    else:
        _encoding_map[codec_info.name] = name


def get_normalized_encoding_name(name):
    try:
        codec_info = lookup(name)
    except LookupError as err:
        raise PoError('bad-charset', 'Charset not recognized: %s' % err)
    return codec_info.name


def get_gettext_encoding_name(name):
    """Return the name gettext uses for the encoding, e.g. 'ISO-8859-1'."""
    pyname = get_normalized_encoding_name(name)
    gettextname = _encoding_map.get(pyname)
    if gettextname is None:
        raise PoError('bad-charset', 'Unsupported charset: %s' % name)
    return gettextname


def set_header_charset(msg, charset):
    """Rewrite the Content-Type line of header msg to declare charset.

    A header without a Content-Type line is left alone."""
    if msg.msgstr is None:
        return
    lines = msg.msgstr.split('\n')
    for i, line in enumerate(lines):
        if line.startswith('Content-Type:'):
            lines[i] = 'Content-Type: text/plain; charset=%s' % charset
            msg.msgstrs[0] = '\n'.join(lines)
            return
