"""Common tools for unit testing potty"""

import io

from potty.poparse import read


def parse_string(text):
    """Parse .po text given as a string and return the Catalog"""
    return read(io.StringIO(text))


def fields(msg):
    """Return everything a message holds, for comparing messages"""
    return (msg.msgctxt, msg.msgid, msg.msgid_plural, list(msg.msgstrs),
            list(msg.comments))
