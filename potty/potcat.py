from optparse import OptionParser

from potty.util import pottymain, get_encoded_output, get_bytes_input
from potty.poparse import read, write
from potty.charsets import (get_gettext_encoding_name, set_header_charset,
                            get_normalized_encoding_name)


def build_parser():
    usage = '%prog [OPTION] [POFILE...]'
    description = ('parse POFILEs and write them back to stdout.  '
                   'With no POFILE, or when POFILE is -, read standard input')

    p = OptionParser(usage=usage,
                     description=description)
    p.add_option('--encoding', metavar='ENCODING', default='utf-8',
                 help='encoding of the input files [default: %default]')
    p.add_option('--encode', metavar='ENCODING',
                 help='convert output to ENCODING and update header '
                 '[default: input encoding]')
    p.add_option('-o', '--output', metavar='FILE', default='-',
                 help='write to FILE instead of stdout')
    return p


def read_catalog(name, encoding):
    fd = get_bytes_input(name)
    try:
        return read(fd, encoding=encoding)
    finally:
        if name != '-':
            fd.close()


@pottymain(build_parser)
def main(parser):
    opts, args = parser.parse_args()
    if not args:
        args = ['-']

    src_encoding = get_normalized_encoding_name(opts.encoding)
    if opts.encode is not None:
        gettext_name = get_gettext_encoding_name(opts.encode)
        dst_encoding = get_normalized_encoding_name(opts.encode)
    else:
        dst_encoding = src_encoding

    # Read everything before opening the output, which may be an input too
    cats = [read_catalog(arg, src_encoding) for arg in args]
    if opts.encode is not None:
        for cat in cats:
            header = cat.header
            if header is not None:
                set_header_charset(header, gettext_name)

    out = get_encoded_output(dst_encoding, opts.output)
    try:
        for i, cat in enumerate(cats):
            if i > 0:
                out.write('\n')
            write(cat, out)
    finally:
        out.flush()
        if opts.output != '-':
            out.close()


if __name__ == '__main__':
    main()
