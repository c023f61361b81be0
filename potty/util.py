from codecs import lookup, StreamReaderWriter
import io
import re
import sys


def regex(pattern, flags=0):
    assert flags & re.UNICODE == 0
    flags |= re.UNICODE
    return re.compile(pattern, flags)


def getfilename(fd):
    try:
        name = fd.name
    except AttributeError:
        name = '<unknown>'
    return name


def get_bytes_input(name='-'):
    if name == '-':
        return sys.stdin.buffer
    else:
        try:
            return io.open(name, 'rb')
        except IOError as err:
            raise PoError('open-bytes-input', str(err))


def get_encoded_output(encoding, name='-', errors='strict'):
    if name == '-':
        return _srw(sys.stdout.buffer, encoding, errors=errors)
    else:
        try:
            return io.open(name, 'w', encoding=encoding, errors=errors,
                           newline='\n')
        except IOError as err:
            raise PoError('open-encoded-output', str(err))


def _srw(fd, encoding, errors='strict'):
    info = lookup(encoding)
    srw = StreamReaderWriter(fd, info.streamreader, info.streamwriter,
                             errors=errors)
    return srw


class PoError(Exception):
    def __init__(self, errtype, *args, **kwargs):
        # errtype is a unique short string identifying the error.
        # It is used to distinguish different errors by the test suite.
        self.errtype = errtype
        self.lineno = None
        self.fname = None
        self.exitcode = 2  # Default to 2 because OptionParser.error() does.
        super(PoError, self).__init__(*args, **kwargs)

    # Subclasses should override this
    def get_errmsg(self):
        tokens = []
        tokens.append(super(PoError, self).__str__())
        if self.fname is not None:
            tokens.append('\n')
            tokens.append('File: %s\n' % self.fname)
        if self.lineno is not None:
            tokens.append('Line: %d\n' % self.lineno)
        return ''.join(tokens)

    # Subclasses should leave this alone
    def __str__(self):
        return self.get_errmsg()


def pottymain(build_parser):
    """Decorator for potty main functions.

    Use like this:

        def build_parser():
            return OptionParser(...)

        @pottymain(build_parser)
        def main(parser):
            ...

        main()

    The decorated main function does the following:
     * Create parser from build_parser()
     * Run main(parser) where main is the undecorated function
     * Handle known errors gracefully (quit and write intelligible message)

    potcat is the reference example of how to use it."""
    def main_decorator(main):
        def pottymain():
            parser = build_parser()
            try:
                main(parser)
            except KeyboardInterrupt:
                progname = parser.get_prog_name()
                print('%s: %s' % (progname, 'Interrupted by keyboard'),
                      file=sys.stderr)
            except PoError as err:
                progname = parser.get_prog_name()
                print('%s: error: %s' % (progname, err), file=sys.stderr)
                sys.exit(err.exitcode)
        return pottymain
    return main_decorator
