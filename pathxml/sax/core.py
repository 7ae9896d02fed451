from xml.sax.handler import ContentHandler as SaxHandler
from xml.sax.expatreader import create_parser
from xml.sax.xmlreader import InputSource
from xml.sax import SAXParseException
import io
import logging

from pathxml.tools import open_xml
from .errors import MalformedInputError
from .namespaces import NamespaceAliases
from .scope import HandlerScope


log = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096

ENCODINGS = {
    "UTF-8": "UTF-8",
    "UTF8": "UTF-8",
    "ISO-8859-1": "ISO-8859-1",
    "LATIN1": "ISO-8859-1",
    "LATIN-1": "ISO-8859-1",
    "US-ASCII": "US-ASCII",
    "ASCII": "US-ASCII",
}


def check_encoding(encoding):
    if encoding is None:
        return None
    try:
        return ENCODINGS[str(encoding).upper()]
    except KeyError:
        raise ValueError("unsupported input encoding %r; expected one of %s"
                         % (encoding, ", ".join(sorted(
                             set(ENCODINGS.values())))))


def check_chunk_size(chunk_size):
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) \
            or chunk_size <= 0:
        raise ValueError("read_chunk_size must be a positive integer, "
                         "not %r" % (chunk_size,))
    return chunk_size


OPTIONS = {
    "case_folding": bool,
    "skip_whitespace_only_text": bool,
    "trim_text": bool,
    "debug": bool,
    "input_encoding": check_encoding,
    "read_chunk_size": check_chunk_size,
}


class Dispatcher(HandlerScope, SaxHandler):
    """Routes the events of an XML document to a stack of HandlerScopes.

    The dispatcher is itself the root scope: handlers registered on it
    see paths relative to the document root."""

    def __init__(self, **options):
        HandlerScope.__init__(self)
        SaxHandler.__init__(self)
        self.case_folding = False
        self.skip_whitespace_only_text = True
        self.trim_text = True
        self.input_encoding = None
        self.read_chunk_size = DEFAULT_CHUNK_SIZE
        self.debug = False
        self.namespaces = NamespaceAliases()
        self.configure(**options)
        self.reset()

    def configure(self, **options):
        for name, value in options.items():
            if name not in OPTIONS:
                raise ValueError("unknown option %r" % (name,))
            setattr(self, name, OPTIONS[name](value))

    def set_alias(self, uri, alias):
        self.namespaces.set_alias(uri, alias)

    def reset(self):
        self.stack = [self]
        self.current = self
        self.current_path = ""
        self.pieces = []
        self.namespaces.reset()

    def parse(self, data):
        if isinstance(data, str):
            self.parse_stream(io.StringIO(data))
        else:
            self.parse_stream(io.BytesIO(data))

    def parse_file(self, path):
        with open_xml(path) as f:
            self.parse_stream(f, path=path)

    def parse_stream(self, stream, chunk_size=None, path=None):
        if chunk_size is None:
            chunk_size = self.read_chunk_size
        reader = create_parser(bufsize=check_chunk_size(chunk_size))
        reader.setContentHandler(self)
        source = InputSource(None if path is None else str(path))
        if isinstance(stream, io.TextIOBase):
            # already decoded; input_encoding only applies to bytes
            source.setCharacterStream(stream)
        else:
            source.setByteStream(stream)
            if self.input_encoding is not None:
                source.setEncoding(self.input_encoding)
        self.reset()
        try:
            reader.parse(source)
        except SAXParseException as e:
            raise MalformedInputError(e.getMessage(), e.getLineNumber(),
                                      e.getColumnNumber(), path) from e

    def startElement(self, name, attrs):
        self.flush()
        attrs = dict(attrs.items())
        if self.case_folding:
            name = name.lower()
            attrs = dict((k.lower(), v) for k, v in attrs.items())
        self.namespaces.open(attrs)
        name = self.namespaces.resolve(name)
        attrs = self.namespaces.resolve_attributes(attrs)
        if self.debug:
            log.debug("%s<%s%s>", "  " * (len(self.stack) - 1), name,
                      "".join(' %s="%s"' % kv for kv in attrs.items()))
        new_scope = self.current.on_start(name, attrs)
        self.stack.append(new_scope)
        if new_scope is not None:
            self.current = new_scope

    def endElement(self, name):
        self.flush()
        if self.case_folding:
            name = name.lower()
        name = self.namespaces.resolve(name)
        self.namespaces.close()
        self.stack.pop()
        self.current = self.nearest_scope()
        if self.debug:
            log.debug("%s</%s>", "  " * (len(self.stack) - 1), name)
        self.current.on_end(name)

    def characters(self, content):
        self.pieces.append(content)

    def endDocument(self):
        assert(len(self.stack) == 1)
        del self.pieces[:]

    def nearest_scope(self):
        for scope in reversed(self.stack):
            if scope is not None:
                return scope

    def flush(self):
        text = "".join(self.pieces)
        del self.pieces[:]
        if self.trim_text:
            text = text.strip()
        elif self.skip_whitespace_only_text and not text.strip():
            return
        if not text:
            return
        if self.debug:
            log.debug("%s%r", "  " * len(self.stack), text)
        self.current.on_text(text)
