from pathxml.sax.core import Dispatcher
from pathxml.sax.errors import PathXmlError, MalformedInputError, \
    MissingArgumentError, InvalidHandlerError
from pathxml.sax.scope import HandlerScope, Binding, Argument, Key

__all__ = [
    "Dispatcher", "HandlerScope", "Binding", "Argument", "Key",
    "PathXmlError", "MalformedInputError", "MissingArgumentError",
    "InvalidHandlerError",
]
