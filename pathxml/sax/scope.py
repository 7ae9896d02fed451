from collections import namedtuple
from warnings import warn
import inspect

from .errors import InvalidHandlerError, MissingArgumentError


REQUIRED = inspect.Parameter.empty

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY,
               inspect.Parameter.POSITIONAL_OR_KEYWORD)


def normalize_name(name):
    return name.replace("-", "_").replace(".", "_").replace(":", "_")


def normalize_path(path):
    return normalize_name(path).replace("/", "_")


def normalize_attributes(attrs):
    return dict((normalize_name(k), v) for k, v in attrs.items())


def definition_site(handler):
    code = getattr(handler, "__code__", None)
    if code is None:
        return repr(handler)
    name = getattr(handler, "__qualname__", code.co_name)
    return "function %s defined in %s at line %d" % (
        name, code.co_filename, code.co_firstlineno)


class Key(namedtuple("Key", "kind path")):
    """A handler table key: an element path plus the kind of event.

    The string form is the registration wire format: a bare path for
    element handlers, and the path followed by "#text" or "#end" for text
    and end handlers."""

    __slots__ = ()

    ELEMENT = ""
    TEXT = "#text"
    END = "#end"

    @classmethod
    def element(cls, path):
        return cls(cls.ELEMENT, path)

    @classmethod
    def text(cls, path):
        return cls(cls.TEXT, path)

    @classmethod
    def end(cls, path):
        return cls(cls.END, path)

    @classmethod
    def parse(cls, key):
        if isinstance(key, cls):
            return key
        if not isinstance(key, str):
            raise TypeError("handler keys are paths (str) or Key, not %r"
                            % (key,))
        for kind in (cls.TEXT, cls.END):
            if key.endswith(kind):
                return cls(kind, key[:-len(kind)])
        return cls.element(key)

    @property
    def is_element(self):
        return self.kind == self.ELEMENT

    def __str__(self):
        return self.path + self.kind


class Argument(object):

    def __init__(self, name, default=REQUIRED, keyword=False):
        self.name = name
        self.default = default
        self.keyword = keyword

    @property
    def required(self):
        return self.default is REQUIRED

    def __repr__(self):
        if self.required:
            return "Argument(%r)" % (self.name,)
        return "Argument(%r, %r)" % (self.name, self.default)


class Binding(object):
    """Describes how an element handler is called.

    arguments are bound by name against the element's normalized
    attributes; scope is False, True, or the HandlerScope subclass to
    instantiate and pass as the first argument."""

    def __init__(self, arguments=(), scope=False, var_keyword=False):
        self.arguments = [self._argument(a) for a in arguments]
        self.scope = scope
        self.var_keyword = var_keyword

    @staticmethod
    def _argument(spec):
        if isinstance(spec, Argument):
            return spec
        if isinstance(spec, tuple):
            return Argument(*spec)
        return Argument(spec)

    @classmethod
    def from_callable(cls, handler, path):
        try:
            signature = inspect.signature(handler)
        except (TypeError, ValueError):
            return cls()
        params = list(signature.parameters.values())
        scope = False
        if params and params[0].kind in _POSITIONAL \
                and params[0].name == normalize_path(path):
            scope_type = _scope_type(params[0].annotation)
            if scope_type is not None:
                scope = scope_type
                params = params[1:]
        arguments = []
        var_keyword = False
        for param in params:
            if param.kind == inspect.Parameter.VAR_KEYWORD:
                var_keyword = True
            elif param.kind == inspect.Parameter.VAR_POSITIONAL:
                continue
            else:
                arguments.append(Argument(
                    param.name, param.default,
                    param.kind == inspect.Parameter.KEYWORD_ONLY))
        return cls(arguments, scope, var_keyword)

    def new_scope(self):
        if isinstance(self.scope, type):
            return self.scope()
        return HandlerScope()

    def bind(self, values, handler):
        args = []
        kwargs = dict()
        child = None
        if self.scope:
            child = self.new_scope()
            args.append(child)
        for argument in self.arguments:
            if argument.name in values:
                value = values[argument.name]
            elif not argument.required:
                value = argument.default
            else:
                raise MissingArgumentError(argument.name,
                                           definition_site(handler))
            if argument.keyword:
                kwargs[argument.name] = value
            else:
                args.append(value)
        if self.var_keyword:
            bound = set(a.name for a in self.arguments)
            for name, value in values.items():
                if name not in bound:
                    kwargs[name] = value
        return args, kwargs, child

    def __repr__(self):
        return "Binding(%r, scope=%r)" % (self.arguments, self.scope)


def _scope_type(annotation):
    if annotation is inspect.Parameter.empty:
        return HandlerScope
    if isinstance(annotation, str):
        annotation = _find_scope_type(annotation.rsplit(".", 1)[-1])
    if isinstance(annotation, type) and issubclass(annotation, HandlerScope):
        return annotation
    return None


def _find_scope_type(name):
    todo = [HandlerScope]
    while len(todo) > 0:
        cls = todo.pop()
        if cls.__name__ == name:
            return cls
        todo.extend(cls.__subclasses__())
    return None


class HandlerScope(object):
    """A table of handlers for one subtree of a document.

    current_path is relative to the element that created this scope, and
    only grows and shrinks with events routed to this scope."""

    def __init__(self):
        self.handlers = dict()
        self.current_path = ""

    def has(self, key):
        return Key.parse(key) in self.handlers

    def get(self, key):
        key = Key.parse(key)
        if key not in self.handlers:
            raise KeyError("undefined handler: %s" % (key,))
        return self.handlers[key][0]

    def set(self, key, handler, binding=None):
        key = Key.parse(key)
        if not callable(handler):
            raise InvalidHandlerError("handler for %s is not callable: %r"
                                      % (key, handler))
        if not key.is_element:
            if binding is not None:
                raise InvalidHandlerError("%s is not an element handler; "
                                          "it takes no binding" % (key,))
        elif binding is None:
            binding = Binding.from_callable(handler, key.path)
        self.handlers[key] = (handler, binding)

    def remove(self, key):
        self.handlers.pop(Key.parse(key), None)

    __contains__ = has
    __getitem__ = get
    __setitem__ = set
    __delitem__ = remove

    def on_start(self, name, attrs):
        if self.current_path:
            self.current_path += "/" + name
        else:
            self.current_path = name
        entry = self.handlers.get(Key.element(self.current_path))
        if entry is None:
            return None
        handler, binding = entry
        args, kwargs, child = binding.bind(normalize_attributes(attrs),
                                           handler)
        handler(*args, **kwargs)
        return child

    def on_end(self, name):
        path = self.current_path
        if path != name and not path.endswith("/" + name):
            warn("closing %s, but the current path is %r" % (name, path))
        self.current_path = path[:max(0, len(path) - len(name) - 1)]
        entry = self.handlers.get(Key.end(self.current_path))
        if entry is not None:
            entry[0]()

    def on_text(self, text):
        entry = self.handlers.get(Key.text(self.current_path))
        if entry is not None:
            entry[0](text)

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.current_path)
