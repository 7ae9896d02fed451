class PathXmlError(Exception):
    pass


class MalformedInputError(PathXmlError, ValueError):

    def __init__(self, message, line=None, column=None, path=None):
        PathXmlError.__init__(self, "XML error: %s at line %s in %s"
                              % (message, line,
                                 'input' if path is None else path))
        self.message = message
        self.line = line
        self.column = column
        self.path = path


class MissingArgumentError(PathXmlError, TypeError):

    def __init__(self, argument, site):
        PathXmlError.__init__(self, "unable to satisfy required argument "
                              "%s for %s" % (argument, site))
        self.argument = argument
        self.site = site


class InvalidHandlerError(PathXmlError, TypeError):
    pass
