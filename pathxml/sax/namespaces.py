XMLNS = "xmlns"


def declared_prefix(name):
    """Returns the prefix declared by attribute name, or None.

    The default namespace (xmlns="...") declares the empty prefix."""
    if name == XMLNS:
        return ""
    if name.startswith(XMLNS + ":"):
        return name[len(XMLNS) + 1:]
    return None


class NamespaceAliases(object):

    def __init__(self):
        self.aliases = dict()
        self.reset()

    def reset(self):
        self.uris = dict()
        self.opened = []

    def set_alias(self, uri, alias):
        self.aliases[uri] = alias

    def open(self, attrs):
        prefixes = []
        for name, uri in attrs.items():
            prefix = declared_prefix(name)
            if prefix is None:
                continue
            if prefix not in self.uris:
                self.uris[prefix] = []
            self.uris[prefix].append(uri)
            prefixes.append(prefix)
        self.opened.append(prefixes)

    def close(self):
        for prefix in self.opened.pop():
            uris = self.uris[prefix]
            uris.pop()
            if len(uris) == 0:
                del self.uris[prefix]

    def lookup(self, prefix):
        uris = self.uris.get(prefix)
        if not uris:
            return None
        return uris[-1]

    def resolve(self, name):
        if ":" not in name:
            return name
        prefix, localname = name.split(":", 1)
        alias = self.aliases.get(self.lookup(prefix))
        if alias is None:
            return name
        return "%s_%s" % (alias, localname)

    def resolve_attributes(self, attrs):
        return dict((self.resolve(k), v) for k, v in attrs.items())
