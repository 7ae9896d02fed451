import gzip
import os.path
import yaml


def open_xml(path):
    """Opens path for reading bytes, gunzipping it if it is gzipped."""
    f = None
    try:
        # gzip only checks the magic number on the first read
        f = gzip.open(path)
        f.read(1)
        f.seek(0)
    except IOError:
        # not gzipped, or missing; open() raises again for the latter
        if f is not None:
            f.close()
        f = open(path, "rb")
    return f


def load_options(path):
    """Loads parser options from a yaml file.

    Returns a pair (options, aliases): options are keyword arguments
    for Dispatcher, aliases maps namespace uris to their aliases."""

    with open(path) as f:
        d = yaml.safe_load(f)

    if d is None:
        d = {}
    if not isinstance(d, dict):
        raise ValueError("%s: expected a mapping of options, got %r"
                         % (path, d))
    d = dict(d)
    aliases = d.pop('aliases', None) or {}
    if not isinstance(aliases, dict):
        raise ValueError("%s: aliases should map namespace uris to "
                         "aliases, got %r" % (path, aliases))
    return d, aliases


def open_dispatcher(path=None, defaults=None, **options):
    """Creates a Dispatcher, configured by the yaml file at path (if any).

    The options from the file override defaults, and keyword arguments
    override both."""
    from pathxml.sax.core import Dispatcher

    aliases = {}
    settings = dict(defaults or {})
    if path is not None:
        loaded, aliases = load_options(path)
        settings.update(loaded)
    settings.update(options)
    doc = Dispatcher(**settings)
    for uri, alias in aliases.items():
        doc.set_alias(uri, alias)
    return doc


def config_path(xml_path):
    """Returns the yaml file next to xml_path that configures it, if any."""
    xml_path = str(xml_path)
    for candidate in (xml_path + ".yaml", os.path.join(
            os.path.dirname(xml_path), "pathxml.yaml")):
        if os.path.exists(candidate):
            return candidate
    return None
