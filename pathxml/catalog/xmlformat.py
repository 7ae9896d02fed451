from functools import partial

from pathxml.tools import open_dispatcher
from .core import Catalog, CD


FIELDS = ("title", "artist", "country", "company", "price", "year")


def register(doc, catalog):
    """Registers the handlers that read <catalog><cd>... into catalog."""

    def catalog_cd(catalog_cd):
        cd = CD()
        catalog.cds.append(cd)
        for field in FIELDS:
            catalog_cd[field + "#text"] = partial(cd.fields.__setitem__,
                                                  field)

    doc["catalog/cd"] = catalog_cd


def load_catalog(path, config=None, **options):
    doc = open_dispatcher(config, {"case_folding": True}, **options)
    catalog = Catalog()
    register(doc, catalog)
    doc.parse_file(path)
    return catalog
