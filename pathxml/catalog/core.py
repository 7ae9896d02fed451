from decimal import Decimal


class CatalogStruct(object):

    def __init__(self, fields):
        self.fields = fields


class CD(CatalogStruct):

    def __init__(self, fields=None):
        CatalogStruct.__init__(self, {} if fields is None else fields)

    @property
    def title(self):
        return self.fields.get('title')

    @property
    def artist(self):
        return self.fields.get('artist')

    @property
    def country(self):
        return self.fields.get('country')

    @property
    def company(self):
        return self.fields.get('company')

    @property
    def price(self):
        price = self.fields.get('price')
        if price is None:
            return None
        return Decimal(price)

    @property
    def year(self):
        year = self.fields.get('year')
        if year is None:
            return None
        return int(year)

    def __repr__(self):
        return "CD(%r, %r)" % (self.title, self.artist)


class Catalog(CatalogStruct):

    def __init__(self):
        CatalogStruct.__init__(self, {'cds': []})

    @property
    def cds(self):
        return self.fields['cds']

    def by_artist(self, artist):
        return [cd for cd in self.cds if cd.artist == artist]

    def total_price(self):
        return sum((cd.price for cd in self.cds if cd.price is not None),
                   Decimal(0))

    def __len__(self):
        return len(self.cds)
