from pathxml.catalog.xmlformat import load_catalog
from pathxml.tools import config_path
import argparse
import logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Show the CDs in a catalog")
    parser.add_argument("catalog_file")
    parser.add_argument("--config", type=str, default=None,
                        help="yaml file with parser options")
    parser.add_argument("--artist", type=str, default=None)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    config = args.config
    if config is None:
        config = config_path(args.catalog_file)
    catalog = load_catalog(args.catalog_file, config)
    cds = catalog.cds
    if args.artist is not None:
        cds = catalog.by_artist(args.artist)
    for cd in cds:
        print("%-30s %-20s %4s %8s" % (cd.title, cd.artist, cd.year,
                                       cd.price))
    print("%d cds, total %s" % (len(cds), sum(
        (cd.price for cd in cds if cd.price is not None), 0)))


if __name__ == "__main__":
    main()
