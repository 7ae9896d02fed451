from pathxml.tools import open_dispatcher
import argparse
import logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Print the events pathxml dispatches for an xml file")
    parser.add_argument("xml_file")
    parser.add_argument("--config", type=str, default=None,
                        help="yaml file with parser options")
    parser.add_argument("--case-folding", dest="case_folding",
                        action="store_true", default=False)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG, format="%(message)s")
    options = {"debug": True}
    if args.case_folding:
        options["case_folding"] = True
    doc = open_dispatcher(args.config, **options)
    doc.parse_file(args.xml_file)


if __name__ == "__main__":
    main()
