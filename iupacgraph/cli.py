import argparse
import sys

from loguru import logger

from .builder import name_to_graph
from .config import configure_logging
from .errors import IupacError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="iupacgraph",
        description="Print the molecular graph of an IUPAC name as Graphviz DOT.",
    )
    parser.add_argument("name", help="IUPAC name, e.g. '4-(2-Aminoethyl)benzene-1,2-diol'")
    args = parser.parse_args(argv)

    configure_logging()

    try:
        graph = name_to_graph(args.name)
    except IupacError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    sys.stdout.write(graph.to_dot())
    return 0
