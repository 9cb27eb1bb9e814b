from loguru import logger

from .builder import build, name_to_graph
from .config import get_settings
from .graph import Graph
from .inchi import InChI, parse_inchi
from .parser import parse
from .render import draw_graph_with_rdkit, graph_to_smiles

logger.disable("iupacgraph")


def graph(name):
    return name_to_graph(name)
def dot(name):
    return name_to_graph(name).to_dot()
def smiles(name):
    return graph_to_smiles(name_to_graph(name))
def draw(name, filename=None, size=None):
    settings = get_settings()
    filename = filename or settings.get("render", "filename")
    size = size or settings.get("render", "size")
    return draw_graph_with_rdkit(name_to_graph(name), filename, size)
