from functools import singledispatch

from loguru import logger

from .errors import InvariantError
from .graph import Graph, free_valence, substitute, unsaturate
from .parser import AST, BaseNode, GroupNode, HydrideNode, SubstitutionNode, UnsaturatedNode, parse

# ============================================================
# AST -> Graph
# ============================================================

@singledispatch
def build(ast: AST) -> Graph:
    raise InvariantError(f"Cannot build a graph from {ast!r}")


@build.register
def _(ast: HydrideNode) -> Graph:
    return ast.hydride.to_graph()


@build.register
def _(ast: BaseNode) -> Graph:
    return ast.base.to_graph()


@build.register
def _(ast: GroupNode) -> Graph:
    return free_valence(build(ast.child))


@build.register
def _(ast: UnsaturatedNode) -> Graph:
    return unsaturate(ast.degree, build(ast.child))


@build.register
def _(ast: SubstitutionNode) -> Graph:
    group = build(ast.group)
    parent = build(ast.parent)
    return substitute(ast.locant, group, parent)


def name_to_graph(name: str) -> Graph:
    """IUPAC name -> validated molecular graph."""
    graph = build(parse(name))
    graph.validate()
    logger.debug(f"{name!r} -> {graph.formula()}, {len(graph.atoms)} atoms, {len(graph.bonds)} bonds")
    return graph
