from typing import Dict, Tuple

import networkx as nx
from loguru import logger
from rdkit import Chem
from rdkit.Chem import AllChem, Draw

from .elements import Element
from .graph import Graph

# ============================================================
# Bond Orders
# ============================================================

def assign_bond_orders(graph: Graph) -> Dict[Tuple[int, int], int]:
    """
    Guess bond orders from the hydrogen deficit of each atom.

    Each round matches up atoms that still have spare bonding capacity and
    raises every matched bond by one, until no two such atoms are bonded.
    Benzene comes out Kekulé, a ketone's C-O comes out double.
    """
    orders = {bond: 1 for bond in graph.bonds}
    deficit = {i: graph.implicit_hydrogens(i) for i in range(len(graph.atoms))}

    while True:
        open_atoms = nx.Graph()
        for a, b in graph.bonds:
            if deficit[a] > 0 and deficit[b] > 0 and orders[(a, b)] < 3:
                open_atoms.add_edge(a, b)

        matching = nx.max_weight_matching(open_atoms, maxcardinality=True)
        if not matching:
            break

        for a, b in matching:
            bond = (a, b) if (a, b) in orders else (b, a)
            orders[bond] += 1
            deficit[a] -= 1
            deficit[b] -= 1

    return orders


# ============================================================
# RDKit Conversion Functions
# ============================================================

BOND_TYPES = {1: Chem.BondType.SINGLE, 2: Chem.BondType.DOUBLE, 3: Chem.BondType.TRIPLE}


def graph_to_rdkit_mol(graph: Graph):
    rw_mol = Chem.RWMol()
    orders = assign_bond_orders(graph)

    for atom_element in graph.atoms:
        atom = Chem.Atom(atom_element.symbol)
        atom.SetNoImplicit(True)
        rw_mol.AddAtom(atom)

    for (a, b), order in orders.items():
        rw_mol.AddBond(a, b, BOND_TYPES[order])

    # whatever capacity is left after matching becomes unpaired electrons
    for i, element in enumerate(graph.atoms):
        used = sum(order for bond, order in orders.items() if i in bond)
        spare = element.standard_bonding_number - used
        if spare > 0 and element is not Element.HYDROGEN:
            logger.warning(f"Atom {i} ({element.symbol}) left with {spare} radical electron(s)")
            rw_mol.GetAtomWithIdx(i).SetNumRadicalElectrons(spare)

    mol = rw_mol.GetMol()
    try:
        Chem.SanitizeMol(mol)
    except Exception as e:
        logger.warning(f"Sanitization failed: {e}")

    return mol


def _without_hydrogens(mol):
    try:
        return Chem.RemoveHs(mol)
    except Exception as e:
        logger.warning(f"Keeping explicit hydrogens: {e}")
        mol.UpdatePropertyCache(strict=False)
        Chem.FastFindRings(mol)
        return mol


def graph_to_smiles(graph: Graph, canonical=True) -> str:
    mol = _without_hydrogens(graph_to_rdkit_mol(graph))
    return Chem.MolToSmiles(mol, canonical=canonical)


def draw_graph_with_rdkit(graph: Graph, filename="compound.png", size=(600, 400)):
    mol = _without_hydrogens(graph_to_rdkit_mol(graph))
    AllChem.Compute2DCoords(mol)
    img = Draw.MolToImage(mol, size=tuple(size))
    img.save(filename)
    logger.info(f"Saved {filename}")
    return filename
