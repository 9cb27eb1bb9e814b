"""
Reference molecules: IUPAC names and their standard InChI strings.
"""

ISOPROPANOL = "Propan-2-ol"
ISOBUTANE = "2-Methylpropane"
DOPAMINE = "4-(2-Aminoethyl)benzene-1,2-diol"
SALBUTAMOL = "(RS)-4-[2-(tert-Butylamino)-1-hydroxyethyl]-2-(hydroxymethyl)phenol"
CAFFEINE = "1,3,7-Trimethyl-3,7-dihydro-1H-purine-2,6-dione"
ADENINE = "9H-Purin-6-amine"
THYMINE = "5-Methylpyrimidine-2,4(1H,3H)-dione"
CYTOSINE = "4-Aminopyrimidin-2(1H)-one"
GUANINE = "2-Amino-1,9-dihydro-6H-purin-6-one"

INCHI = {
    ISOPROPANOL: "InChI=1S/C3H8O/c1-3(2)4/h3-4H,1-2H3",
    ISOBUTANE: "InChI=1S/C4H10/c1-4(2)3/h4H,1-3H3",
    DOPAMINE: "InChI=1S/C8H11NO2/c9-4-3-6-1-2-7(10)8(11)5-6/h1-2,5,10-11H,3-4,9H2",
    SALBUTAMOL: "InChI=1S/C13H21NO3/c1-13(2,3)14-7-12(17)9-4-5-11(16)10(6-9)8-15/h4-6,12,14-17H,7-8H2,1-3H3",
    CAFFEINE: "InChI=1S/C8H10N4O2/c1-10-4-9-6-5(10)7(13)12(3)8(14)11(6)2/h4H,1-3H3",
    ADENINE: "InChI=1S/C5H5N5/c6-4-3-5(9-1-7-3)10-2-8-4/h1-2H,(H3,6,7,8,9,10)",
    THYMINE: "InChI=1S/C5H6N2O2/c1-3-2-6-5(9)7-4(3)8/h2H,1H3,(H2,6,7,8,9)",
    CYTOSINE: "InChI=1S/C4H5N3O/c5-3-1-2-6-4(8)7-3/h1-2H,(H3,5,6,7,8)",
    GUANINE: "InChI=1S/C5H5N5O/c6-5-9-3-2(4(11)10-5)7-1-8-3/h1H,(H4,6,7,8,9,10,11)",
}

FORMULAS = {
    ISOPROPANOL: "C3H8O",
    ISOBUTANE: "C4H10",
    DOPAMINE: "C8H11NO2",
    SALBUTAMOL: "C13H21NO3",
    CAFFEINE: "C8H10N4O2",
    ADENINE: "C5H5N5",
    THYMINE: "C5H6N2O2",
    CYTOSINE: "C4H5N3O",
    GUANINE: "C5H5N5O",
}

# (carbon count, composite multiplicative prefix)
COMPOSITE_PREFIXES = [
    (14, "tetradeca"),
    (21, "henicosa"),
    (22, "docosa"),
    (23, "tricosa"),
    (24, "tetracosa"),
    (41, "hentetraconta"),
    (52, "dopentaconta"),
    (111, "undecahecta"),
    (363, "trihexacontatricta"),
    (486, "hexaoctacontatetracta"),
]

BUTANE_DOT = """\
// Compile using `neato`
graph molecule {
    0 [label="C", shape=none];
    1 [label="C", shape=none];
    2 [label="C", shape=none];
    3 [label="C", shape=none];
    4 [label="H", shape=none];
    5 [label="H", shape=none];
    6 [label="H", shape=none];
    7 [label="H", shape=none];
    8 [label="H", shape=none];
    9 [label="H", shape=none];
    10 [label="H", shape=none];
    11 [label="H", shape=none];
    12 [label="H", shape=none];
    13 [label="H", shape=none];
    0 -- 1;
    1 -- 2;
    2 -- 3;
    0 -- 4;
    0 -- 8;
    1 -- 5;
    1 -- 9;
    2 -- 6;
    2 -- 10;
    3 -- 7;
    3 -- 11;
    0 -- 12;
    3 -- 13;
}
"""
