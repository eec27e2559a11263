"""Piecewise power-law drag tables for the standard drag functions.

Each table approximates the retardation of one standard reference projectile
(G1 through G8) as ``A * v**M`` over a velocity interval. Rows are sorted
descending by their velocity lower bound: a row applies when the speed is
strictly above its ``Velocity`` and no earlier row applies.

G3 and G4 were never fit and have no table. Requesting them is a configuration
error, see ``get_drag_table``.
"""
from enum import IntEnum

from typing_extensions import Dict, List, Tuple, TypedDict

from py_gnuballistics.exceptions import DragDomainError

__all__ = (
    'DragFunction',
    'DragTablePointDictType',
    'TableG1',
    'TableG2',
    'TableG5',
    'TableG6',
    'TableG7',
    'TableG8',
    'DRAG_TABLES',
    'get_drag_table',
    'get_drag_tables_names',
)


class DragFunction(IntEnum):
    """Standard drag function families."""
    G1 = 1
    G2 = 2
    G3 = 3
    G4 = 4
    G5 = 5
    G6 = 6
    G7 = 7
    G8 = 8


class DragTablePointDictType(TypedDict):
    Velocity: float
    A: float
    M: float


TableG1: List[DragTablePointDictType] = [
    {'Velocity': 4230, 'A': 1.477404177730177e-04, 'M': 1.9565},
    {'Velocity': 3680, 'A': 1.920339268755614e-04, 'M': 1.925},
    {'Velocity': 3450, 'A': 2.894751026819746e-04, 'M': 1.875},
    {'Velocity': 3295, 'A': 4.349905111115636e-04, 'M': 1.825},
    {'Velocity': 3130, 'A': 6.520421871892662e-04, 'M': 1.775},
    {'Velocity': 2960, 'A': 9.748073694078696e-04, 'M': 1.725},
    {'Velocity': 2830, 'A': 1.453721560187286e-03, 'M': 1.675},
    {'Velocity': 2680, 'A': 2.162887202930376e-03, 'M': 1.625},
    {'Velocity': 2460, 'A': 3.209559783129881e-03, 'M': 1.575},
    {'Velocity': 2225, 'A': 3.904368218691249e-03, 'M': 1.55},
    {'Velocity': 2015, 'A': 3.222942271262336e-03, 'M': 1.575},
    {'Velocity': 1890, 'A': 2.203329542297809e-03, 'M': 1.625},
    {'Velocity': 1810, 'A': 1.511001028891904e-03, 'M': 1.675},
    {'Velocity': 1730, 'A': 8.609957592468259e-04, 'M': 1.75},
    {'Velocity': 1595, 'A': 4.086146797305117e-04, 'M': 1.85},
    {'Velocity': 1520, 'A': 1.954473210037398e-04, 'M': 1.95},
    {'Velocity': 1420, 'A': 5.431896266462351e-05, 'M': 2.125},
    {'Velocity': 1360, 'A': 8.847742581674416e-06, 'M': 2.375},
    {'Velocity': 1315, 'A': 1.456922328720298e-06, 'M': 2.625},
    {'Velocity': 1280, 'A': 2.419485191895565e-07, 'M': 2.875},
    {'Velocity': 1220, 'A': 1.657956321067612e-08, 'M': 3.25},
    {'Velocity': 1185, 'A': 4.745469537157371e-10, 'M': 3.75},
    {'Velocity': 1150, 'A': 1.379746590025088e-11, 'M': 4.25},
    {'Velocity': 1100, 'A': 4.070157961147882e-13, 'M': 4.75},
    {'Velocity': 1060, 'A': 2.938236954847331e-14, 'M': 5.125},
    {'Velocity': 1025, 'A': 1.228597370774746e-14, 'M': 5.25},
    {'Velocity': 980, 'A': 2.916938264100495e-14, 'M': 5.125},
    {'Velocity': 945, 'A': 3.855099424807451e-13, 'M': 4.75},
    {'Velocity': 905, 'A': 1.185097045689854e-11, 'M': 4.25},
    {'Velocity': 860, 'A': 3.566129470974951e-10, 'M': 3.75},
    {'Velocity': 810, 'A': 1.045513263966272e-08, 'M': 3.25},
    {'Velocity': 780, 'A': 1.291159200846216e-07, 'M': 2.875},
    {'Velocity': 750, 'A': 6.824429329105383e-07, 'M': 2.625},
    {'Velocity': 700, 'A': 3.569169672385163e-06, 'M': 2.375},
    {'Velocity': 640, 'A': 1.839015095899579e-05, 'M': 2.125},
    {'Velocity': 600, 'A': 5.71117468873424e-05, 'M': 1.950},
    {'Velocity': 550, 'A': 9.226557091973427e-05, 'M': 1.875},
    {'Velocity': 250, 'A': 9.337991957131389e-05, 'M': 1.875},
    {'Velocity': 100, 'A': 7.225247327590413e-05, 'M': 1.925},
    {'Velocity': 65, 'A': 5.792684957074546e-05, 'M': 1.975},
    {'Velocity': 0, 'A': 5.206214107320588e-05, 'M': 2.000},
]

TableG2: List[DragTablePointDictType] = [
    {'Velocity': 1674, 'A': 0.0079470052136733, 'M': 1.36999902851493},
    {'Velocity': 1172, 'A': 1.00419763721974e-03, 'M': 1.65392237010294},
    {'Velocity': 1060, 'A': 7.15571228255369e-23, 'M': 7.91913562392361},
    {'Velocity': 949, 'A': 1.39589807205091e-10, 'M': 3.81439537623717},
    {'Velocity': 670, 'A': 2.34364342818625e-04, 'M': 1.71869536324748},
    {'Velocity': 335, 'A': 1.77962438921838e-04, 'M': 1.76877550388679},
    {'Velocity': 0, 'A': 5.18033561289704e-05, 'M': 1.98160270524632},
]

TableG5: List[DragTablePointDictType] = [
    {'Velocity': 1730, 'A': 7.24854775171929e-03, 'M': 1.41538574492812},
    {'Velocity': 1228, 'A': 3.50563361516117e-05, 'M': 2.13077307854948},
    {'Velocity': 1116, 'A': 1.84029481181151e-13, 'M': 4.81927320350395},
    {'Velocity': 1004, 'A': 1.34713064017409e-22, 'M': 7.8100555281422},
    {'Velocity': 837, 'A': 1.03965974081168e-07, 'M': 2.84204791809926},
    {'Velocity': 335, 'A': 1.09301593869823e-04, 'M': 1.81096361579504},
    {'Velocity': 0, 'A': 3.51963178524273e-05, 'M': 2.00477856801111},
]

TableG6: List[DragTablePointDictType] = [
    {'Velocity': 3236, 'A': 0.0455384883480781, 'M': 1.15997674041274},
    {'Velocity': 2065, 'A': 7.167261849653769e-02, 'M': 1.10704436538885},
    {'Velocity': 1311, 'A': 1.66676386084348e-03, 'M': 1.60085100195952},
    {'Velocity': 1144, 'A': 1.01482730119215e-07, 'M': 2.9569674731838},
    {'Velocity': 1004, 'A': 4.31542773103552e-18, 'M': 6.34106317069757},
    {'Velocity': 670, 'A': 2.04835650496866e-05, 'M': 2.11688446325998},
    {'Velocity': 0, 'A': 7.50912466084823e-05, 'M': 1.92031057847052},
]

TableG7: List[DragTablePointDictType] = [
    {'Velocity': 4200, 'A': 1.29081656775919e-09, 'M': 3.24121295355962},
    {'Velocity': 3000, 'A': 0.0171422231434847, 'M': 1.27907168025204},
    {'Velocity': 1470, 'A': 2.33355948302505e-03, 'M': 1.52693913274526},
    {'Velocity': 1260, 'A': 7.97592111627665e-04, 'M': 1.67688974440324},
    {'Velocity': 1110, 'A': 5.71086414289273e-12, 'M': 4.3212826264889},
    {'Velocity': 960, 'A': 3.02865108244904e-17, 'M': 5.99074203776707},
    {'Velocity': 670, 'A': 7.52285155782535e-06, 'M': 2.1738019851075},
    {'Velocity': 540, 'A': 1.31766281225189e-05, 'M': 2.08774690257991},
    {'Velocity': 0, 'A': 1.34504843776525e-05, 'M': 2.08702306738884},
]

TableG8: List[DragTablePointDictType] = [
    {'Velocity': 3571, 'A': 0.0112263766252305, 'M': 1.33207346655961},
    {'Velocity': 1841, 'A': 0.0167252613732636, 'M': 1.28662041261785},
    {'Velocity': 1120, 'A': 2.20172456619625e-03, 'M': 1.55636358091189},
    {'Velocity': 1088, 'A': 2.0538037167098e-16, 'M': 5.80410776994789},
    {'Velocity': 976, 'A': 5.92182174254121e-12, 'M': 4.29275576134191},
    {'Velocity': 0, 'A': 4.3917343795117e-05, 'M': 1.99978116283334},
]

DRAG_TABLES: Dict[DragFunction, List[DragTablePointDictType]] = {
    DragFunction.G1: TableG1,
    DragFunction.G2: TableG2,
    DragFunction.G5: TableG5,
    DragFunction.G6: TableG6,
    DragFunction.G7: TableG7,
    DragFunction.G8: TableG8,
}


def get_drag_table(drag_function: DragFunction) -> List[DragTablePointDictType]:
    """Return the breakpoint table for drag_function.

    Raises:
        DragDomainError: If the family has no fitted table (G3, G4).
    """
    try:
        return DRAG_TABLES[DragFunction(drag_function)]
    except (KeyError, ValueError) as exc:
        raise DragDomainError(DragDomainError.UNSUPPORTED_DRAG_FUNCTION, drag_function=drag_function) from exc


def get_drag_tables_names() -> Tuple[str, ...]:
    """Names of the populated tables, e.g. ('TableG1', 'TableG2', ...)."""
    return tuple(f"Table{fn.name}" for fn in DRAG_TABLES)
