from dataclasses import dataclass


L0 = "L0"
L1 = "L1"

# Trigger inputs per data-taking period: (name, word, bit).
#   0VBA / 0VBC: >=1 V0A / V0C cell fired in the beam-beam timing gate
#   0UBA / 0UBC: >=1 ADA / ADC cell fired in the beam-beam timing gate
#   0SH1: SPD fast-OR fired; 0STG: SPD topological; 0OM2: SPD multiplicity
#   0MUL: muon trigger; 0VOM: V0 multiplicity; 1ZED: ZDC electromagnetic dissociation
TRIGGER_INPUTS = {
    "pbpb2018": (
        ("0VBA", L0, 0),
        ("0VBC", L0, 1),
        ("0UBA", L0, 4),
        ("0UBC", L0, 5),
        ("0SH1", L0, 6),
        ("0OM2", L0, 9),
        ("0VOM", L0, 10),
        ("0MUL", L0, 13),
        ("0STG", L0, 19),
        ("1ZED", L1, 14),
    ),
    "pbpb2015": (
        ("0VBA", L0, 0),
        ("0VBC", L0, 1),
        ("0VOM", L0, 2),
        ("0SH1", L0, 6),
        ("0OM2", L0, 9),
        ("0UBA", L0, 11),
        ("0UBC", L0, 12),
        ("0MUL", L0, 13),
        ("0STG", L0, 21),
        ("1ZED", L1, 14),
    ),
    "xexe2017": (
        ("0VBA", L0, 0),
        ("0VBC", L0, 1),
        ("0UBA", L0, 4),
        ("0UBC", L0, 5),
        ("0SH1", L0, 6),
        ("0OM2", L0, 9),
        ("0VOM", L0, 10),
        ("0MUL", L0, 13),
        ("0STG", L0, 20),
        ("1ZED", L1, 13),
    ),
}

PERIODS = tuple(TRIGGER_INPUTS)


@dataclass
class ClassifierConfig:
    # Input groups
    side_a_inputs: tuple = ("0VBA", "0UBA")
    side_c_inputs: tuple = ("0VBC", "0UBC")
    central_inputs: tuple = ("0SH1", "0STG", "0OM2")
    # Anything in here firing makes the event non-empty
    beam_inputs: tuple = ("0VBA", "0VBC", "0UBA", "0UBC", "0SH1", "0STG",
                          "0OM2", "0MUL", "0VOM", "1ZED")

    # Central confirmation
    min_tracklets: int = 0

    # Offline V0/AD beam-gas decision on either side vetoes a collision candidate
    reject_offline_beam_gas: bool = True

    # LHC orbit has 3564 bunch slots
    max_bunch_crossing: int = 3563
