from playres.roster.assignments import (
    Assignment, AssignmentCategory as Cat, ManCoverageAction, QBPassAction, RBRunAction,
    RouteAction, RunBlockAction, RushAction, ZoneShortAction,
)
from playres.roster.players import Player, Position
from playres.roster.traits import PlayContext, detect_trait, trait_label


def player(pos, **traits):
    return Player(name=f"{pos.value}1", position=pos, percentile=60, traits=traits)


def test_first_nonzero_matching_rule_wins():
    ol = player(Position.OG, **{"gap-blocker": 0, "hammer": 4})
    adj = detect_trait(ol, Assignment(Cat.RUN_BLOCK, RunBlockAction.GAP_LEFT_A))
    assert adj.trait == "hammer" and adj.value == 4

    ol = player(Position.OG, **{"gap-blocker": 3, "hammer": 4})
    assert detect_trait(ol, Assignment(Cat.RUN_BLOCK, RunBlockAction.GAP_LEFT_A)).trait == "gap-blocker"


def test_combo_block_is_gap_not_hammer():
    ol = player(Position.C, **{"hammer": 4})
    assert detect_trait(ol, Assignment(Cat.RUN_BLOCK, RunBlockAction.COMBO)) is None


def test_qb_boot_only_reads_escape_artist():
    qb = player(Position.QB, **{"pocket-passer": 6})
    assert detect_trait(qb, Assignment(Cat.PASS, QBPassAction.BOOT_RIGHT)) is None
    qb = player(Position.QB, **{"escape-artist": 6})
    assert detect_trait(qb, Assignment(Cat.PASS, QBPassAction.BOOT_RIGHT)).trait == "escape-artist"


def test_running_back_rules():
    rb = player(Position.RB, **{"speed-back": 3, "power-back": 5})
    assert detect_trait(rb, Assignment(Cat.RUN, RBRunAction.SWEEP)).trait == "speed-back"
    assert detect_trait(rb, Assignment(Cat.RUN, RBRunAction.LEFT_B_GAP)).trait == "power-back"
    assert detect_trait(rb, Assignment(Cat.RUN, RBRunAction.IZR_LEFT)) is None


def test_receiver_depth():
    wr = player(Position.WR, **{"deep-threat": 7, "quick-game": 2})
    assert detect_trait(wr, Assignment(Cat.ROUTE, RouteAction.GO)).trait == "deep-threat"
    assert detect_trait(wr, Assignment(Cat.ROUTE, RouteAction.SLANT)).trait == "quick-game"


def test_defensive_line_depends_on_play_type():
    de = player(Position.DE, **{"qb-predator": 5, "gap-stuffer": 0, "contain": 3})
    rush = Assignment(Cat.RUSH, RushAction.CONTAIN)
    assert detect_trait(de, rush, PlayContext("pass")).trait == "qb-predator"
    assert detect_trait(de, rush, PlayContext("run")).trait == "contain"


def test_press_corner_falls_through_to_location():
    cb = player(Position.CB, **{"man-coverage": 0, "presser": 6})
    man = Assignment(Cat.MAN_COVERAGE, ManCoverageAction.INSIDE_TECHNIQUE)
    assert detect_trait(cb, man, PlayContext("pass", "press left")).trait == "presser"
    assert detect_trait(cb, man, PlayContext("pass", "off right")) is None


def test_zone_like_calls_count_as_zone():
    s = player(Position.S, **{"zone-coverage": 4})
    assert detect_trait(s, Assignment(Cat.ZONE_SHORT, ZoneShortAction.TAMPA), PlayContext("pass")).value == 4
    assert detect_trait(s, Assignment(Cat.MAN_COVERAGE, ManCoverageAction.DEEP_TECHNIQUE),
                        PlayContext("pass")).trait == "zone-coverage"


def test_no_traits_no_adjustment():
    assert detect_trait(player(Position.LB), Assignment(Cat.RUSH, RushAction.LEFT_A_GAP)) is None


def test_labels():
    assert trait_label("qb-predator") == "QB Predator"
    assert trait_label("escape-artist") == "Escape Artist"
