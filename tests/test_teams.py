from csdemo.teams import Color, Team


def test_team_values():
    assert Team(0) is Team.UNASSIGNED
    assert Team(2) is Team.TERRORISTS
    assert Team(3) is Team.COUNTER_TERRORISTS


def test_color_grey_value():
    assert Color(-1) is Color.Grey


def test_color_names():
    assert str(Color(0)) == "Yellow"
    assert str(Color(-1)) == "Grey"
    assert str(Color(4)) == "Orange"


def test_color_from_int_round_trip():
    for color in Color:
        assert Color(int(color)) is color


def test_unknown_color():
    assert str(Color(42)) == "Unknown-Color"
    assert Color(42) == 42