import pytest

from csdemo.entity import Entity, PropertyValue
from csdemo.flags import DataNotAvailableError, NotSupportedByDemoError
from csdemo.scoreboard import ScoreboardMixin
from csdemo.teams import Color


class _Provider:
    def __init__(self, resource=None, source2=False):
        self._resource = resource
        self._source2 = source2

    def is_source2(self):
        return self._source2

    def player_resource_entity(self):
        return self._resource


class _Player(ScoreboardMixin):
    def __init__(self, provider, entity=None, entity_id=1, pawn=None):
        self.demo_info_provider = provider
        self.entity = entity
        self.entity_id = entity_id
        self._pawn = pawn

    def player_pawn_entity(self):
        return self._pawn


def _entity(**props):
    return Entity(1, properties=dict(props))


def _resource_player(prop, value):
    resource = Entity(1, properties={prop + ".001": value})
    return _Player(_Provider(resource=resource))


def test_clan_tag():
    pl = _resource_player("m_szClan", PropertyValue(raw="SuperClan"))
    assert pl.clan_tag() == "SuperClan"


def test_crosshair_code():
    code = "CSGO-jvnbx-S3xFK-iEJXD-Y27Nd-AO6FP"
    pl = _resource_player("m_szCrosshairCodes", PropertyValue(string_val=code))
    assert pl.crosshair_code() == code


def test_without_crosshair_code():
    pl = _Player(_Provider(), entity_id=0)
    assert pl.crosshair_code() == ""

    pl = _Player(_Provider(resource=Entity(1)), entity_id=0)
    assert pl.crosshair_code() == ""


@pytest.mark.parametrize(
    "prop, value, method",
    [
        ("m_iPing", 45, "ping"),
        ("m_iScore", 10, "score"),
        ("m_iKills", 5, "kills"),
        ("m_iDeaths", 2, "deaths"),
        ("m_iAssists", 3, "assists"),
        ("m_iMVPs", 4, "mvps"),
        ("m_iMatchStats_Damage_Total", 2900, "total_damage"),
        ("m_iMatchStats_UtilityDamage_Total", 420, "utility_damage"),
        ("m_iCompetitiveRankType", 6, "rank_type"),
        ("m_iCompetitiveRanking", 10, "rank"),
        ("m_iCompetitiveWins", 190, "competitive_wins"),
        ("m_iTotalCashSpent", 700, "money_spent_total"),
        ("m_iCashSpentThisRound", 300, "money_spent_this_round"),
    ],
)
def test_resource_values(prop, value, method):
    pl = _resource_player(prop, PropertyValue(int_val=value))
    assert getattr(pl, method)() == value


def test_rank_type_missing_property():
    pl = _Player(_Provider(resource=Entity(1)))
    assert pl.rank_type() == -1


def test_money():
    pl = _Player(_Provider(), entity=_entity(m_iAccount=PropertyValue(int_val=800)))
    assert pl.money() == 800


def test_color():
    pl = _resource_player("m_iCompTeammateColor", PropertyValue(int_val=int(Color.Yellow)))
    assert pl.color() == Color.Yellow

    assert _Player(_Provider()).color() == Color.Grey

    pl = _Player(_Provider(resource=Entity(1)), entity_id=1)
    assert pl.color() == Color.Grey


def test_color_or_err():
    pl = _resource_player("m_iCompTeammateColor", PropertyValue(int_val=int(Color.Yellow)))
    assert pl.color_or_err() == Color.Yellow

    with pytest.raises(DataNotAvailableError):
        _Player(_Provider()).color_or_err()

    with pytest.raises(NotSupportedByDemoError):
        _Player(_Provider(resource=Entity(1)), entity_id=1).color_or_err()


def test_equipment_values_source1():
    ent = _entity(
        m_unCurrentEquipmentValue=PropertyValue(int_val=100),
        m_unRoundStartEquipmentValue=PropertyValue(int_val=200),
        m_unFreezetimeEndEquipmentValue=PropertyValue(int_val=300),
    )
    pl = _Player(_Provider(), entity=ent)
    assert pl.equipment_value_current() == 100
    assert pl.equipment_value_round_start() == 200
    assert pl.equipment_value_freeze_time_end() == 300


def test_equipment_values_source2_use_pawn():
    pawn = _entity(
        m_unCurrentEquipmentValue=PropertyValue(raw=1500, s2=True),
        m_unRoundStartEquipmentValue=PropertyValue(raw=800, s2=True),
        m_unFreezetimeEndEquipmentValue=PropertyValue(raw=4700, s2=True),
    )
    pl = _Player(_Provider(source2=True), entity=Entity(2), pawn=pawn)
    assert pl.equipment_value_current() == 1500
    assert pl.equipment_value_round_start() == 800
    assert pl.equipment_value_freeze_time_end() == 4700


def test_equipment_value_source2_without_pawn():
    pl = _Player(_Provider(source2=True), entity=Entity(2))
    assert pl.equipment_value_current() == 0


def test_source2_controller_values():
    ent = _entity(
        **{
            "m_pInGameMoneyServices.m_iAccount": PropertyValue(raw=1200, s2=True),
            "m_pActionTrackingServices.m_iKills": PropertyValue(raw=7, s2=True),
            "m_iPing": PropertyValue(raw=33, s2=True),
            "m_szClan": PropertyValue(raw="Tag", s2=True),
            "m_iCompTeammateColor": PropertyValue(raw=2, s2=True),
        }
    )
    pl = _Player(_Provider(source2=True), entity=ent)
    assert pl.money() == 1200
    assert pl.kills() == 7
    assert pl.ping() == 33
    assert pl.clan_tag() == "Tag"
    assert pl.color_or_err() == Color.Green


def test_source2_damage_without_value_is_zero():
    ent = _entity(
        **{
            "m_pActionTrackingServices.m_iDamage": PropertyValue(s2=True),
            "m_pActionTrackingServices.m_iUtilityDamage": PropertyValue(raw=55, s2=True),
        }
    )
    pl = _Player(_Provider(source2=True), entity=ent)
    assert pl.total_damage() == 0
    assert pl.utility_damage() == 55


def test_unknown_color_value_has_fallback_name():
    pl = _resource_player("m_iCompTeammateColor", PropertyValue(int_val=9))
    assert str(pl.color()) == "Unknown-Color"