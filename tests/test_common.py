from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Optional

from csdemo.common import Bomb, DemoHeader, GrenadeProjectile, TeamState
from csdemo.entity import Entity, PropertyValue
from csdemo.player import Player
from csdemo.teams import Team
from csdemo.vector import Vector


@dataclass
class _Provider:
    source2: bool = False
    resource: Optional[Entity] = None
    players: Dict[int, object] = field(default_factory=dict)

    def ingame_tick(self):
        return 0

    def tick_rate(self):
        return 128.0

    def find_player_by_handle(self, handle):
        return self.players.get(handle)

    def find_player_by_pawn_handle(self, handle):
        return self.players.get(handle)

    def player_resource_entity(self):
        return self.resource

    def find_weapon_by_entity_id(self, entity_id):
        return None

    def find_entity_by_handle(self, handle):
        return None

    def is_source2(self):
        return self.source2


def _entity(name, value, origin=Vector()):
    return Entity(1, origin, {name: value})


def test_bomb_position():
    ground = Vector(1, 2, 3)
    bomb = Bomb(last_on_ground_position=ground)
    assert bomb.position() == ground

    player_pos = Vector(4, 5, 6)
    bomb.carrier = Player(demo_info_provider=_Provider(), entity=Entity(1, player_pos))
    assert bomb.position() == player_pos


def test_grenade_projectile_unique_id():
    count = 50
    ids = {GrenadeProjectile().unique_id() for _ in range(count)}
    assert len(ids) == count

    projectile = GrenadeProjectile()
    assert projectile.unique_id() == projectile.unique_id()


def test_grenade_projectile_velocity():
    expected = Vector(1, 2, 3)
    p = GrenadeProjectile(entity=_entity("m_vecVelocity", PropertyValue(vector_val=expected)))
    assert p.velocity() == expected


def test_grenade_projectile_position():
    p = GrenadeProjectile(entity=Entity(1, Vector(7, 8, 9)))
    assert p.position() == Vector(7, 8, 9)


def test_demo_header():
    header = DemoHeader(
        playback_frames=256, playback_ticks=512, playback_time=timedelta(seconds=4)
    )
    assert header.frame_rate() == 64.0
    assert header.frame_time() == timedelta(seconds=1) / 64


def test_demo_header_frame_rate_playback_time_zero():
    assert DemoHeader().frame_rate() == 0


def test_demo_header_frame_time_playback_frames_zero():
    assert DemoHeader().frame_time() == timedelta(0)


def test_team_state_team():
    t_state = TeamState(Team.TERRORISTS, None, _Provider())
    ct_state = TeamState(Team.COUNTER_TERRORISTS, None, _Provider())
    assert t_state.team() == Team.TERRORISTS
    assert ct_state.team() == Team.COUNTER_TERRORISTS


def test_team_state_members():
    prov = _Provider()
    members = [Player(demo_info_provider=prov), Player(demo_info_provider=prov)]
    state = TeamState(Team.TERRORISTS, lambda team: members, prov)
    assert state.members() == members


def _members_with(prop):
    prov = _Provider()
    return prov, [
        Player(demo_info_provider=prov, entity=_entity(prop, PropertyValue(int_val=100))),
        Player(demo_info_provider=prov, entity=_entity(prop, PropertyValue(int_val=200))),
    ]


def test_team_state_equipment_value_current():
    prov, members = _members_with("m_unCurrentEquipmentValue")
    state = TeamState(Team.TERRORISTS, lambda team: members, prov)
    assert state.current_equipment_value() == 300


def test_team_state_equipment_value_round_start():
    prov, members = _members_with("m_unRoundStartEquipmentValue")
    state = TeamState(Team.TERRORISTS, lambda team: members, prov)
    assert state.round_start_equipment_value() == 300


def test_team_state_equipment_value_freeze_time_end():
    prov, members = _members_with("m_unFreezetimeEndEquipmentValue")
    state = TeamState(Team.TERRORISTS, lambda team: members, prov)
    assert state.freeze_time_end_equipment_value() == 300


def _resource_members(prop):
    return [
        Player(demo_info_provider=_Provider(
            resource=_entity(prop + ".000", PropertyValue(int_val=100)))),
        Player(demo_info_provider=_Provider(
            resource=_entity(prop + ".000", PropertyValue(int_val=200)))),
    ]


def test_team_state_money_spent_this_round():
    members = _resource_members("m_iCashSpentThisRound")
    state = TeamState(Team.TERRORISTS, lambda team: members, _Provider())
    assert state.money_spent_this_round() == 300


def test_team_state_money_spent_total():
    members = _resource_members("m_iTotalCashSpent")
    state = TeamState(Team.TERRORISTS, lambda team: members, _Provider())
    assert state.money_spent_total() == 300


def test_team_state_id_and_score_source1():
    entity = Entity(1, properties={
        "m_iTeamNum": PropertyValue(int_val=2),
        "m_scoreTotal": PropertyValue(int_val=16),
        "m_szClanTeamname": PropertyValue(string_val="Alpha"),
        "m_szTeamFlagImage": PropertyValue(string_val="DE"),
    })
    state = TeamState(Team.TERRORISTS, None, _Provider(), entity)
    assert state.id() == 2
    assert state.score() == 16
    assert state.clan_name() == "Alpha"
    assert state.flag() == "DE"


def test_team_state_id_and_score_source2():
    entity = Entity(1, properties={
        "m_iTeamNum": PropertyValue(raw=3, s2=True),
        "m_iScore": PropertyValue(raw=13, s2=True),
    })
    state = TeamState(Team.COUNTER_TERRORISTS, None, _Provider(source2=True), entity)
    assert state.id() == 3
    assert state.score() == 13


def test_team_state_without_entity():
    state = TeamState(Team.TERRORISTS, None, _Provider())
    assert state.id() == 0
    assert state.score() == 0
    assert state.clan_name() == ""