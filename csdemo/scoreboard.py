"""Scoreboard, economy and rank accessors shared by player objects."""

from __future__ import annotations

from typing import Any, Optional

from .entity import Entity, get_int, get_string, get_uint64
from .flags import DataNotAvailableError, NotSupportedByDemoError
from .teams import Color


class ScoreboardMixin:
    """Scoreboard data of a player.

    Classes using this mixin provide ``demo_info_provider``, ``entity`` and
    ``entity_id`` attributes and a ``player_pawn_entity()`` method.
    """

    demo_info_provider: Any
    entity: Optional[Entity]
    entity_id: int

    def player_pawn_entity(self) -> Optional[Entity]:  # pragma: no cover - overridden
        raise NotImplementedError

    def _is_source2(self) -> bool:
        return bool(self.demo_info_provider.is_source2())

    def _entity_id_str(self) -> str:
        return f"{self.entity_id:03d}"

    def _resource_entity(self) -> Optional[Entity]:
        return self.demo_info_provider.player_resource_entity()

    def _resource_int(self, prop: str) -> int:
        return get_int(self._resource_entity(), f"{prop}.{self._entity_id_str()}")

    def rank_type(self) -> int:
        """Return the rank type the player plays for; -1 if unknown."""
        if self._is_source2():
            return get_int(self.entity, "m_iCompetitiveRankType")
        value = self._resource_entity().property_value(
            "m_iCompetitiveRankType." + self._entity_id_str()
        )
        if value is None:
            return -1
        return value.as_int()

    def rank(self) -> int:
        """Return the player's rank for the current rank type."""
        if self._is_source2():
            return get_int(self.entity, "m_iCompetitiveRanking")
        return self._resource_int("m_iCompetitiveRanking")

    def competitive_wins(self) -> int:
        """Return the player's competitive wins for the current rank type."""
        if self._is_source2():
            return get_int(self.entity, "m_iCompetitiveWins")
        return self._resource_int("m_iCompetitiveWins")

    def money(self) -> int:
        """Return the amount of money in the player's bank."""
        if self._is_source2():
            return get_int(self.entity, "m_pInGameMoneyServices.m_iAccount")
        return get_int(self.entity, "m_iAccount")

    def equipment_value_current(self) -> int:
        """Return the current value of the player's equipment."""
        if self._is_source2():
            return get_uint64(self.player_pawn_entity(), "m_unCurrentEquipmentValue")
        return get_int(self.entity, "m_unCurrentEquipmentValue")

    def equipment_value_round_start(self) -> int:
        """Return the equipment value at round start, before buying."""
        if self._is_source2():
            return get_uint64(self.player_pawn_entity(), "m_unRoundStartEquipmentValue")
        return get_int(self.entity, "m_unRoundStartEquipmentValue")

    def equipment_value_freeze_time_end(self) -> int:
        """Return the equipment value at the end of the freeze time."""
        if self._is_source2():
            return get_uint64(
                self.player_pawn_entity(), "m_unFreezetimeEndEquipmentValue"
            )
        return get_int(self.entity, "m_unFreezetimeEndEquipmentValue")

    def clan_tag(self) -> str:
        """Return the player's individual clan tag."""
        if self._is_source2():
            return get_string(self.entity, "m_szClan")
        return get_string(self._resource_entity(), "m_szClan." + self._entity_id_str())

    def crosshair_code(self) -> str:
        """Return the player's crosshair code, or "" if there is none."""
        if self._is_source2():
            return get_string(self.entity, "m_szCrosshairCodes")
        resource = self._resource_entity()
        if resource is None:
            return ""
        value = resource.property_value("m_szCrosshairCodes." + self._entity_id_str())
        return value.string_val if value is not None else ""

    def ping(self) -> int:
        """Return the player's latency to the server."""
        if self._is_source2():
            return get_uint64(self.entity, "m_iPing")
        return self._resource_int("m_iPing")

    def score(self) -> int:
        """Return the player's scoreboard score."""
        if self._is_source2():
            return get_int(self.entity, "m_iScore")
        return self._resource_int("m_iScore")

    def color(self) -> Color:
        """Return the minimap colour, or Grey if it cannot be determined."""
        try:
            return self.color_or_err()
        except (DataNotAvailableError, NotSupportedByDemoError):
            return Color.Grey

    def color_or_err(self) -> Color:
        """Return the minimap colour.

        Raises DataNotAvailableError if the resource entity does not exist yet
        and NotSupportedByDemoError if the demo has no player colours.
        """
        if self._is_source2():
            return Color(get_int(self.entity, "m_iCompTeammateColor"))
        resource = self._resource_entity()
        if resource is None:
            raise DataNotAvailableError("player resource entity is nil")
        value = resource.property_value("m_iCompTeammateColor." + self._entity_id_str())
        if value is None:
            raise NotSupportedByDemoError(
                "failed to get player color from resource entity"
            )
        return Color(value.int_val)

    def kills(self) -> int:
        """Return the player's kills as shown on the scoreboard."""
        if self._is_source2():
            return get_int(self.entity, "m_pActionTrackingServices.m_iKills")
        return self._resource_int("m_iKills")

    def deaths(self) -> int:
        """Return the player's deaths as shown on the scoreboard."""
        if self._is_source2():
            return get_int(self.entity, "m_pActionTrackingServices.m_iDeaths")
        return self._resource_int("m_iDeaths")

    def assists(self) -> int:
        """Return the player's assists as shown on the scoreboard."""
        if self._is_source2():
            return get_int(self.entity, "m_pActionTrackingServices.m_iAssists")
        return self._resource_int("m_iAssists")

    def mvps(self) -> int:
        """Return the player's MVP awards."""
        if self._is_source2():
            return get_int(self.entity, "m_iMVPs")
        return self._resource_int("m_iMVPs")

    def _s2_optional_int(self, prop: str) -> int:
        value = self.entity.property_value_must(prop)
        if value.raw is None:
            return 0
        return value.as_int()

    def total_damage(self) -> int:
        """Return the total health damage done by the player."""
        if self._is_source2():
            return self._s2_optional_int("m_pActionTrackingServices.m_iDamage")
        return self._resource_int("m_iMatchStats_Damage_Total")

    def utility_damage(self) -> int:
        """Return the total damage done by the player with grenades."""
        if self._is_source2():
            return self._s2_optional_int("m_pActionTrackingServices.m_iUtilityDamage")
        return self._resource_int("m_iMatchStats_UtilityDamage_Total")

    def money_spent_total(self) -> int:
        """Return the money spent by the player in the match."""
        if self._is_source2():
            return get_int(self.entity, "m_pInGameMoneyServices.m_iTotalCashSpent")
        return self._resource_int("m_iTotalCashSpent")

    def money_spent_this_round(self) -> int:
        """Return the money spent by the player in the current round."""
        if self._is_source2():
            return get_int(self.entity, "m_pInGameMoneyServices.m_iCashSpentThisRound")
        return self._resource_int("m_iCashSpentThisRound")