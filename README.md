# csdemo

A game-state model for Counter-Strike demo recordings, covering both the older
Source 1 format and Source 2. It provides the objects that describe a match at
a given moment: players, equipment, teams, hostages, the bomb, grenade
projectiles and infernos. It also provides a bit reader for the packed
integers, floats and strings found in demo data.

## Installation

From a checkout of the project:

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `csdemo.constants` | Entity-handle bit widths, index masks and invalid-handle values for both formats |
| `csdemo.bitread` | `BitReader` for bits, fixed-width ints, varints, zig-zag ints, floats, bytes and strings |
| `csdemo.entity` | `Entity`, `Property`, `PropertyValue`, `PropertyNotFoundError` and the None-safe `get_int`, `get_uint64`, `get_float`, `get_string` and `get_bool` |
| `csdemo.vector` | `Vector`, `Point` and `bounding_center` |
| `csdemo.teams` | `Team` and the minimap `Color` |
| `csdemo.steamid` | Steam-ID conversions between text, 32-bit and 64-bit forms |
| `csdemo.gamerules` | `GamePhase` |
| `csdemo.equipment` | `EquipmentType`, `EquipmentClass`, `ZoomLevel`, `Equipment`, `map_equipment`, `equipment_alternative` and `EQUIPMENT_INDEX_MAPPING` |
| `csdemo.flags` | `PlayerFlags`, `PlayerInfo`, `DataNotAvailableError` and `NotSupportedByDemoError` |
| `csdemo.scoreboard` | `ScoreboardMixin`: kills, deaths, assists, money, rank, ping, colour and more |
| `csdemo.player` | `Player` and the `DemoInfoProvider` protocol |
| `csdemo.common` | `DemoHeader`, `TeamState`, `Bomb`, `GrenadeProjectile` and `TrajectoryEntry` |
| `csdemo.hostage` | `Hostage` and `HostageState` |
| `csdemo.inferno` | `Inferno`, `Fires`, `Fire`, `ConvexHull3D` and `sort_points_clockwise` |
| `csdemo.mapmeta` | `MapMetadata`, `parse_map_metadata`, `get_map_metadata` and `get_map_radar` |

## Examples

### Steam IDs

```python
from csdemo.steamid import (
    convert_steam_id_txt_to_32,
    convert_steam_id_32_to_64,
    convert_steam_id_64_to_32,
)

convert_steam_id_txt_to_32("STEAM_0:1:26343269")   # 52686539
convert_steam_id_txt_to_32("[U:1:52686539]")       # 52686539
convert_steam_id_32_to_64(52686539)                # 76561198012952267
convert_steam_id_64_to_32(76561198012952267)       # 52686539
```

A badly formed text ID raises `ValueError`.

### Equipment

```python
from csdemo.equipment import Equipment, EquipmentType, map_equipment, equipment_alternative

wep = map_equipment("weapon_m4a1_silencer")
str(wep)                                     # "M4A1"
wep.equipment_class()                        # EquipmentClass.RIFLE
map_equipment("weapon_knife_butterfly")      # EquipmentType.KNIFE
map_equipment("asdf")                        # EquipmentType.UNKNOWN
equipment_alternative(EquipmentType.P2000)   # EquipmentType.USP

flash = Equipment(EquipmentType.FLASH)
flash.ammo_in_magazine()                     # 1 for grenades and equipment
```

Every `Equipment` gets a random 63-bit `unique_id()` and a sortable
26-character ULID string from `unique_id2()`. Demos reuse entity ids, and
these ids tell instances apart.

### Reading packed values

```python
from csdemo.bitread import BitReader

with BitReader(b"\xac\x02hello\x00") as reader:
    reader.read_var_int32()   # 300
    reader.read_string()      # "hello"
```

`BitReader` accepts bytes or a binary stream. It reads bits
least-significant first. Reading past the end raises `EOFError`, and reading
after `close()` raises `ValueError`. Closing the reader leaves the underlying
stream open.

### Players, entities and the demo-info provider

The accessors of `Player`, `TeamState`, `Hostage` and `Inferno` read entity
properties. Many of them read different properties depending on the demo
format. They ask a provider object that follows the `DemoInfoProvider`
protocol. The provider reports `is_source2()`, `tick_rate()` and
`ingame_tick()`. It also looks up players, entities, weapons and the player
resource entity.

```python
from csdemo.entity import Entity, PropertyValue
from csdemo.player import Player
from csdemo.vector import Vector


class Provider:
    def is_source2(self): return False
    def tick_rate(self): return 128.0
    def ingame_tick(self): return 0
    def player_resource_entity(self): return None
    def find_player_by_handle(self, handle): return None
    def find_player_by_pawn_handle(self, handle): return None
    def find_weapon_by_entity_id(self, entity_id): return None
    def find_entity_by_handle(self, handle): return None


entity = Entity(
    1,
    origin=Vector(1.0, 2.0, 3.0),
    properties={
        "m_iHealth": PropertyValue(int_val=100),
        "m_fFlags": PropertyValue(int_val=1),
    },
)
player = Player(Provider(), name="alice", entity_id=1, entity=entity)

player.health()              # 100
player.position()            # Vector(x=1.0, y=2.0, z=3.0)
player.flags().on_ground()   # True
player.color()               # Color.Grey, no resource entity yet
```

`player.color_or_err()` raises `DataNotAvailableError` when the player
resource entity does not exist yet. It raises `NotSupportedByDemoError` when
the demo holds no player colours. Reading a property that an entity lacks
through `property_value_must` raises `PropertyNotFoundError`.
`Player.position_eyes()` raises `NotSupportedByDemoError` for Source 2 demos.

### Demo header

```python
from datetime import timedelta
from csdemo.common import DemoHeader

header = DemoHeader(playback_frames=256, playback_ticks=512, playback_time=timedelta(seconds=4))
header.frame_rate()   # 64.0
header.frame_time()   # timedelta(microseconds=15625)
```

Both return zero for a header with no playback time or no frames.

### Infernos

```python
hull = inferno.fires().active().convex_hull_2d()   # clockwise list of Points
hull3d = inferno.fires().convex_hull_3d()          # ConvexHull3D(vertices, faces)
```

For flat, linear or single-point input, `convex_hull_3d()` returns the hull's
vertices with no faces.

### Radar overviews

```python
from csdemo.mapmeta import MapMetadata, parse_map_metadata

meta = MapMetadata(pos_x=-2000, pos_y=3250, scale=5.5)
meta.translate(-1000.0, 2700.0)         # (1000.0, 550.0)
meta.translate_scale(-1000.0, 2700.0)   # pixel coordinates on the radar image

meta = parse_map_metadata('{"de_cache": {"pos_x": "-2000", "pos_y": "3250", "scale": "5.5"}}', "de_cache")
```

`get_map_metadata(name, crc)` and `get_map_radar(name, crc)` download
`<base>/<name>/<crc>/info.json` and `<base>/<name>/<crc>/radar.png`. The
radar image is returned as a Pillow image. The base URL comes from the
`CSDEMO_RADAR_BASE_URL` environment variable; if it is not set, both
functions raise `RuntimeError`. `parse_map_metadata` raises `KeyError` when
the document has no entry for the map.

## What this package does not do

csdemo does not parse demo files and has no event dispatch or handler
registration. It has no command-line tool and draws no heatmaps or trajectory
images. The caller builds the entities and supplies a `DemoInfoProvider`.
The classes here then answer questions about that state. `BitReader` is the
only part that reads raw demo bytes.