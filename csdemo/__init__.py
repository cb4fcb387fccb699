"""Game-state model for Counter-Strike demo files: players, equipment, teams, hostages, infernos, Steam-ID helpers, radar metadata and a bit reader."""

__version__ = "0.1.0"