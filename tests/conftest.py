from typing import List, Optional, Tuple

import pytest

from worldscan.cfg import ScannerConfig
from worldscan.core.world import (
    Announcer,
    CameraSink,
    Faction,
    FactionRelation,
    InMemoryWorldObjects,
    LaunchTargeting,
    ObjectKind,
    Quest,
    QuestTarget,
    SpeechPriority,
    WorldObject,
    create_planar_world,
)


class RecordingAnnouncer(Announcer):

    def __init__(self) -> None:
        self.messages: List[Tuple[str, SpeechPriority]] = []

    def speak(self, text: str, priority: SpeechPriority = SpeechPriority.NORMAL) -> None:
        self.messages.append((text, priority))

    @property
    def texts(self) -> List[str]:
        return [text for text, _ in self.messages]

    @property
    def last(self) -> Optional[Tuple[str, SpeechPriority]]:
        return self.messages[-1] if self.messages else None


class RecordingCamera(CameraSink):

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def select(self, world_object, tile: int) -> None:
        self.calls.append(('select', world_object, tile))

    def jump_to(self, tile: int) -> None:
        self.calls.append(('jump_to', tile))

    def orient_north(self) -> None:
        self.calls.append(('orient_north',))


class FixedFuelLaunch(LaunchTargeting):

    def __init__(self, active: bool = True) -> None:
        self._active = active

    @property
    def active(self) -> bool:
        return self._active

    def fuel_cost_announcement(self, distance: float) -> str:
        return f"Fuel: {distance:.0f}"


PLAYER = Faction('Colony', FactionRelation.PLAYER, 'Player', 0)
ALLY = Faction('Union of Ferns', FactionRelation.ALLY, 'Outlander civil', 82)
NEUTRAL = Faction('Kestrel Tribe', FactionRelation.NEUTRAL, '', 15)
HOSTILE = Faction('Ashen Pact', FactionRelation.HOSTILE, 'Pirate gang', -80)


@pytest.fixture
def config() -> ScannerConfig:
    return ScannerConfig.default()


@pytest.fixture
def announcer() -> RecordingAnnouncer:
    return RecordingAnnouncer()


@pytest.fixture
def camera() -> RecordingCamera:
    return RecordingCamera()


@pytest.fixture
def grid_world():
    """10x10 Tundra grid plus one orbit tile (id 100)"""
    return create_planar_world(10, 10, biomes=[['Tundra'] * 10 for _ in range(10)], orbit_tiles=1)


@pytest.fixture
def grid_objects() -> InMemoryWorldObjects:
    home = WorldObject('home', 'Home', 0, ObjectKind.SETTLEMENT, PLAYER)
    ruin = WorldObject('ruin', 'Ruin', 40)
    camp = WorldObject('camp', 'Camp', 41)
    objects = [
        home,
        WorldObject('raiders', 'Raider hold', 2, ObjectKind.SETTLEMENT, HOSTILE),
        WorldObject('ferns', 'Fern town', 5, ObjectKind.SETTLEMENT, ALLY),
        WorldObject('kestrel', 'Kestrel camp', 99, ObjectKind.SETTLEMENT, NEUTRAL),
        WorldObject('orphan', 'Ruined town', 3, ObjectKind.SETTLEMENT, None),
        WorldObject('orbit-base', 'Orbital base', 100, ObjectKind.SETTLEMENT, HOSTILE),
        WorldObject('caravan', 'Caravan', 11, ObjectKind.CARAVAN, PLAYER),
        WorldObject('raid', 'Raiding party', 12, ObjectKind.CARAVAN, HOSTILE),
        ruin,
        camp,
        WorldObject('cache', 'Hidden cache', 42),
        WorldObject('station', 'Station', 100),
    ]
    quests = [
        Quest('Vault', targets=[QuestTarget(world_object=ruin)]),
        Quest('Secret', hidden=True, targets=[QuestTarget(tile=42)]),
        Quest('Finished', ongoing=False, targets=[QuestTarget(world_object=camp)]),
        Quest('Homecoming', targets=[QuestTarget(world_object=home)]),
        Quest('Empty tile', targets=[QuestTarget(tile=50)]),
    ]
    return InMemoryWorldObjects(objects, quests)


@pytest.fixture
def line_world():
    """25 tiles in a row, Desert except single Tundra tiles at x = 5, 10 and 20"""
    row = ['Desert'] * 25
    for x in (5, 10, 20):
        row[x] = 'Tundra'
    return create_planar_world(25, 1, biomes=[row])


@pytest.fixture
def launch() -> FixedFuelLaunch:
    return FixedFuelLaunch()
