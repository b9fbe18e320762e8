import logging
import random
from dataclasses import replace

import pytest

from dungeon_layout import (
    BSPGenerator,
    DungeonGenerationError,
    InvalidConfiguration,
    generate,
)
from dungeon_layout.generators.bsp import DEFAULT_CONFIG, MergeAnchor, validate_config
from tests.layout_test_utils import reachable_rooms, total_leaf_area


def test_scenario_leaves_tile_region(scenario_layout):
    assert total_leaf_area(scenario_layout) == 100 * 100
    for i, leaf in enumerate(scenario_layout.leaves):
        for other in scenario_layout.leaves[i + 1:]:
            assert not leaf.intersects(other)


def test_scenario_one_room_per_leaf(scenario_layout):
    assert len(scenario_layout.rooms) == len(scenario_layout.leaves)
    for room, leaf in zip(scenario_layout.rooms, scenario_layout.leaves):
        assert room.leaf == leaf
        assert leaf.contains_rect(room.bounds)
        assert room.x - leaf.x >= 2 and room.y - leaf.y >= 2
        assert leaf.x2 - room.bounds.x2 >= 2 and leaf.y2 - room.bounds.y2 >= 2


def test_scenario_rooms_all_reachable(scenario_layout):
    assert reachable_rooms(scenario_layout) == {room.id for room in scenario_layout.rooms}


def test_scenario_corridor_segments_are_one_tile_thick(scenario_layout):
    assert scenario_layout.corridors
    for segment in scenario_layout.corridors:
        assert min(segment.width, segment.height) == 1
    assert len(scenario_layout.corridors) == sum(len(c.path) for c in scenario_layout.connections)


def test_scenario_edges_match_connections(scenario_layout):
    assert len(scenario_layout.edges) == len(scenario_layout.connections)
    for (a, b), corridor in zip(scenario_layout.edges, scenario_layout.connections):
        assert (corridor.start_room_id, corridor.end_room_id) == (a, b)
        assert a != b


def test_connected_rooms_lookup(scenario_layout):
    room = scenario_layout.rooms[0]
    neighbors = scenario_layout.connected_rooms(room)
    assert neighbors
    for other in neighbors:
        assert room in scenario_layout.connected_rooms(other)


def test_same_seed_same_layout():
    first = generate(120, 80, min_leaf_size=8, max_leaf_size=24, padding=1, seed=2024)
    second = generate(120, 80, min_leaf_size=8, max_leaf_size=24, padding=1, seed=2024)
    assert first.to_dict() == second.to_dict()


def test_different_seeds_differ():
    first = generate(120, 80, min_leaf_size=8, max_leaf_size=24, padding=1, seed=1)
    second = generate(120, 80, min_leaf_size=8, max_leaf_size=24, padding=1, seed=2)
    assert first.to_dict()['leaves'] != second.to_dict()['leaves']


def test_missing_seed_is_recorded():
    layout = generate(60, 60, min_leaf_size=10, max_leaf_size=20, padding=1)
    assert isinstance(layout.seed, int)
    assert layout.config['seed'] == layout.seed
    replay = generate(60, 60, min_leaf_size=10, max_leaf_size=20, padding=1, seed=layout.seed)
    assert replay.to_dict() == layout.to_dict()


def test_max_leaf_zero_single_room():
    layout = generate(50, 40, min_leaf_size=10, max_leaf_size=0, padding=2, seed=3)
    assert len(layout.leaves) == 1
    assert len(layout.rooms) == 1
    assert layout.corridors == []
    assert layout.edges == []


def test_origin_offsets_shift_everything():
    layout = generate(64, 48, min_leaf_size=8, max_leaf_size=20, padding=1, seed=9,
                      origin_x=-32, origin_y=-24)
    assert layout.bounds.x == -32 and layout.bounds.y == -24
    for leaf in layout.leaves:
        assert layout.bounds.contains_rect(leaf)
    assert total_leaf_area(layout) == 64 * 48


def test_zero_padding_and_threshold():
    layout = generate(80, 80, min_leaf_size=10, max_leaf_size=25, padding=0, seed=5,
                      adjacency_threshold=0)
    assert len(layout.edges) == len(layout.rooms) - 1
    assert all(c.reason == "merge" for c in layout.connections)
    assert reachable_rooms(layout) == {room.id for room in layout.rooms}


def test_component_merge_anchor_option():
    layout = generate(100, 100, min_leaf_size=10, max_leaf_size=30, padding=2, seed=42,
                      merge_anchor="component")
    assert layout.config['merge_anchor'] == "component"
    assert reachable_rooms(layout) == {room.id for room in layout.rooms}


@pytest.mark.parametrize("kwargs", [
    dict(region_width=0),
    dict(region_height=-5),
    dict(min_leaf_size=-1),
    dict(max_leaf_size=-1),
    dict(padding=-2),
    dict(region_width=10.5),
    dict(padding=True),
    dict(min_leaf_size="10"),
    dict(seed="abc"),
])
def test_invalid_parameters_rejected(kwargs):
    params = dict(region_width=100, region_height=100, min_leaf_size=10,
                  max_leaf_size=30, padding=2)
    params.update(kwargs)
    with pytest.raises(InvalidConfiguration):
        generate(**params)


@pytest.mark.parametrize("options", [
    dict(adjacency_threshold=-1),
    dict(adjacency_threshold="near"),
    dict(merge_anchor="everywhere"),
    dict(wall_thickness=2),
])
def test_invalid_options_rejected(options):
    with pytest.raises(InvalidConfiguration):
        generate(100, 100, 10, 30, 2, seed=1, **options)


def test_invalid_configuration_is_value_error():
    with pytest.raises(ValueError):
        BSPGenerator({'map_width': 0})
    assert issubclass(InvalidConfiguration, DungeonGenerationError)


def test_validate_config_fills_defaults():
    config = validate_config({'map_width': 40, 'merge_anchor': MergeAnchor.COMPONENT})
    assert config['map_width'] == 40
    assert config['map_height'] == DEFAULT_CONFIG['map_height']
    assert config['merge_anchor'] == "component"


def test_unknown_config_key_rejected():
    with pytest.raises(InvalidConfiguration, match="room_count"):
        validate_config({'room_count': 12})


def test_generator_defaults_threshold_to_min_leaf_size():
    generator = BSPGenerator({'min_leaf_size': 12})
    assert generator.adjacency_threshold == 12
    assert generator.merge_anchor == MergeAnchor.START


def test_layout_stats(scenario_layout):
    generator = BSPGenerator({'seed': 42})
    layout = generator.generate()
    stats = generator.get_layout_stats()
    assert layout.to_dict() == scenario_layout.to_dict()
    assert stats['room_count'] == len(layout.rooms)
    assert stats['leaf_count'] == len(layout.leaves)
    assert stats['corridor_count'] == stats['adjacent_links'] + stats['merge_links']
    assert stats['corridor_segments'] == len(layout.corridors)
    assert stats['min_connections'] >= 1
    assert stats['tree_depth'] >= 1
    assert stats['partition_passes'] >= 2


def test_stats_empty_before_generate():
    assert BSPGenerator().get_layout_stats() == {}


def test_export_requires_generate():
    with pytest.raises(RuntimeError):
        BSPGenerator().export_layout()


def test_export_layout_contents():
    generator = BSPGenerator({'map_width': 60, 'map_height': 60, 'seed': 11})
    generator.generate()
    export = generator.export_layout()
    assert export['seed'] == 11
    assert len(export['rooms']) == export['stats']['room_count']
    assert {'id', 'bounds', 'leaf', 'connected_to'} <= set(export['rooms'][0])


def test_generation_logs_summary(caplog):
    with caplog.at_level(logging.INFO, logger="dungeon_layout"):
        generate(60, 60, min_leaf_size=10, max_leaf_size=20, padding=1, seed=4)
    assert any("Generation complete" in r.getMessage() for r in caplog.records)


def test_injected_rng_records_no_seed():
    first = BSPGenerator({'map_width': 80, 'map_height': 60}).generate(rng=random.Random(77))
    second = BSPGenerator({'map_width': 80, 'map_height': 60}).generate(rng=random.Random(77))
    assert first.seed is None
    assert first.config['seed'] is None
    assert first.to_dict() == second.to_dict()


def test_injected_rng_ignores_configured_seed():
    layout = BSPGenerator({'seed': 42}).generate(rng=random.Random(5))
    assert layout.seed is None


def test_adjacency_built_once(scenario_layout):
    adjacency = scenario_layout.adjacency()
    assert scenario_layout.adjacency() is adjacency
    for room in scenario_layout.rooms:
        assert [r.id for r in scenario_layout.connected_rooms(room)] == adjacency[room.id]


def test_replaced_layout_rebuilds_adjacency(scenario_layout):
    scenario_layout.adjacency()
    trimmed = replace(scenario_layout, edges=[])
    assert all(ids == [] for ids in trimmed.adjacency().values())
    assert scenario_layout.adjacency()[0]
