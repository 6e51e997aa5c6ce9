"""Tests for the Tile aggregate."""
import pytest
from pydantic import ValidationError

from railtile.decoder import decode
from railtile.errors import UnclassifiedPartError
from railtile.hex_edges import rotate_edge
from railtile.parts import Edge, Label, Path
from railtile.schemas import TileColor
from railtile.tile import Tile

CITY_STRAIGHT = "city=revenue:20;path=a:0,b:_0;path=a:_0,b:3"
TWO_TOWNS = "town=revenue:10;town=revenue:10;path=a:0,b:_0;path=a:_0,b:4;path=a:1,b:_1;path=a:_1,b:3"
TWO_CITIES = "city=revenue:20;city=revenue:20;path=a:0,b:_0;path=a:3,b:_1"


class Company:
    def __init__(self, name, owner=None):
        self.name = name
        self.owner = owner

    def __repr__(self):
        return self.name


@pytest.fixture
def city_tile():
    return Tile.from_code("57", "yellow", CITY_STRAIGHT)


@pytest.fixture
def two_city_tile():
    return Tile.from_code("X1", "yellow", TWO_CITIES)


class TestConstruction:
    def test_collections(self, city_tile):
        assert city_tile.color == TileColor.YELLOW
        assert len(city_tile.cities) == 1
        assert len(city_tile.paths) == 2
        assert city_tile.towns == []
        assert city_tile.junction is None
        assert city_tile.label is None

    def test_nodes_stops_edges(self, city_tile):
        city = city_tile.cities[0]
        assert city_tile.nodes == [city]
        assert city_tile.stops == [city]
        assert city_tile.edges == [Edge(0), Edge(3)]

    def test_parts_indexed_per_class(self):
        tile = Tile.from_code("1", "yellow", TWO_TOWNS)
        assert [t.index for t in tile.towns] == [0, 1]
        assert [p.index for p in tile.paths] == [0, 1, 2, 3]
        assert all(part.tile is tile for part in tile.parts)

    def test_parts_keep_their_tile(self):
        city = Tile.from_code("57", "yellow", CITY_STRAIGHT).cities[0]
        assert city.tile is not None
        assert city.tile.name == "57"
        assert [path.exits for path in city.paths] == [[0], [3]]

    def test_parts_list_is_copied(self):
        parts = decode(CITY_STRAIGHT)
        tile = Tile("57", "yellow", parts)
        tile.add_blocker(Company("Camden"))
        assert len(parts) == 3
        assert len(tile.parts) == 4

    def test_color_from_enum_or_string(self):
        assert Tile("9", TileColor.YELLOW, []).color == Tile("9", "yellow", []).color

    def test_unknown_color_rejected(self):
        with pytest.raises(ValueError):
            Tile("9", "purple", [])

    def test_unclassified_part(self):
        with pytest.raises(UnclassifiedPartError, match="not separated"):
            Tile("bad", "yellow", [Edge(0)])

    def test_options(self):
        tile = Tile.from_code(
            "57", "yellow", CITY_STRAIGHT,
            rotation=2, preprinted=True, index=3, location_name="Philadelphia",
        )
        assert tile.rotation == 2
        assert tile.preprinted
        assert tile.id == "57-3"
        assert tile.location_name == "Philadelphia"

    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError):
            Tile.from_code("57", "yellow", CITY_STRAIGHT, spin=2)

    def test_invalid_rotation_option_rejected(self):
        with pytest.raises(ValidationError):
            Tile.from_code("57", "yellow", CITY_STRAIGHT, rotation=6)

    def test_invalid_rotation_rejected(self):
        with pytest.raises(ValueError):
            Tile("9", "yellow", [], rotation=-1)

    def test_blocks_lay(self):
        assert Tile.from_code("m", "white", "icon=image:mine,blocks_lay:1").blocks_lay
        assert not Tile.from_code("m", "white", "icon=image:mine").blocks_lay

    def test_sorting(self):
        tiles = [
            Tile.from_code("14", "green", ""),
            Tile.from_code("57", "yellow", ""),
            Tile.from_code("9", "yellow", ""),
            Tile.from_code("blank", "white", ""),
        ]
        assert [t.name for t in sorted(tiles)] == ["blank", "9", "57", "14"]


class TestRotation:
    def test_exits_unrotated(self, city_tile):
        assert city_tile.exits == [0, 3]

    def test_rotate_absolute(self, city_tile):
        result = city_tile.rotate(1)
        assert result is city_tile
        assert city_tile.rotation == 1
        assert city_tile.exits == [1, 4]
        assert city_tile.paths[0].a.num == 1

    def test_rotation_keeps_shared_city(self, city_tile):
        city = city_tile.cities[0]
        city_tile.rotate(4)
        assert city_tile.paths[0].b is city
        assert city_tile.paths[1].a is city

    def test_raw_paths_unchanged(self, city_tile):
        city_tile.rotate(2)
        assert city_tile.unrotated_paths[0].a.num == 0

    def test_rotate_out_of_range(self, city_tile):
        with pytest.raises(ValueError):
            city_tile.rotate(6)

    def test_rotation_composition(self):
        tile = Tile.from_code("1", "yellow", TWO_TOWNS)
        for r1 in range(6):
            for r2 in range(6):
                tile.rotate(r1)
                exits_r1 = list(tile.exits)
                tile.rotate((r1 + r2) % 6)
                assert tile.exits == [rotate_edge(e, r2) for e in exits_r1]

    def test_path_rotation_composition(self):
        path = Path(Edge(1), Edge(4))
        for r1 in range(6):
            for r2 in range(6):
                assert path.rotate(r1).rotate(r2).exits == path.rotate((r1 + r2) % 6).exits

    def test_exits_deduplicated(self):
        tile = Tile.from_code("23", "green", "path=a:0,b:3;path=a:0,b:4")
        assert tile.exits == [0, 3, 4]
        assert all(0 <= e < 6 for e in tile.exits)

    def test_next_legal_rotation(self, city_tile):
        city_tile.legal_rotations = [4, 1, 3]
        assert city_tile.rotate().rotation == 1
        assert city_tile.rotate().rotation == 3
        assert city_tile.rotate().rotation == 4
        assert city_tile.rotate().rotation == 1

    def test_no_legal_rotations_stays_put(self, city_tile):
        city_tile.rotate(2)
        assert city_tile.rotate().rotation == 2

    def test_caches_reset_on_rotation(self, city_tile):
        paths = city_tile.paths
        assert city_tile.paths is paths
        city_tile.rotate(1)
        assert city_tile.paths is not paths

    def test_node_paths_follow_rotation(self, city_tile):
        city = city_tile.cities[0]
        assert city.paths[0].a.num == 0
        city_tile.rotate(2)
        assert city.paths[0].a.num == 2


class TestQueries:
    def test_lawson_single_city(self, city_tile):
        assert city_tile.lawson

    def test_lawson_junction(self):
        assert Tile.from_code("j", "gray", "junction;path=a:0,b:_0;path=a:2,b:_0;path=a:4,b:_0").lawson

    def test_lawson_town_needs_more_than_two_edges(self):
        assert not Tile.from_code("3", "yellow", "town=revenue:10;path=a:0,b:_0;path=a:_0,b:1").lawson
        assert Tile.from_code(
            "87", "green", "town=revenue:10;path=a:0,b:_0;path=a:1,b:_0;path=a:2,b:_0;path=a:3,b:_0"
        ).lawson

    def test_not_lawson(self):
        assert not Tile.from_code("9", "yellow", "path=a:0,b:3").lawson
        assert not Tile.from_code("1", "yellow", TWO_TOWNS).lawson

    def test_terrain(self):
        tile = Tile.from_code(
            "m", "white", "upgrade=cost:80,terrain:mountain|water;upgrade=cost:20,terrain:water"
        )
        assert tile.terrain() == ["mountain", "water"]

    def test_revenue_to_render(self, city_tile):
        assert city_tile.revenue_to_render == [20]
        offboard = Tile.from_code("o", "red", "offboard=revenue:yellow_30|brown_60;path=a:0,b:_0")
        assert offboard.revenue_to_render == [{"yellow": 30, "brown": 60}]

    def test_city_town_edges(self):
        tile = Tile.from_code("1", "yellow", TWO_TOWNS)
        assert tile.city_town_edges() == [[0, 4], [1, 3]]


class TestLabel:
    def test_decoded_label(self):
        tile = Tile.from_code("59", "yellow", "city=revenue:40;city=revenue:40;label=OO")
        assert tile.label == Label("OO")

    def test_set_label_from_string(self, city_tile):
        city_tile.label = "Y"
        assert city_tile.label == Label("Y")
        assert city_tile.label.tile is city_tile

    def test_label_resets_caches(self, city_tile):
        paths = city_tile.paths
        city_tile.label = "Y"
        assert city_tile.paths is not paths

    def test_clear_label(self, city_tile):
        city_tile.label = "Y"
        city_tile.label = None
        assert city_tile.label is None


class TestReservations:
    def test_single_city_reservation_goes_to_city(self, city_tile):
        corp = Company("PRR")
        city_tile.add_reservation(corp)
        assert city_tile.cities[0].reservations == [corp]
        assert city_tile.reservations == []

    def test_tile_reservation(self, two_city_tile):
        corp = Company("PRR")
        two_city_tile.add_reservation(corp)
        assert two_city_tile.reservations == [corp]
        assert two_city_tile.reserved_by(corp)
        assert not two_city_tile.reserved_by(Company("B&O"))

    def test_city_reservation_by_index(self, two_city_tile):
        corp = Company("PRR")
        two_city_tile.add_reservation(corp, city=1)
        assert two_city_tile.cities[1].reservations == [corp]
        assert two_city_tile.reservations == []

    def test_reserved_by_owner(self, two_city_tile):
        corp = Company("PRR")
        private = Company("Camden", owner=corp)
        two_city_tile.add_reservation(private)
        assert two_city_tile.reserved_by(corp)

    def test_no_reservations_never_block(self, two_city_tile):
        assert not two_city_tile.token_blocked_by_reservation(Company("PRR"))

    def test_reservations_block_when_slots_exhausted(self, two_city_tile):
        prr, bo, nyc = Company("PRR"), Company("B&O"), Company("NYC")
        two_city_tile.add_reservation(prr)
        assert not two_city_tile.token_blocked_by_reservation(nyc)
        two_city_tile.add_reservation(bo)
        assert two_city_tile.token_blocked_by_reservation(nyc)
        assert not two_city_tile.token_blocked_by_reservation(prr)

    def test_strict_reservation_policy(self):
        tile = Tile.from_code("X1", "yellow", TWO_CITIES, reservation_blocks=True)
        prr, nyc = Company("PRR"), Company("NYC")
        tile.add_reservation(prr)
        assert tile.token_blocked_by_reservation(nyc)
        assert not tile.token_blocked_by_reservation(prr)


class TestBlockers:
    def test_add_blocker(self, city_tile):
        private = Company("Delaware & Raritan")
        blocker = city_tile.add_blocker(private)
        assert blocker.owner is private
        assert blocker.tile is city_tile
        assert city_tile.blockers == [blocker]
        assert blocker in city_tile.parts
        assert city_tile.blocked_by(private)
        assert not city_tile.blocked_by(Company("C&A"))


class TestBorders:
    @pytest.fixture
    def border_tile(self):
        return Tile.from_code("b", "white", "border=edge:0,type:water;border=edge:3,type:mountain,cost:40")

    def test_borders(self, border_tile):
        assert [b.edge for b in border_tile.borders] == [0, 3]
        assert border_tile.borders[1].cost == 40

    def test_remove_and_restore(self, border_tile):
        removed = border_tile.remove_border(0)
        assert removed.edge == 0
        assert [b.edge for b in border_tile.borders] == [3]
        assert border_tile.restore_borders() == [0]
        assert sorted(b.edge for b in border_tile.borders) == [0, 3]

    def test_restore_is_idempotent(self, border_tile):
        border_tile.remove_border(3)
        assert border_tile.restore_borders() == [3]
        assert border_tile.restore_borders() == []
        assert len(border_tile.borders) == 2

    def test_restore_selected_edges(self, border_tile):
        border_tile.remove_border(0)
        border_tile.remove_border(3)
        assert border_tile.restore_borders([3, 5]) == [3]
        assert [b.edge for b in border_tile.borders] == [3]

    def test_remove_missing_border(self, border_tile):
        assert border_tile.remove_border(2) is None
        assert border_tile.original_borders == border_tile.borders
