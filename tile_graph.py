import numpy as np
from collections import defaultdict
from tqdm import tqdm

from icosphere import NUM_BASE_VERTICES

class WorldTile:
    """
    Represents a tile on the sphere (hexagon or pentagon).
    One tile exists per vertex of the subdivided icosahedron.
    """

    """
    Standard functions
    """
    def __init__(self, id, center_position):
        self.id = id  # Unique identifier, equal to the vertex index
        self.center_position = center_position  # 3D coordinates on the sphere [x, y, z]
        self.is_pentagon = id < NUM_BASE_VERTICES  # Only the original icosahedron vertices are pentagons
        self.height_level = 0  # Assigned later by the terrain pass
        self.terrain = None  # Terrain category name, assigned later
        self.color = None  # RGB tuple with values 0-1, assigned later
        self.neighbor_ids = []  # Sorted ids of adjacent tiles
        self.corner_positions = []  # Ordered boundary polygon, populated last
        self.height_scale = 0.0  # Visual displacement per height level, set by the generator

    def __repr__(self):
        return f"WorldTile(id={self.id}, pentagon={self.is_pentagon}, height_level={self.height_level}, terrain={self.terrain}, num_corners={len(self.corner_positions)})"

    def __eq__(self, value):
        # two WorldTiles are equal if they have the same id
        if not isinstance(value, WorldTile):
            return False
        return self.id == value.id

    def __lt__(self, value):
        return self.id < value.id

    def __hash__(self):
        return hash(self.id)

    @property
    def normal(self):
        """Unit outward direction of the tile center."""
        return self.center_position / np.linalg.norm(self.center_position)

    @property
    def surface_position(self):
        """Tile center displaced along its normal by its own height level."""
        return self.center_position + self.normal * self.height_level * self.height_scale

def create_world_tiles(vertices):
    """
    Create one WorldTile per vertex, in vertex index order.
    """
    return [WorldTile(vertex_idx, np.array(position, dtype=float)) for vertex_idx, position in enumerate(vertices)]

def populate_neighbor_ids(tiles, triangles, verbose=False):
    """
    Populate the neighbor lists for each tile from the edges of the triangle mesh.

    Every triangle contributes three undirected edges. A triangle referencing a tile
    id outside [0, len(tiles)) is skipped so the rest of the mesh still gets neighbors.

    Returns:
        skipped: list of indices of triangles that were skipped
    """
    num_tiles = len(tiles)
    neighbor_sets = defaultdict(set)
    skipped = []

    for tri_idx, tri in enumerate(tqdm(triangles, position=0, desc="Finding neighbors", disable=not verbose)):
        v1, v2, v3 = (int(v) for v in tri)
        if not all(0 <= v < num_tiles for v in (v1, v2, v3)):
            skipped.append(tri_idx)
            continue

        neighbor_sets[v1].update((v2, v3))
        neighbor_sets[v2].update((v1, v3))
        neighbor_sets[v3].update((v1, v2))

    for tile in tiles:
        tile.neighbor_ids = sorted(neighbor_sets[tile.id])

    return skipped
