"""
Imports
"""
import numpy as np
import time

from icosphere import create_icosahedron, validate_base_mesh, subdivide_icosahedron
from tile_graph import create_world_tiles, populate_neighbor_ids
from terrain import create_rng, assign_terrain
from tile_corners import TileCorners, compute_raw_corners, resolve_corner_heights, assign_tile_corners
from tile_mesh import build_tile_mesh, tile_mesh_name

"""
CONSTANTS
"""
# Globe generation parameters
DEFAULT_SEED = 0
DEFAULT_RADIUS = 5.0
DEFAULT_SUBDIVISION_LEVEL = 2
DEFAULT_HEIGHT_SCALE = 0.1  # Radial displacement per height level, visual only

# Bounds output size: level 6 is already 40962 tiles
MIN_SUBDIVISION_LEVEL = 0
MAX_SUBDIVISION_LEVEL = 6


"""
Classes
"""
class Hexasphere:
    """
    Creates a sphere tiled with tiles (hexagons and 12 pentagons)
    The tile locations are generated by subdividing an icosahedron and then taking the dual
    of the triangular mesh. Each tile gets a seeded height level and terrain category, and
    an ordered boundary polygon whose corners respect the heights of the tiles sharing them.
    """

    """
    Standard functions
    """
    def __init__(self, base_vertices=None, base_triangles=None, verbose=False):
        if base_vertices is None or base_triangles is None:
            base_vertices, base_triangles = create_icosahedron()
        self.base_vertices = base_vertices
        self.base_triangles = base_triangles
        self.verbose = verbose
        self._reset()

    def __repr__(self):
        return f"Hexasphere(num_tiles={len(self.world_tiles)}, seed={self.seed}, radius={self.radius}, subdivision_level={self.subdivision_level})"

    def _reset(self):
        self.seed = None
        self.radius = None
        self.subdivision_level = None
        self.height_scale = None
        self.vertices = None
        self.triangles = None
        self.midpoint_cache = None
        self.corners = None
        self.world_tiles = []  # list of all WorldTile objects on the sphere, indexed by id
        self.integrity_warnings = []  # messages for input anomalies skipped during generation

    def _log(self, message):
        if self.verbose:
            print(message)

    """
    Generating the tiles
    """
    def generate(self, seed=DEFAULT_SEED, radius=DEFAULT_RADIUS, subdivision_level=DEFAULT_SUBDIVISION_LEVEL, height_scale=DEFAULT_HEIGHT_SCALE):
        """
        Run the full pipeline, discarding anything generated before.

        The new world is only stored once every stage has finished, so a failed call
        leaves the previous world untouched.

        Args:
            seed: int - seed for the terrain generator, any integer
            radius: float - radius of the sphere
            subdivision_level: int - number of times the icosahedron is subdivided (0 to 6)
            height_scale: float - radial displacement per height level

        Returns:
            list of WorldTile, indexed by id
        """
        check_generation_parameters(seed, radius, subdivision_level, height_scale)
        base_vertices, base_triangles = validate_base_mesh(self.base_vertices, self.base_triangles)
        radius = float(radius)
        height_scale = float(height_scale)

        self._log("\tSubdividing icosahedron...")
        start_time = time.time()
        vertices, triangles, midpoint_cache = subdivide_icosahedron(
            base_vertices, base_triangles, subdivision_level, radius=radius, verbose=self.verbose)
        self._log(f"\tSubdivision took {time.time() - start_time:.2f} seconds.")

        world_tiles, corners, integrity_warnings = self.build_tiles(vertices, triangles, seed, radius, height_scale)

        self._reset()
        self.seed = seed
        self.radius = radius
        self.subdivision_level = subdivision_level
        self.height_scale = height_scale
        self.vertices = vertices
        self.triangles = triangles
        self.midpoint_cache = midpoint_cache
        self.world_tiles = world_tiles
        self.corners = corners
        self.integrity_warnings = integrity_warnings

        self._log(f"Generated Hexasphere: {len(self.world_tiles)} tiles. (Subdivision level: {subdivision_level}, Seed: {seed})")
        return self.world_tiles

    def build_tiles(self, vertices, triangles, seed, radius, height_scale):
        """
        Build tiles, terrain and corners for a subdivided mesh without storing anything on the sphere.

        Triangles referencing missing vertices are skipped; each skip is reported as a message.

        Returns:
            world_tiles: list of WorldTile, indexed by id
            corners: TileCorners
            integrity_warnings: list of str
        """
        integrity_warnings = []

        def warn(message):
            integrity_warnings.append(message)
            self._log(f"\tWarning: {message}")

        self._log("\tBuilding tile graph...")
        start_time = time.time()
        world_tiles = create_world_tiles(vertices)
        for tile in world_tiles:
            tile.height_scale = height_scale
        for tri_idx in populate_neighbor_ids(world_tiles, triangles, verbose=self.verbose):
            warn(f"Invalid vertex index found in triangle {tri_idx}. Skipping neighbor assignment for this triangle.")
        self._log(f"\tTile graph took {time.time() - start_time:.2f} seconds.")

        self._log("\tAssigning terrain...")
        start_time = time.time()
        assign_terrain(world_tiles, create_rng(seed), verbose=self.verbose)
        self._log(f"\tTerrain assignment took {time.time() - start_time:.2f} seconds.")

        # Corners need every height level, so this always runs after terrain assignment
        self._log("\tResolving tile corners...")
        start_time = time.time()
        raw_corners, skipped = compute_raw_corners(vertices, triangles, radius, verbose=self.verbose)
        for tri_idx in skipped:
            warn(f"Invalid vertex index found in triangle {tri_idx}. Skipping corner for this triangle.")
        height_levels = [tile.height_level for tile in world_tiles]
        corners = TileCorners(raw_corners, resolve_corner_heights(raw_corners, height_levels, height_scale))
        assign_tile_corners(world_tiles, corners.resolved, verbose=self.verbose)
        self._log(f"\tCorner resolution took {time.time() - start_time:.2f} seconds.")

        return world_tiles, corners, integrity_warnings

    """
    Accessing the tiles
    """
    def get_tile(self, tile_id):
        return self.world_tiles[tile_id]

    def get_neighbors(self, tile):
        """
        Get the WorldTile objects adjacent to a tile.
        """
        return [self.world_tiles[neighbor_id] for neighbor_id in tile.neighbor_ids]

    def build_tile_mesh(self, tile):
        return build_tile_mesh(tile)

    def build_tile_meshes(self):
        """
        Build the fan-triangulated mesh of every tile.

        Returns:
            dict mapping mesh name (eg. "Tile_12_H_grass") to (vertices, triangles, normals, uvs)
        """
        self._log(f"Generating meshes for {len(self.world_tiles)} tiles...")
        meshes = {}
        for tile in self.world_tiles:
            meshes[tile_mesh_name(tile)] = build_tile_mesh(tile)
        self._log("Finished generating tile meshes.")
        return meshes

    """Testing and debugging"""
    def print_geometry_statistics(self):
        """
        Print statistics about the hexagonal grid.
        """
        num_tiles = len(self.world_tiles)
        num_pentagons = sum(1 for t in self.world_tiles if t.is_pentagon)
        num_hexagons = num_tiles - num_pentagons
        terrain_counts = {}
        for t in self.world_tiles:
            terrain_counts[t.terrain] = terrain_counts.get(t.terrain, 0) + 1
        distances = np.linalg.norm(self.vertices, axis=1) if num_tiles else np.zeros(1)

        print(f"Total tiles (including pentagons): {num_tiles}")
        print(f"Number of pentagons: {num_pentagons}")
        print(f"Number of hexagons: {num_hexagons}")
        print(f"Number of triangles: {len(self.triangles) if self.triangles is not None else 0}")
        print(f"Number of corners: {len(self.corners) if self.corners is not None else 0}")
        print(f"Max distance of tile center from origin: {distances.max()}")
        print(f"Min distance of tile center from origin: {distances.min()}")
        for terrain, count in sorted(terrain_counts.items(), key=lambda item: str(item[0])):
            print(f"Tiles with terrain {terrain}: {count}")
        print(f"Integrity warnings: {len(self.integrity_warnings)}")

def _is_integer(value):
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)

def _is_finite_number(value):
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool) and np.isfinite(value)

def check_generation_parameters(seed, radius, subdivision_level, height_scale):
    """
    Raise ValueError if a generation parameter is out of range.
    """
    if not _is_integer(seed):
        raise ValueError(f"Seed must be an integer, got {seed!r}.")
    if not _is_integer(subdivision_level):
        raise ValueError(f"Subdivision level must be an integer, got {subdivision_level!r}.")
    if not MIN_SUBDIVISION_LEVEL <= subdivision_level <= MAX_SUBDIVISION_LEVEL:
        raise ValueError(f"Subdivision level must be between {MIN_SUBDIVISION_LEVEL} and {MAX_SUBDIVISION_LEVEL}, got {subdivision_level}.")
    if not _is_finite_number(radius) or radius <= 0:
        raise ValueError(f"Radius must be a finite positive number, got {radius!r}.")
    if not _is_finite_number(height_scale) or height_scale < 0:
        raise ValueError(f"Height scale must be a finite non-negative number, got {height_scale!r}.")

"""
Main execution
"""
def main():
    print("Creating hexasphere...")
    start_time = time.time()
    hexasphere = Hexasphere(verbose=True)
    hexasphere.generate(seed=DEFAULT_SEED, radius=DEFAULT_RADIUS, subdivision_level=DEFAULT_SUBDIVISION_LEVEL, height_scale=DEFAULT_HEIGHT_SCALE)
    end_time = time.time()
    print(f"Hexasphere creation took {end_time - start_time:.2f} seconds.")

    print("Printing geometry statistics...")
    hexasphere.print_geometry_statistics()

    print("Building tile meshes...")
    start_time = time.time()
    meshes = hexasphere.build_tile_meshes()
    end_time = time.time()
    print(f"Built {len(meshes)} tile meshes in {end_time - start_time:.2f} seconds.")

if __name__ == '__main__':
    main()
