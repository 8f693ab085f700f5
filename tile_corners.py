"""
Corner resolution for hexasphere tiles.

Every triangle of the subdivided mesh yields one corner: the point where the three tiles
centered on its vertices meet. Corners are computed in three passes:
    1. raw positions (triangle centroids projected onto the sphere)
    2. height resolution (displacement by the lowest of the three tiles)
    3. assignment to tiles and angular ordering into a closed boundary loop
"""
import numpy as np
from collections import defaultdict
from tqdm import tqdm

FLOAT_TOLERANCE = 1e-6  # Tolerance for floating point comparisons

WORLD_UP = np.array([0.0, 1.0, 0.0])
WORLD_FORWARD = np.array([0.0, 0.0, 1.0])

class TileCorners:
    """
    Corner state for one generation run.
    Both maps are keyed by the sorted triple of the ids of the three tiles sharing the corner.
    """
    def __init__(self, raw, resolved):
        self.raw = raw  # dict: key -> position on the sphere
        self.resolved = resolved  # dict: key -> height-displaced position

    def __repr__(self):
        return f"TileCorners(num_corners={len(self.resolved)})"

    def __len__(self):
        return len(self.resolved)

def corner_key(v1, v2, v3):
    return tuple(sorted((int(v1), int(v2), int(v3))))

def compute_raw_corners(vertices, triangles, radius, verbose=False):
    """
    Compute the raw corner position of every triangle.

    Args:
        vertices: np.ndarray of shape (N, 3)
        triangles: np.ndarray of shape (M, 3)
        radius: float - radius of the sphere the corners are projected onto

    Returns:
        raw_corners: dict mapping corner key to position, in triangle order
        skipped: list of indices of triangles referencing missing vertices
    """
    num_vertices = len(vertices)
    raw_corners = {}
    skipped = []

    for tri_idx, tri in enumerate(tqdm(triangles, position=0, desc="Calculating triangle centroids", disable=not verbose)):
        if not all(0 <= int(v) < num_vertices for v in tri):
            skipped.append(tri_idx)
            continue

        key = corner_key(*tri)
        if key in raw_corners:
            continue

        centroid = np.mean(vertices[list(key)], axis=0)
        raw_corners[key] = centroid / np.linalg.norm(centroid) * radius  # Project back to sphere

    return raw_corners, skipped

def resolve_corner_heights(raw_corners, height_levels, height_scale):
    """
    Displace every corner along its own direction by the lowest height level of its three tiles.

    Using the minimum keeps a corner from floating above a neighboring low tile.

    Args:
        raw_corners: dict mapping corner key to raw position
        height_levels: sequence indexed by tile id
        height_scale: float - displacement per height level

    Returns:
        dict mapping corner key to final position
    """
    resolved = {}
    for key, position in raw_corners.items():
        min_height_level = min(height_levels[tile_id] for tile_id in key)
        direction = position / np.linalg.norm(position)
        resolved[key] = position + direction * (min_height_level * height_scale)
    return resolved

def reference_tangent(normal):
    """
    Unit reference direction on the tangent plane of `normal`.
    World up projected onto the plane, or world forward when the normal is (nearly) vertical.
    """
    tangent = WORLD_UP - np.dot(WORLD_UP, normal) * normal
    if np.linalg.norm(tangent) < FLOAT_TOLERANCE:
        tangent = WORLD_FORWARD - np.dot(WORLD_FORWARD, normal) * normal
    return tangent / np.linalg.norm(tangent)

def signed_angle(reference, direction, axis):
    """Angle in radians from reference to direction around axis, in (-pi, pi]."""
    return np.arctan2(np.dot(np.cross(reference, direction), axis), np.dot(reference, direction))

def order_corners(center, corners):
    """
    Order corner positions into a closed loop around the tile center.

    Corners are sorted by signed angle around the outward normal, which gives a counter-clockwise
    loop seen from outside the sphere. Equal angles keep their input order.
    Fewer than 3 corners cannot form a polygon and are returned as given.
    """
    if len(corners) < 3:
        return list(corners)

    normal = center / np.linalg.norm(center)
    reference = reference_tangent(normal)

    angles = []
    for corner in corners:
        offset = corner - center
        # Project onto tangent plane
        offset = offset - np.dot(offset, normal) * normal
        angles.append(signed_angle(reference, offset, normal))

    order = sorted(range(len(corners)), key=lambda i: angles[i])
    return [corners[i] for i in order]

def assign_tile_corners(tiles, corners, verbose=False):
    """
    Collect each tile's corners and store them as its ordered boundary polygon.

    tiles: list of WorldTile, indexed by id
    corners: dict mapping corner key to final position
    """
    corners_by_tile_id = defaultdict(list)
    for key, position in corners.items():
        for tile_id in key:
            corners_by_tile_id[tile_id].append(position)

    for tile in tqdm(tiles, position=0, desc="Ordering tile corners", disable=not verbose):
        tile.corner_positions = order_corners(tile.center_position, corners_by_tile_id[tile.id])
