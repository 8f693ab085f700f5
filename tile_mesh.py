import numpy as np

from tile_corners import reference_tangent

def tile_mesh_name(tile):
    return f"Tile_{tile.id}_{'P' if tile.is_pentagon else 'H'}_{tile.terrain}"

def build_tile_mesh(tile):
    """
    Fan-triangulate a tile's boundary polygon into drawable geometry.

    Vertex 0 is the height-displaced tile center, followed by one vertex per corner. All positions
    are relative to the center so each tile can be placed on its own.

    Args:
        tile: WorldTile with ordered corner_positions

    Returns:
        vertices: np.ndarray of shape (n + 1, 3)
        triangles: np.ndarray of shape (n, 3), (center, corner i, corner i + 1)
        normals: np.ndarray of shape (n + 1, 3), all equal to the tile normal (flat shading)
        uvs: np.ndarray of shape (n + 1, 2), planar mapping with up = reference_tangent(normal)
            and right = cross(normal, up)
    A tile with fewer than 3 corners gives empty arrays.
    """
    corner_count = len(tile.corner_positions)
    if corner_count < 3:
        return np.zeros((0, 3)), np.zeros((0, 3), dtype=int), np.zeros((0, 3)), np.zeros((0, 2))

    center = tile.surface_position
    vertices = np.vstack([np.zeros(3), np.asarray(tile.corner_positions) - center])

    triangles = np.array([[0, i + 1, (i + 1) % corner_count + 1] for i in range(corner_count)], dtype=int)

    normal = tile.normal
    normals = np.tile(normal, (corner_count + 1, 1))

    # Basic planar mapping on the tangent plane, right = normal x up
    up = reference_tangent(normal)
    right = np.cross(normal, up)
    right /= np.linalg.norm(right)
    uvs = np.column_stack([
        vertices @ right * 0.5 + 0.5,
        vertices @ up * 0.5 + 0.5,
    ])

    return vertices, triangles, normals, uvs
