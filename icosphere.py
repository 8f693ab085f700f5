import numpy as np
from math import sqrt
from tqdm import tqdm

NUM_BASE_VERTICES = 12
NUM_BASE_TRIANGLES = 20

def create_icosahedron():
    """
    Create an icosahedron centered at the origin with vertices on the unit sphere.
    Returns:
        vertices: np.ndarray of shape (12, 3)
        triangles: np.ndarray of shape (20, 3)
    """
    phi = (1.0 + sqrt(5.0)) / 2.0

    vertices = np.array([
        [-1, phi, 0], [1, phi, 0], [-1, -phi, 0], [1, -phi, 0],
        [0, -1, phi], [0, 1, phi], [0, -1, -phi], [0, 1, -phi],
        [phi, 0, -1], [phi, 0, 1], [-phi, 0, -1], [-phi, 0, 1]
    ], dtype=float)
    vertices /= np.linalg.norm(vertices, axis=1)[:, np.newaxis]

    triangles = np.array([
        [0, 11, 5], [0, 5, 1], [0, 1, 7], [0, 7, 10], [0, 10, 11],
        [1, 5, 9], [5, 11, 4], [11, 10, 2], [10, 7, 6], [7, 1, 8],
        [3, 9, 4], [3, 4, 2], [3, 2, 6], [3, 6, 8], [3, 8, 9],
        [4, 9, 5], [2, 4, 11], [6, 2, 10], [8, 6, 7], [9, 8, 1]
    ], dtype=int)

    return vertices, triangles

def validate_base_mesh(vertices, triangles):
    """
    Check that base data describes an icosahedron (12 vertices, 20 triangles, valid indices).
    Returns the data as (vertices (12, 3) float array, triangles (20, 3) int array).

    Raises ValueError on malformed data; there is no way to recover from it since
    every later stage assumes a closed triangle mesh.
    """
    vertices = np.asarray(vertices, dtype=float)
    if vertices.shape != (NUM_BASE_VERTICES, 3):
        raise ValueError(f"Icosahedron vertex data is incorrect! Expected shape ({NUM_BASE_VERTICES}, 3), found {vertices.shape}.")

    flat_indices = np.asarray(triangles).ravel()
    if flat_indices.size % 3 != 0 or flat_indices.size != NUM_BASE_TRIANGLES * 3:
        raise ValueError(f"Icosahedron triangle definition is incorrect! Expected {NUM_BASE_TRIANGLES * 3} indices, found {flat_indices.size}.")
    if not np.issubdtype(flat_indices.dtype, np.integer):
        raise ValueError("Icosahedron triangle indices must be integers.")
    if flat_indices.min() < 0 or flat_indices.max() >= NUM_BASE_VERTICES:
        raise ValueError(f"Icosahedron triangle indices must reference vertices 0..{NUM_BASE_VERTICES - 1}.")

    return vertices, flat_indices.reshape(-1, 3).astype(int)

def expected_counts(level):
    """
    Closed-form (vertex_count, triangle_count) of an icosahedron subdivided `level` times.
    """
    return 10 * 4 ** level + 2, 20 * 4 ** level

def get_middle_point(vertices, midpoint_cache, p1, p2):
    """
    Return the index of the midpoint between vertices p1 and p2, creating it if needed.

    vertices: list of positions, appended to when a new midpoint is created
    midpoint_cache: dict mapping (smaller_index, larger_index) to the midpoint index
    """
    # Sort points to ensure a consistent key
    key = (min(p1, p2), max(p1, p2))

    if key in midpoint_cache:
        return midpoint_cache[key]

    # Not projected yet; all vertices are normalized once subdivision is done
    midpoint = (vertices[p1] + vertices[p2]) / 2.0
    vertices.append(midpoint)
    new_index = len(vertices) - 1
    midpoint_cache[key] = new_index
    return new_index

def subdivide_icosahedron(vertices, triangles, recursion_level, radius=1.0, midpoint_cache=None, verbose=False):
    """
    Subdivide each triangle of the mesh into 4, recursion_level times.

    Args:
        vertices: np.ndarray of shape (N, 3)
        triangles: np.ndarray of shape (M, 3)
        recursion_level: int - number of times to subdivide each triangle
        radius: float - radius of the sphere the final vertices are projected onto
        midpoint_cache: dict, optional - caller-owned edge midpoint cache, created if omitted
        verbose: bool - show progress bars

    Returns:
        vertices: np.ndarray of shape (10 * 4**k + 2, 3), all at distance `radius` from the origin
        triangles: np.ndarray of shape (20 * 4**k, 3)
        midpoint_cache: the (populated) midpoint cache
    """
    if recursion_level < 0:
        raise ValueError(f"Recursion level must be non-negative, got {recursion_level}.")
    if midpoint_cache is None:
        midpoint_cache = {}

    vertex_list = [np.array(v, dtype=float) for v in vertices]
    triangles = np.asarray(triangles, dtype=int).reshape(-1, 3)

    for _ in tqdm(range(recursion_level), position=0, desc="Subdividing triangles", disable=not verbose):
        new_triangles = []
        for tri in tqdm(triangles, position=1, leave=False, disable=not verbose):
            v1, v2, v3 = (int(v) for v in tri)
            a = get_middle_point(vertex_list, midpoint_cache, v1, v2)
            b = get_middle_point(vertex_list, midpoint_cache, v2, v3)
            c = get_middle_point(vertex_list, midpoint_cache, v3, v1)

            new_triangles.append([v1, a, c])
            new_triangles.append([v2, b, a])
            new_triangles.append([v3, c, b])
            new_triangles.append([a, b, c])
        triangles = np.array(new_triangles, dtype=int)

    vertices = np.array(vertex_list)
    vertices /= np.linalg.norm(vertices, axis=1)[:, np.newaxis]
    vertices *= radius

    return vertices, triangles, midpoint_cache
